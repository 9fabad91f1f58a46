"""
Preferences module data models.
"""

from typing import Optional

from pydantic import BaseModel, Field


class PlayerSettings(BaseModel):
    """Toggles shown on the settings screen. Unset toggles read as on."""

    notifications_enabled: bool = True
    sound_enabled: bool = True


class UpdateSettingsRequest(BaseModel):
    """Partial update; omitted toggles keep their stored value."""

    notifications_enabled: Optional[bool] = Field(None, description="Push notifications on or off")
    sound_enabled: Optional[bool] = Field(None, description="Game sounds on or off")

"""
Settings API endpoints.

Reads and flips the per-player toggles. Turning notifications on schedules
the evening reminder; turning them off cancels pending reminders.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_current_player, get_notification_service, get_preference_store
from modules.notifications.service import NotificationService
from modules.users.models import User

from .interfaces import IPreferenceStore
from .keys import notifications_enabled_key, parse_flag, sound_enabled_key
from .models import PlayerSettings, UpdateSettingsRequest

router = APIRouter()


async def _load(preferences: IPreferenceStore, user_id: str) -> PlayerSettings:
    return PlayerSettings(
        notifications_enabled=parse_flag(
            await preferences.get(notifications_enabled_key(user_id)), default=True
        ),
        sound_enabled=parse_flag(await preferences.get(sound_enabled_key(user_id)), default=True),
    )


@router.get("", response_model=PlayerSettings)
async def read_settings(
    player: User = Depends(get_current_player),
    preferences: IPreferenceStore = Depends(get_preference_store),
) -> PlayerSettings:
    """Get the caller's settings toggles."""
    return await _load(preferences, player.id)


@router.put("", response_model=PlayerSettings)
async def update_settings(
    request: UpdateSettingsRequest,
    player: User = Depends(get_current_player),
    preferences: IPreferenceStore = Depends(get_preference_store),
    notifications: NotificationService = Depends(get_notification_service),
) -> PlayerSettings:
    """Update any of the caller's settings toggles."""
    if request.notifications_enabled is not None:
        await notifications.update_settings(player.id, request.notifications_enabled)
    if request.sound_enabled is not None:
        await preferences.set(sound_enabled_key(player.id), str(request.sound_enabled).lower())
    return await _load(preferences, player.id)

"""
Preference store interface.

A flat string key-value store for feature toggles (notifications, sound,
theme) and soft counters (ad rewards, daily plays). Values are strings,
mirroring the device key-value storage the mobile client uses.
"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class IPreferenceStore(Protocol):
    """Interface for key-value preferences."""

    async def get(self, key: str) -> Optional[str]:
        """Get a value, or None if the key is unset."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Set a value."""
        ...

    async def remove(self, key: str) -> None:
        """Remove a key; removing a missing key is not an error."""
        ...

"""
Preference Repository Interface (Port).

This module defines the abstract interface for the external key-value store
that holds per-context timer preferences (e.g. the audio mode of the challenge
timer and of the generic training timer under distinct keys).
"""
from typing import Optional, Protocol


class PreferenceRepository(Protocol):
    """
    Abstract interface for string key-value preference persistence.
    """

    def get(self, key: str) -> Optional[str]:
        """
        Read a stored preference.

        Args:
            key: Context-specific preference key

        Returns:
            The stored value, or None when the key was never written
        """
        ...

    def set(self, key: str, value: str) -> None:
        """
        Write a preference, replacing any previous value.

        Args:
            key: Context-specific preference key
            value: Value to store
        """
        ...

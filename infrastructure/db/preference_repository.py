"""
Supabase implementation of PreferenceRepository.

Preferences live in a `user_preferences` table with one row per
(profile_id, key). Without a profile id the rows are device-wide.
"""
import logging
from typing import Optional

from supabase import Client

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "user_preferences"
ANONYMOUS_PROFILE = "anonymous"


class SupabasePreferenceRepository:
    """
    Supabase implementation of PreferenceRepository protocol.

    Reads and writes string values keyed by preference key, scoped to a
    profile.
    """

    def __init__(
        self,
        client: Client,
        profile_id: Optional[str] = None,
        table: str = DEFAULT_TABLE,
    ):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
            profile_id: Owner of the preferences (device-wide when None)
            table: Table name
        """
        self._client = client
        self._profile_id = profile_id or ANONYMOUS_PROFILE
        self._table = table

    def get(self, key: str) -> Optional[str]:
        result = (
            self._client.table(self._table)
            .select("value")
            .eq("profile_id", self._profile_id)
            .eq("key", key)
            .limit(1)
            .execute()
        )
        rows = result.data or []
        if not rows:
            return None
        return rows[0].get("value")

    def set(self, key: str, value: str) -> None:
        self._client.table(self._table).upsert(
            {"profile_id": self._profile_id, "key": key, "value": value},
            on_conflict="profile_id,key",
        ).execute()
        logger.info(f"Stored preference {key}={value} for {self._profile_id}")

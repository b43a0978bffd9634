"""
Infrastructure Database Layer.

Supabase-backed implementations of the repository interfaces defined in
application.ports.

Usage:
    from supabase import create_client
    from infrastructure.db import SupabasePreferenceRepository

    client = create_client(SUPABASE_URL, SUPABASE_KEY)
    preferences = SupabasePreferenceRepository(client, profile_id="user-1")
"""

from infrastructure.db.preference_repository import SupabasePreferenceRepository

__all__ = [
    "SupabasePreferenceRepository",
]

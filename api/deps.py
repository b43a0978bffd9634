"""
FastAPI Dependency Providers for the timer API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- The preference repository is Supabase-backed when credentials are
  configured and YAML-file-backed otherwise
- The session registry is a process-wide singleton; sessions live in memory

Usage in routers:
    from api.deps import get_session_registry
    from backend.services.session_registry import TimerSessionRegistry

    @router.get("/timer/sessions/{session_id}")
    async def get_session(
        session_id: str,
        registry: TimerSessionRegistry = Depends(get_session_registry),
    ):
        return registry.get(session_id).to_dict()

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_session_registry] = lambda: registry_with_fake_clock
"""

import logging
import os
from functools import lru_cache
from typing import Optional

from fastapi import Depends
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import ClockFactory, PreferenceRepository

# Concrete implementations
from infrastructure import (
    AsyncioClock,
    SupabasePreferenceRepository,
    YamlPreferenceRepository,
)

from backend.services.session_registry import TimerSessionRegistry
from backend.settings import Settings, get_settings as _get_settings

logger = logging.getLogger(__name__)

_session_registry: Optional[TimerSessionRegistry] = None


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


# =============================================================================
# Repository Providers
# =============================================================================


def get_preference_repo(
    settings: Settings = Depends(get_settings),
) -> PreferenceRepository:
    """
    Get PreferenceRepository implementation.

    Returns a SupabasePreferenceRepository when Supabase is configured,
    otherwise a YamlPreferenceRepository on settings.preferences_file.
    Preferences are device-wide: every client of this deployment reads and
    writes the rows of settings.preference_profile_id.

    Returns:
        PreferenceRepository: Storage for the per-context audio mode
    """
    client = get_supabase_client()
    if client is not None:
        return SupabasePreferenceRepository(
            client,
            profile_id=settings.preference_profile_id,
            table=settings.preference_table,
        )
    return YamlPreferenceRepository(os.path.expanduser(settings.preferences_file))


# =============================================================================
# Engine Providers
# =============================================================================


def get_clock_factory() -> ClockFactory:
    """
    Get the factory used to create one clock per timer session.

    Returns:
        ClockFactory: AsyncioClock (ticks on the running event loop)
    """
    return AsyncioClock


def get_session_registry(
    settings: Settings = Depends(get_settings),
    clock_factory: ClockFactory = Depends(get_clock_factory),
    preferences: PreferenceRepository = Depends(get_preference_repo),
) -> TimerSessionRegistry:
    """
    Get the process-wide TimerSessionRegistry.

    Created on first use with the providers above; later calls return the
    same instance so sessions survive across requests.

    Returns:
        TimerSessionRegistry: Registry of live timer sessions
    """
    global _session_registry
    if _session_registry is None:
        _session_registry = TimerSessionRegistry(
            settings,
            clock_factory,
            preferences=preferences,
        )
        logger.info("Timer session registry created")
    return _session_registry


def reset_session_registry() -> None:
    """Tear down all sessions and drop the registry (shutdown and tests)."""
    global _session_registry
    if _session_registry is not None:
        _session_registry.close_all()
    _session_registry = None


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    # Repositories
    "get_preference_repo",
    # Engine
    "get_clock_factory",
    "get_session_registry",
    "reset_session_registry",
]

"""
API package for the Aerial Timer API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
- schemas/: request and response models
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_preference_repo,
    get_clock_factory,
    get_session_registry,
    reset_session_registry,
)

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

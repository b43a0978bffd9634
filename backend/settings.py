"""
Centralized settings configuration using Pydantic BaseSettings.

All environment variables are defined here with types, defaults, and validation.
Use get_settings() for dependency injection compatibility in FastAPI.

Usage:
    from backend.settings import get_settings, Settings

    # In FastAPI endpoints (dependency injection)
    @app.get("/")
    def read_root(settings: Settings = Depends(get_settings)):
        return {"environment": settings.environment}

    # Direct access (module-level)
    settings = get_settings()
    print(settings.preparation_seconds)
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from domain.models import AudioMode


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production, test",
    )

    # -------------------------------------------------------------------------
    # Preference storage
    # -------------------------------------------------------------------------
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (preferences table)",
    )
    supabase_service_role_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key (full access)",
    )
    supabase_anon_key: Optional[str] = Field(
        default=None,
        description="Supabase anonymous key (limited access)",
    )
    preference_table: str = Field(
        default="user_preferences",
        description="Supabase table holding timer preferences",
    )
    preference_profile_id: Optional[str] = Field(
        default=None,
        description=(
            "Profile the Supabase preference rows belong to. The API serves one "
            "profile per deployment, so every client shares its audio modes "
            "(anonymous when unset)"
        ),
    )
    preferences_file: str = Field(
        default="~/.aerial-timer/preferences.yaml",
        description="YAML preferences file used when Supabase is not configured",
    )

    @property
    def supabase_key(self) -> Optional[str]:
        """Get the best available Supabase key (service role preferred)."""
        return self.supabase_service_role_key or self.supabase_anon_key

    # -------------------------------------------------------------------------
    # Playback
    # -------------------------------------------------------------------------
    tick_interval_ms: int = Field(
        default=1000,
        gt=0,
        description="Clock period in milliseconds",
    )
    preparation_seconds: int = Field(
        default=10,
        gt=0,
        description="Lead-in countdown before an exercise segment",
    )
    session_idle_ttl_seconds: int = Field(
        default=3600,
        gt=0,
        description="Remote sessions not accessed for this long are torn down",
    )
    completed_session_ttl_seconds: int = Field(
        default=300,
        ge=0,
        description="Completed remote sessions are kept this long for a final poll",
    )

    # -------------------------------------------------------------------------
    # Audio cues
    # -------------------------------------------------------------------------
    default_audio_mode: str = Field(
        default=AudioMode.MINIMAL_BEEP.value,
        description="Audio mode used when no valid preference is stored",
    )
    beep_window_seconds: int = Field(
        default=5,
        ge=0,
        description="Countdown beeps during the last N seconds of each phase",
    )
    ready_tone_hz: float = Field(default=880.0, gt=0)
    exercise_tone_hz: float = Field(default=1000.0, gt=0)
    rest_tone_hz: float = Field(default=600.0, gt=0)
    completion_tone_hz: float = Field(default=1500.0, gt=0)
    tone_duration_ms: int = Field(
        default=150,
        ge=50,
        le=500,
        description="Length of one countdown pulse",
    )
    tone_volume: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Tone volume 0.0-1.0",
    )

    # -------------------------------------------------------------------------
    # Narration
    # -------------------------------------------------------------------------
    default_language: str = Field(
        default="en",
        description="Narration language when a session does not choose one",
    )
    voice_countdown_seconds: int = Field(
        default=3,
        ge=0,
        description="Spoken countdown during the last N seconds of each phase",
    )
    speech_rate: float = Field(
        default=0.8,
        gt=0.0,
        le=2.0,
        description="Speech rate hint forwarded to clients",
    )

    # -------------------------------------------------------------------------
    # Observability - Sentry
    # -------------------------------------------------------------------------
    sentry_dsn: Optional[str] = Field(
        default=None,
        description="Sentry DSN for error tracking",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    @field_validator("default_audio_mode")
    @classmethod
    def validate_audio_mode(cls, v: str) -> str:
        """Ensure the default audio mode is one of the known modes."""
        mode = AudioMode.parse(v)
        if mode is None:
            raise ValueError(
                f"Invalid audio mode '{v}'. Must be one of: {[m.value for m in AudioMode]}"
            )
        return mode.value

    # -------------------------------------------------------------------------
    # Helper Properties
    # -------------------------------------------------------------------------
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Application settings instance
    """
    return Settings()

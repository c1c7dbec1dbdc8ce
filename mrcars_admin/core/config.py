"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (SUPABASE_URL, SUPABASE_ANON_KEY) are
validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required (supabase_url, supabase_anon_key).
    """

    # App
    app_name: str = "mrcars-admin"
    app_version: str = "1.0.0"
    debug: bool = False

    # Supabase (PostgREST + GoTrue). The service role key is preferred for
    # server-side queries when set; otherwise the anon key is used.
    supabase_url: str = ""
    supabase_anon_key: SecretStr = SecretStr("")
    supabase_service_role_key: SecretStr | None = None
    http_timeout_seconds: float = 30.0

    # Route guard (cookie presence check) and page paths
    auth_cookie_markers: str = "supabase,sb-,auth-token"
    protected_prefix: str = "/dashboard"
    auth_prefix: str = "/auth"
    login_path: str = "/auth/login"
    dashboard_path: str = "/dashboard"
    password_reset_redirect_url: str = "http://localhost:3000/auth/update-password"

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Request / middleware
    request_timeout_seconds: int = 60
    request_id_header: str = "X-Request-ID"
    rate_limit_enabled: bool = True

    # Dashboard tunables
    stats_series_months: int = 12
    activity_feed_limit: int = 10
    notifications_page_limit: int = 50

    # Realtime invalidation: Redis pub/sub when enabled, in-process otherwise.
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    realtime_channel_prefix: str = "invalidate"

    # Database webhook: if set, POST /realtime/webhook must send
    # X-Webhook-Signature-256: sha256=<hex(hmac_sha256(secret, body))>.
    db_webhook_secret: SecretStr | None = None

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required Supabase settings and dashboard tunables."""
        if not self.supabase_url:
            raise ValueError(
                "SUPABASE_URL is required (e.g. https://<project>.supabase.co). "
                "Set in environment or .env file."
            )
        if not self.supabase_url.startswith(("http://", "https://")):
            raise ValueError(
                f"SUPABASE_URL must be an http(s) URL, got: {self.supabase_url!r}"
            )
        if not self.supabase_anon_key.get_secret_value():
            raise ValueError(
                "SUPABASE_ANON_KEY is required. Copy it from Project Settings → API."
            )
        for name in (
            "stats_series_months",
            "activity_feed_limit",
            "notifications_page_limit",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name.upper()} must be positive")
        return self

    @property
    def cookie_markers(self) -> list[str]:
        """Auth cookie name markers as a list (empty entries dropped)."""
        return [m.strip() for m in self.auth_cookie_markers.split(",") if m.strip()]

    @property
    def supabase_api_key(self) -> str:
        """Key sent as apikey/Bearer for PostgREST calls."""
        if self.supabase_service_role_key and self.supabase_service_role_key.get_secret_value():
            return self.supabase_service_role_key.get_secret_value()
        return self.supabase_anon_key.get_secret_value()


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()

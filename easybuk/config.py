from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from easybuk.exceptions import ConfigurationError


def _env_files() -> list[str]:
    """Load .env from the project root, then the working directory."""
    base = Path(__file__).resolve().parent.parent
    return [str(base / ".env"), ".env"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_env_files(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_url: str = ""
    # Pool sizing and timeouts; the driver defaults wait indefinitely.
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout_seconds: int = 30
    db_connect_timeout_seconds: int = 10
    db_command_timeout_seconds: int = 30

    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "easybuk"
    jwt_audience: str = "easybuk-users"
    jwt_expire_seconds: int = 604_800            # 7 days (access token)
    jwt_refresh_expire_seconds: int = 2_592_000  # 30 days (refresh token)
    email_verify_expire_seconds: int = 86_400    # 24 hours

    env_name: str = "development"
    # Comma-separated in .env (e.g. CORS_ORIGINS=http://localhost:3000,http://localhost:8080)
    cors_origins: str = "http://localhost:3000"

    # ── App URLs ───────────────────────────────────────────────────────────────
    # Used to build email verification links. No trailing slash.
    app_base_url: str = ""

    # ── OAuth ──────────────────────────────────────────────────────────────────
    google_client_id: str = ""

    # ── SMTP ───────────────────────────────────────────────────────────────────
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_from_email: str = "noreply@easybuk.com"
    smtp_from_name: str = "EasyBuk"
    smtp_start_tls: bool = True
    smtp_timeout_seconds: int = 15

    @property
    def cors_origins_list(self) -> list[str]:
        return [x.strip() for x in self.cors_origins.split(",") if x.strip()]

    @property
    def is_production(self) -> bool:
        return self.env_name.lower() == "production"

    def assert_configured(self) -> None:
        """Fail fast when any value the service cannot run without is unset."""
        required = {
            "DATABASE_URL": self.database_url,
            "JWT_SECRET": self.jwt_secret,
            "APP_BASE_URL": self.app_base_url,
            "GOOGLE_CLIENT_ID": self.google_client_id,
        }
        missing = [name for name, value in required.items() if not value.strip()]
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}"
            )

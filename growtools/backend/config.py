"""Application configuration."""
from functools import lru_cache
from pydantic_settings import BaseSettings
from pydantic import ConfigDict

DEFAULT_COOKIE_ENCRYPTION_KEY = "default-secret-key-change-this"


class Settings(BaseSettings):
    model_config = ConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")
    app_env: str = "development"
    secret_key: str = "dev-secret-change-in-production"
    debug: bool = True
    public_base_url: str = "http://localhost:8000"
    log_level: str = "INFO"

    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "growtools"
    postgres_user: str = "growtools"
    postgres_password: str = "changeme"

    redis_host: str = "localhost"
    redis_port: int = 6379

    jwt_secret: str = "your-jwt-secret-min-32-chars"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 24 * 30
    session_cookie_name: str = "growtools_session"

    # AES passphrase for tool cookie blobs; previous keys are comma separated
    cookie_encryption_key: str = DEFAULT_COOKIE_ENCRYPTION_KEY
    cookie_encryption_previous_keys: str = ""

    telegram_link: str | None = None
    whatsapp_number: str | None = None
    whatsapp_default_message: str | None = None

    extension_dir: str = "public/extension"

    login_rate_limit_attempts: int = 5
    login_rate_limit_window_seconds: int = 900

    admin_default_email: str = "admin@growtools.app"
    admin_default_password: str = "changeme"

    @property
    def dashboard_url(self) -> str:
        return self.public_base_url.rstrip("/") + "/dashboard"

    @property
    def previous_cookie_keys(self) -> list[str]:
        return [k.strip() for k in self.cookie_encryption_previous_keys.split(",") if k.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()

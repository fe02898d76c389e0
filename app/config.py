# app/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    SUPABASE_URL: str
    SUPABASE_ANON_KEY: str
    SUPABASE_SERVICE_ROLE_KEY: str
    ALLOWED_ORIGINS: str = "http://localhost:3000"
    INVOICES_PATH: str = "/dashboard/invoices"
    DASHBOARD_PATH: str = "/dashboard"
    SESSION_COOKIE_NAME: str = "sb-access-token"
    AUTH_TIMEOUT_SECONDS: float = 10.0
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @property
    def allowed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    @property
    def auth_token_url(self) -> str:
        """Supabase password-grant endpoint (…/auth/v1/token)."""
        return f"{self.SUPABASE_URL.rstrip('/')}/auth/v1/token"

settings = Settings()

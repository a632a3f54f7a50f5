from pydantic_settings import BaseSettings
from pydantic import field_validator, model_validator
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = "postgresql+asyncpg://localhost:5432/fleet_service"

    @field_validator('DATABASE_URL', mode='before')
    @classmethod
    def convert_database_url(cls, v: str) -> str:
        """Convert postgresql:// to postgresql+asyncpg:// for async support."""
        if v and v.startswith('postgresql://'):
            return v.replace('postgresql://', 'postgresql+asyncpg://', 1)
        return v

    # Photo storage (Supabase Storage REST API)
    SUPABASE_URL: str | None = None
    SUPABASE_SERVICE_KEY: str | None = None
    PHOTO_BUCKET: str = "inspection-photos"
    PHOTO_STORE_TIMEOUT_SECONDS: float = 10.0
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    # CORS (comma separated)
    CORS_ORIGIN: str = "http://localhost:5173"

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    DOCS_ENABLED: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True

    @model_validator(mode="after")
    def check_production(self) -> "Settings":
        """Production needs a real photo store and never runs in debug."""
        if self.is_production:
            if not self.SUPABASE_URL or not self.SUPABASE_SERVICE_KEY:
                raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_KEY are required in production")
            self.DEBUG = False
        return self

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT in ("production", "staging")

    @property
    def sqlalchemy_echo(self) -> bool:
        # Never echo SQL in production, statements can carry customer contact data
        return self.DEBUG and not self.is_production

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGIN.split(",") if origin.strip()]

    @property
    def photo_store_configured(self) -> bool:
        return bool(self.SUPABASE_URL) and bool(self.SUPABASE_SERVICE_KEY)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()

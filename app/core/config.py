from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = ConfigDict(env_file=".env", case_sensitive=True)

    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Attribution cookies are scoped to the parent domain in production only
    COOKIE_DOMAIN: str = ".aparnaconstructions.com"
    ATTRIBUTION_WINDOW_DAYS: int = 90

    # slowapi limit applied to the landing-page Set endpoint
    RATE_LIMIT_ENABLED: bool = True
    ATTRIBUTION_SET_RATE_LIMIT: str = "120/minute"

    # CORS configuration, comma-separated origins
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:8080"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"


settings = Settings()

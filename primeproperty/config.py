from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./primeproperty.db"
    SECRET_KEY: str = "prime-property-secret-key"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # First-boot admin account (created only when missing)
    ADMIN_EMAIL: str = "admin@primeproperty.com"
    ADMIN_PASSWORD: str = "admin123"
    ADMIN_NAME: str = "System Admin"

    # Simulated charges, no real payment provider behind them
    PROMOTION_AMOUNT: float = 50.0
    SUBSCRIPTION_AMOUNT: float = 20.0

    # When enabled, a seller editing an approved listing sends it back to moderation
    REAPPROVE_ON_EDIT: bool = False

    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: Optional[str] = None

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def cors_origin_list(self) -> list[str]:
        """Comma separated CORS origins, everything allowed when unset"""
        if not self.CORS_ORIGINS:
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()

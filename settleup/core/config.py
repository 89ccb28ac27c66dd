from decimal import Decimal
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str
    JWT_SECRET: str = ""
    JWT_ALGO: str = "HS256"
    JWT_AUDIENCE: str = "authenticated"
    JWKS_URL: str | None = None
    JWKS_TTL: int = 60 * 60  # Time to live : 1 hour

    SETTLEMENT_EPSILON: Decimal = Decimal("0.01")

    LOG_LEVEL: str = "INFO"
    DB_RETRIES: int = 5
    CREATE_TABLES: bool = False

    class Config:
        env_file = ".env"

settings = Settings()

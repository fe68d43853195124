from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    DATABASE_URL: str = "sqlite:///./nexthire.db"

    # JWT Authentication
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Password hashing
    BCRYPT_ROUNDS: int = 10

    # Session cookies
    TOKEN_COOKIE_NAME: str = "token"
    ROLE_COOKIE_NAME: str = "role"
    COOKIE_SECURE: bool = False

    # Verify the token signature in the gatekeeper instead of trusting
    # the role cookie
    GATEKEEPER_VERIFY_TOKEN: bool = False

    # Application
    APP_NAME: str = "NextHire"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    BACKEND_CORS_ORIGINS: str = (
        "http://localhost:3000,"
        "http://127.0.0.1:3000"
    )


settings = Settings()

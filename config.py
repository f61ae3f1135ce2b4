from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables (or .env)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage: DISABLE_DB=true keeps everything in process memory
    disable_db: bool = False
    db_file: str = "budget.duckdb"

    port: int = 4000
    environment: str = "development"
    log_level: str = "INFO"

    demo_user_email: str = "demo@canadianinsights.app"
    default_currency: str = "CAD"
    session_ttl_days: int = 30


settings = Settings()

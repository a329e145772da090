from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "sqlite:///./habit_progress.db"
    APP_ENV: str = "development"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://myapp.com,https://api.myapp.com"
    CORS_ORIGINS: str = "*"

    # IANA zone used when a caller sends an empty or unknown identifier.
    DEFAULT_TIMEZONE: str = "UTC"

    # "sql" for the SQLAlchemy-backed store, "memory" for the fixture store.
    DATA_STORE: str = "sql"

    LOG_LEVEL: str = "INFO"

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def use_memory_store(self) -> bool:
        return self.DATA_STORE.strip().lower() == "memory"


settings = Settings()

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "PR Now"
    API_V1_STR: str = "/api/v1"
    CORS_ORIGIN: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    # Persisted state blob (read wholesale on startup, written on every change)
    STORAGE_DIR: str = ".prnow"
    STORAGE_KEY: str = "pr-now-storage"

    # Batch drafting worker pool
    DRAFT_CONCURRENCY: int = 3

    # Shared outbound HTTP client (provider and search calls)
    HTTP_TIMEOUT: float = 120.0
    HTTP_CONNECT_TIMEOUT: float = 10.0
    HTTP_MAX_CONNECTIONS: int = 50

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

settings = Settings()

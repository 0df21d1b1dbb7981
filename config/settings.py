from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Order store. The default is a per-process in-memory SQLite database.
    DATABASE_URL: str = "sqlite+aiosqlite://"
    DEFAULT_ORDER_LIMIT: int = 50
    MAX_ORDER_LIMIT: int = 500

    # Client side (order sync + rate oracle)
    API_BASE_URL: str = "http://localhost:8000"
    HTTP_TIMEOUT_SECONDS: float = 10.0
    ORDER_POLL_SECONDS: float = 30.0
    RATE_REFRESH_DELAY_SECONDS: float = 2.0

    # App
    APP_NAME: str = "Bridgify Ramp"
    DEBUG: bool = False  # echoes SQL when True
    LOG_LEVEL: str = "INFO"


settings = Settings()

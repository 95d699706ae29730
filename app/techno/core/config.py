from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env")

    APP_NAME: str = "TECHNO-ERP"
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    DATABASE_URL: str = "sqlite+pysqlite:///./techno.db"
    LOG_LEVEL: str = "INFO"
    METRICS_ENABLED: bool = True
    OPS_ENABLE_INTEGRITY_SCAN: bool = True
    STORE_NAME_MAX_LENGTH: int = 200
    STORE_LOCATION_MAX_LENGTH: int = 500

settings = Settings()

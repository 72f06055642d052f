from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "Greyroom API"
    CORS_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"

    # Registration limits
    NICKNAME_MIN_LENGTH: int = 2
    NICKNAME_MAX_LENGTH: int = 20
    BIO_MAX_LENGTH: int = 100

    # Chat limits
    MAX_MESSAGE_LENGTH: int = 1000
    MAX_REPORT_REASON_LENGTH: int = 500

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()

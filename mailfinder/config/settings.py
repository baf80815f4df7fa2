from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Persisted validation settings (provider / batch size / timeout)
    SETTINGS_PATH: str = "data/validation_settings.json"
    SETTINGS_KEY: str = "emailValidationSettings"

    # Rate limiting between batches and between providers when comparing
    BATCH_DELAY_MS: int = 1000
    COMPARE_DELAY_MS: int = 500
    COMPARE_EMAIL_DELAY_MS: int = 100

    # Outbound HTTP
    HTTP_TIMEOUT_S: int = 30
    HTTP_USER_AGENT: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

    # Runtime
    APP_ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    PORT: int = 8099

settings = Settings()

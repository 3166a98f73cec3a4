from pydantic_settings import BaseSettings, SettingsConfigDict
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FAMSPEND_", env_file=".env", extra="ignore")
    BACKEND_URL: str = "http://127.0.0.1:54321"
    BACKEND_ANON_KEY: str = "change-me"
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # display only, never used for correctness
    DISPLAY_TIMEZONE: str = "Etc/GMT-5"
    CURRENCY: str = "PKR"

    LOG_LEVEL: str = "INFO"
settings = Settings()

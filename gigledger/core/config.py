from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    STORE_PROVIDER: str = "json"
    DATA_DIR: str = "./data/ledger"

    BUSINESS_NAME: str = "Your DJ Business"
    BUSINESS_TIMEZONE: str = "Asia/Kolkata"
    CURRENCY: str = "INR"

    REQUIRE_AUTH: bool = True
    SESSION_TTL_HOURS: int = 24 * 7


settings = Settings()

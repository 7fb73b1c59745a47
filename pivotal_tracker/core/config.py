from pydantic_settings import BaseSettings, SettingsConfigDict

API_URL = "https://www.pivotaltracker.com/services/v5"


class Settings(BaseSettings):
    PIVOTAL_TRACKER_API_TOKEN: str | None = None  # X-TrackerToken
    PIVOTAL_TRACKER_PROJECT_ID: str | None = None
    PIVOTAL_TRACKER_BASE_URL: str = API_URL
    PIVOTAL_TRACKER_TIMEOUT: float = 30.0

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


settings = Settings()

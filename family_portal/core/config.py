from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FAMILY_PORTAL_", env_file=".env", extra="ignore")
    DATABASE_URL: str = "sqlite:///./family_portal.db"

    SECRET_KEY: str = "change-me"
    ACCESS_TOKEN_MIN: int = 60 * 12

    # rewards costing more than this wait for an adult's approval
    REWARD_APPROVAL_THRESHOLD: int = 1000
    TIMEZONE: str = "UTC"
    RESET_ON_STARTUP: bool = True

    LOG_LEVEL: str = "INFO"
    ACTIVITY_LOG_LIMIT: int = 50

    NOTIFY_TASK_COMPLETED: bool = True
    NOTIFY_REWARD_REDEEMED: bool = True
    NOTIFY_PUNISHMENT_APPLIED: bool = True


settings = Settings()

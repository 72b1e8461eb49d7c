from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "Rule Engine Transform Nodes"
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    LOG_LEVEL: str = "INFO"
    # Level of rule_engine.engine.nodes.*, which logs once per message
    LOG_NODE_LEVEL: str = "INFO"
    # NodeExecutor configures logging on first use
    LOG_AUTO_SETUP: bool = True

    LOG_CONSOLE_ENABLED: bool = True
    LOG_FILE_ENABLED: bool = False

    LOG_FORMAT: Literal["json", "console"] = "console"

    LOG_FILE_PATH: str = "logs/rule_engine.log"
    LOG_FILE_MAX_BYTES: int = 10 * 1024 * 1024  # 10 MB
    LOG_FILE_BACKUP_COUNT: int = 5

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()

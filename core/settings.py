from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CustomSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


class AppSettings(CustomSettings):
    ENVIRONMENT: Literal["local", "dev", "prod"] = Field(default="local")
    LOG_LEVEL: str = Field(default="INFO")
    JSON_LOGS: bool = Field(default=False)


class UiSettings(CustomSettings):
    """Configuration for the Streamlit UI and the STACBot backend it talks to.

    Set via env vars:
    - API_BASE_URL
    - ENDPOINT_CHAT
    - ENDPOINT_CHAT_FEEDBACK
    - ENDPOINT_SAVE_OFFLINE_FEEDBACK
    - REQUEST_TIMEOUT (seconds, unset means wait indefinitely)
    """

    API_BASE_URL: str = Field(default="https://stacbot-be.onrender.com")
    ENDPOINT_CHAT: str = Field(default="/chat")
    ENDPOINT_CHAT_FEEDBACK: str = Field(default="/chat_feedback")
    ENDPOINT_SAVE_OFFLINE_FEEDBACK: str = Field(default="/save_offline_feedback")
    REQUEST_TIMEOUT: Optional[float] = Field(default=None, gt=0)
    PAGE_TITLE: str = Field(default="STACBot")
    PREVIEW_LENGTH: int = Field(default=300, ge=1)
    TITLE_LENGTH: int = Field(default=20, ge=1)

    @field_validator("API_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class ArchiveSettings(CustomSettings):
    """Where the local chat history lives.

    Set via env vars:
    - ARCHIVE_DIR
    - ARCHIVE_KEY
    """

    ARCHIVE_DIR: str = Field(default=".stacbot")
    ARCHIVE_KEY: str = Field(default="chatHistory")


class Settings(BaseModel):
    APP: AppSettings = Field(default_factory=AppSettings)
    UI: UiSettings = Field(default_factory=UiSettings)
    ARCHIVE: ArchiveSettings = Field(default_factory=ArchiveSettings)


@lru_cache
def get_settings() -> Settings:
    return Settings()


SETTINGS = get_settings()

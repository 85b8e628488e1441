from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    APP_NAME: str = "AijoHub Supplier"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["local", "dev", "staging", "prod"] = "local"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Backend
    API_BASE_URL: str = "http://api.aijostore.id:8080"
    HTTP_TIMEOUT_SEC: float = 15.0

    # Session (unset SESSION_FILE = memory only, gone on exit)
    SESSION_FILE: Optional[str] = None
    SESSION_TOKEN_KEY: str = "aijoHubToken"
    SESSION_USER_KEY: str = "aijoHubUser"

    # -------- validators --------
    @field_validator("API_BASE_URL")
    @classmethod
    def _normalize_base_url(cls, v: str) -> str:
        v = (v or "").strip().rstrip("/")
        if not v:
            raise ValueError("API_BASE_URL is required (set it in .env)")
        return v

    @field_validator("HTTP_TIMEOUT_SEC")
    @classmethod
    def _timeout_positive(cls, v: float, info):
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v

    @field_validator("SESSION_TOKEN_KEY", "SESSION_USER_KEY")
    @classmethod
    def _required_plain(cls, v, info):
        if not v:
            raise ValueError(f"{info.field_name} is required (set it in .env)")
        return v

    @field_validator("SESSION_FILE")
    @classmethod
    def _blank_is_none(cls, v: Optional[str]) -> Optional[str]:
        return (v or "").strip() or None

    @property
    def LOG_LEVEL_EFFECTIVE(self) -> str:
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL.upper()

settings = Settings()

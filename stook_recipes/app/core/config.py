import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    ocr_max_text_chars: int = Field(50_000, alias="OCR_MAX_TEXT_CHARS")
    ocr_review_threshold: float = Field(0.6, alias="OCR_REVIEW_THRESHOLD")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    try:
        return Settings()
    except PermissionError:
        logger.warning("Unable to read .env; continuing with environment variables only")
        return Settings(_env_file=None)

"""
Configuration module for the exam screenshot reviewer.
환경 변수 및 OCR 설정을 관리합니다.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # OCR engine used for every batch (see exam_review.ocr for the registry)
    OCR_ENGINE: str = "tesseract"

    # Tesseract-style language string, "+"-joined (e.g. "eng+kor")
    OCR_LANGUAGES: str = "eng"

    # Directory where results-<timestamp>.json files are written
    RESULTS_DIR: str = "results"

    # Upload size limit for the HTTP service, in megabytes
    MAX_UPLOAD_MB: int = 100

    # Authentication: comma-separated list of valid API keys.
    # Not set = auth disabled (development mode). 미설정 시 인증 비활성화.
    API_KEYS: str | None = None

    # Comma-separated list of allowed CORS origins
    CORS_ORIGINS: str | None = None

    # Optional JSON file overriding the built-in category vocabulary
    VOCABULARY_PATH: str | None = None

    LOG_LEVEL: str = "INFO"

    def __init__(self, **kwargs):
        """Load settings from environment variables."""
        defaults = {
            "OCR_ENGINE": os.getenv("OCR_ENGINE", "tesseract"),
            "OCR_LANGUAGES": os.getenv("OCR_LANGUAGES", "eng"),
            "RESULTS_DIR": os.getenv("RESULTS_DIR", "results"),
            "MAX_UPLOAD_MB": int(os.getenv("MAX_UPLOAD_MB", "100")),
            "API_KEYS": os.getenv("API_KEYS") or None,
            "CORS_ORIGINS": os.getenv("CORS_ORIGINS") or None,
            "VOCABULARY_PATH": os.getenv("VOCABULARY_PATH") or None,
            "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO").upper(),
        }
        defaults.update(kwargs)
        super().__init__(**defaults)

    @property
    def api_keys(self) -> frozenset[str]:
        """Parsed API keys; empty when authentication is disabled."""
        if not self.API_KEYS:
            return frozenset()
        return frozenset(k.strip() for k in self.API_KEYS.split(",") if k.strip())

    @property
    def cors_origins(self) -> list[str]:
        if not self.CORS_ORIGINS:
            return []
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def ocr_languages(self) -> list[str]:
        return [lang for lang in self.OCR_LANGUAGES.split("+") if lang]

    @property
    def max_upload_bytes(self) -> int:
        return self.MAX_UPLOAD_MB * 1024 * 1024


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    load_dotenv()
    return Settings()

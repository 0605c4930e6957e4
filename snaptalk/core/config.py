from __future__ import annotations

import sys

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Default tessdata locations for a stock Tesseract install on each host family.
WINDOWS_TESSDATA_DIR = r"C:\Program Files\Tesseract-OCR\tessdata"
MACOS_TESSDATA_DIR = "/usr/local/share/tessdata"
LINUX_TESSDATA_DIR = "/usr/share/tesseract-ocr/4.00/tessdata"


def default_tessdata_dir(platform: str | None = None) -> str:
    """Pick the tessdata directory for the host OS family (best effort)."""
    platform = (platform or sys.platform).lower()
    if platform.startswith("win") or platform == "cygwin":
        return WINDOWS_TESSDATA_DIR
    if platform == "darwin" or platform.startswith("mac"):
        return MACOS_TESSDATA_DIR
    return LINUX_TESSDATA_DIR


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"
    service_name: str = "SnapTalk OCR Service"

    # OCR provider: tesseract | mock
    ocr_provider: str = "tesseract"
    mock_ocr_text: str = "SnapTalk mock OCR text"

    # Tesseract (fixed for the lifetime of the process)
    tesseract_lang: str = "eng"
    tesseract_psm: int = 1   # automatic page segmentation with OSD
    tesseract_oem: int = 1   # LSTM engine only
    tessdata_dir: str | None = None   # explicit override, passed to tesseract as-is
    platform_tessdata_dir: str = Field(default_factory=default_tessdata_dir)
    tesseract_cmd: str | None = None


settings = Settings()

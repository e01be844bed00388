from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    catalog_dir: Path
    locale: str
    locale_default: str
    lock_timeout: float
    log_level: str
    log_file: Optional[Path] = None

    @staticmethod
    def load() -> "Settings":
        # Load .env in dev if present; real environment variables win
        if os.path.exists(".env"):
            load_dotenv(".env")

        catalog_dir = Path(os.getenv("CATALOG_DIR", "./lang")).resolve()
        locale_default = os.getenv("LOCALE_DEFAULT", "en").strip().lower() or "en"
        locale = os.getenv("LOCALE", "").strip() or locale_default
        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        log_file_raw = os.getenv("LOG_FILE", "").strip()

        raw_timeout = os.getenv("CATALOG_LOCK_TIMEOUT", "").strip()
        try:
            lock_timeout = float(raw_timeout) if raw_timeout else 10.0
        except ValueError:
            raise RuntimeError("CATALOG_LOCK_TIMEOUT must be a number of seconds.") from None
        if lock_timeout <= 0:
            raise RuntimeError("CATALOG_LOCK_TIMEOUT must be positive.")

        return Settings(
            catalog_dir=catalog_dir,
            locale=locale,
            locale_default=locale_default,
            lock_timeout=lock_timeout,
            log_level=log_level,
            log_file=Path(log_file_raw).resolve() if log_file_raw else None,
        )

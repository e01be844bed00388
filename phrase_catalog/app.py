from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .files import ensure_dir
from .resolver import Translator
from .settings import Settings
from .store import CatalogStore

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str, log_file: Optional[Path] = None) -> logging.Logger:
    logger = logging.getLogger("phrase_catalog")
    logger.setLevel(level)
    fmt = logging.Formatter(_FORMAT)
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        ch = logging.StreamHandler()
        ch.setFormatter(fmt)
        logger.addHandler(ch)
    if log_file is not None:
        target = str(Path(log_file).resolve())
        if not any(isinstance(h, RotatingFileHandler) and h.baseFilename == target for h in logger.handlers):
            ensure_dir(Path(target).parent)
            fh = RotatingFileHandler(target, maxBytes=5_000_000, backupCount=3, encoding="utf-8")
            fh.setFormatter(fmt)
            logger.addHandler(fh)
    return logger


def build(settings: Optional[Settings] = None) -> Translator:
    settings = settings or Settings.load()
    logger = setup_logging(settings.log_level, settings.log_file)
    store = CatalogStore(settings.catalog_dir, lock_timeout=settings.lock_timeout)
    translator = Translator.open(store, settings.locale, settings.locale_default)
    logger.info(
        "catalogs ready: locale=%s default=%s dir=%s",
        translator.locale, translator.default_locale, store.directory,
    )
    return translator

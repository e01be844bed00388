from __future__ import annotations
from pathlib import Path
from typing import Optional


class CatalogError(Exception):
    """Base class for every error raised by phrase_catalog."""


class NotFoundError(CatalogError, FileNotFoundError):
    def __init__(self, locale: str, path: Path) -> None:
        super().__init__(f"Catalog for locale '{locale}' not found: {path}")
        self.locale = locale
        self.path = path


class ParseError(CatalogError, ValueError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Catalog {path} is not well-formed: {reason}")
        self.path = path
        self.reason = reason


class FormatError(CatalogError, ValueError):
    # Raised before any write; the file on disk is left untouched.
    def __init__(self, path: Path, expected: str) -> None:
        super().__init__(f"Catalog {path} format invalid, does not end with {expected!r}")
        self.path = path
        self.expected = expected


class LockTimeoutError(CatalogError, TimeoutError):
    def __init__(self, path: Path, timeout: float) -> None:
        super().__init__(f"Could not lock {path} within {timeout:g}s")
        self.path = path
        self.timeout = timeout


class SubstitutionError(CatalogError, ValueError):
    def __init__(self, phrase: str, reason: str, key: Optional[str] = None) -> None:
        where = f" for key '{key}'" if key else ""
        super().__init__(f"Cannot substitute placeholders{where} in {phrase!r}: {reason}")
        self.phrase = phrase
        self.reason = reason
        self.key = key

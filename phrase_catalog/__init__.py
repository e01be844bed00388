from __future__ import annotations

from .cache import CatalogCache
from .errors import (
    CatalogError,
    FormatError,
    LockTimeoutError,
    NotFoundError,
    ParseError,
    SubstitutionError,
)
from .growth import CatalogGrowth, GrowthResult
from .resolver import Translator
from .store import CatalogStore, parse_catalog, serialize_catalog

__all__ = [
    "CatalogCache",
    "CatalogError",
    "CatalogGrowth",
    "CatalogStore",
    "FormatError",
    "GrowthResult",
    "LockTimeoutError",
    "NotFoundError",
    "ParseError",
    "SubstitutionError",
    "Translator",
    "parse_catalog",
    "serialize_catalog",
]

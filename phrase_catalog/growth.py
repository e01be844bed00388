from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .cache import CatalogCache
from .errors import CatalogError
from .store import CatalogStore

logger = logging.getLogger("phrase_catalog")


@dataclass(frozen=True)
class GrowthResult:
    text: str
    persisted: bool
    error: Optional[BaseException] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class CatalogGrowth:
    # Adds unknown keys to the default catalog on first use. Storage failures are
    # logged and returned in the result; the key stays unknown so the next use retries.
    def __init__(self, store: CatalogStore, cache: CatalogCache) -> None:
        self.store = store
        self.cache = cache

    @property
    def locale(self) -> str:
        return self.cache.locale

    def append(self, key: str, phrase: str, substitute: Callable[[str], str]) -> GrowthResult:
        # Substitution errors are the caller's problem, not a storage failure.
        text = substitute(phrase)
        try:
            added = self.store.atomic_append(self.locale, key, phrase)
        except (CatalogError, OSError) as exc:
            logger.warning("growth failed for %s key=%s: %s", self.locale, key, exc, exc_info=exc)
            return GrowthResult(text=text, persisted=False, error=exc)
        try:
            self.cache.refresh()
        except (CatalogError, OSError) as exc:
            logger.warning("growth: %s persisted to %s but reload failed: %s", key, self.locale, exc, exc_info=exc)
            return GrowthResult(text=text, persisted=True, error=exc)
        if added:
            logger.info("growth: added %s to %s", key, self.locale)
        else:
            logger.debug("growth: %s already in %s (added concurrently)", key, self.locale)
        # Another writer may have won the race with a different phrase.
        stored = self.cache.get(key)
        if stored is not None and stored != phrase:
            text = substitute(stored)
        return GrowthResult(text=text, persisted=True)

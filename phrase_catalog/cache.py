from __future__ import annotations
import logging
import threading
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from .store import CatalogStore

logger = logging.getLogger("phrase_catalog")

_EMPTY: Mapping[str, str] = MappingProxyType({})


class CatalogCache:
    # One locale's catalog in memory; refresh and set swap the whole mapping, never mutate it.
    def __init__(self, store: CatalogStore, locale: str) -> None:
        self.store = store
        self.locale = locale
        self._data: Mapping[str, str] = _EMPTY
        self._refresh_lock = threading.Lock()

    @classmethod
    def from_catalog(cls, store: CatalogStore, locale: str, catalog: Mapping[str, str]) -> "CatalogCache":
        cache = cls(store, locale)
        cache._data = MappingProxyType(dict(catalog))
        return cache

    @classmethod
    def load(cls, store: CatalogStore, locale: str) -> "CatalogCache":
        cache = cls(store, locale)
        cache.refresh()
        return cache

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def all(self) -> Mapping[str, str]:
        return self._data

    def refresh(self) -> None:
        with self._refresh_lock:
            fresh = self.store.load(self.locale)
            self._data = MappingProxyType(fresh)
        logger.debug("refresh(%s): %d entries", self.locale, len(fresh))

    def set(self, key: str, phrase: str) -> None:
        # Memory only; the next refresh drops it.
        with self._refresh_lock:
            data = dict(self._data)
            data[key] = phrase
            self._data = MappingProxyType(data)

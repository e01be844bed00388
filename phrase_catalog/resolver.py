from __future__ import annotations
import logging
from typing import Any, Callable, Mapping, Optional, Sequence

from .cache import CatalogCache
from .growth import CatalogGrowth, GrowthResult
from .store import CatalogStore, validate_locale
from .substitution import format_positional, replace_tokens

logger = logging.getLogger("phrase_catalog")

GrowthHook = Callable[[str, GrowthResult], None]


class Translator:
    """Resolves phrase keys for one active locale with a default fallback.

    Lifecycle: construct, ``load()``, resolve, optionally ``reload()``.
    Lookup order is active catalog, then default catalog, then growth of the
    default catalog with the phrase the caller supplied. An empty key raises
    ValueError.
    """

    def __init__(
        self,
        store: CatalogStore,
        locale: str,
        default_locale: str = "en",
        *,
        on_growth: Optional[GrowthHook] = None,
    ) -> None:
        self.store = store
        self._locale = validate_locale(locale)
        self._default_locale = validate_locale(default_locale)
        self._default = CatalogCache(store, self._default_locale)
        if self._locale == self._default_locale:
            self._active = self._default
        else:
            self._active = CatalogCache(store, self._locale)
        self.growth = CatalogGrowth(store, self._default)
        self.on_growth = on_growth

    @classmethod
    def open(cls, store: CatalogStore, locale: str, default_locale: str = "en", **kwargs: Any) -> "Translator":
        translator = cls(store, locale, default_locale, **kwargs)
        translator.load()
        return translator

    @property
    def locale(self) -> str:
        return self._locale

    @property
    def default_locale(self) -> str:
        return self._default_locale

    @property
    def active(self) -> CatalogCache:
        return self._active

    @property
    def default(self) -> CatalogCache:
        return self._default

    @property
    def falls_back(self) -> bool:
        return self._active is not self._default

    def load(self) -> None:
        if not self.store.exists(self._default_locale):
            try:
                self.store.create(self._default_locale)
            except FileExistsError:
                logger.debug("default catalog %s created concurrently", self._default_locale)
        self.reload()

    def reload(self) -> None:
        self._default.refresh()
        if self.falls_back:
            self._active.refresh()
        logger.debug("reloaded %s (default %s)", self._locale, self._default_locale)

    def resolve(self, key: str, phrase: Optional[str] = None, args: Sequence[Any] = ()) -> str:
        return self._resolve(key, phrase, lambda s: format_positional(s, args, key=key))

    def resolve_named(self, key: str, phrase: Optional[str] = None, tokens: Optional[Mapping[str, Any]] = None) -> str:
        return self._resolve(key, phrase, lambda s: replace_tokens(s, tokens))

    def text(self, key: str, phrase: str, *args: Any) -> str:
        return self.resolve(key, phrase, args)

    def _resolve(self, key: str, phrase: Optional[str], substitute: Callable[[str], str]) -> str:
        # Bad keys are a programming error, raised before any lookup or growth.
        if not isinstance(key, str) or not key:
            raise ValueError("key must be a non-empty string")
        found = self._active.get(key)
        if found is None and self.falls_back:
            found = self._default.get(key)
        if found is not None:
            return substitute(found)
        if phrase is None:
            logger.warning("no phrase for key=%s in %s and none supplied", key, self._default_locale)
            return key
        result = self.growth.append(key, phrase, substitute)
        if self.on_growth is not None:
            self.on_growth(key, result)
        return result.text

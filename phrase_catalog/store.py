from __future__ import annotations
import json
import logging
import re
from pathlib import Path
from typing import Any, Mapping, Optional

from .errors import FormatError, NotFoundError, ParseError
from .files import FileWriter, PathLike, ensure_dir
from .utils import log_if_slow

logger = logging.getLogger("phrase_catalog")

Catalog = dict[str, str]

SUFFIX = ".json"
TERMINATOR = "}"
_LOCALE_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


def validate_locale(locale: str) -> str:
    if not isinstance(locale, str) or not locale:
        raise ValueError("locale must be a non-empty string")
    if locale.startswith("WebId:"):
        raise ValueError(f"Web languages are not supported: {locale!r}")
    if not _LOCALE_RE.match(locale) or ".." in locale:
        raise ValueError(f"Invalid locale tag: {locale!r}")
    return locale


def _unique_pairs(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in pairs:
        if key in out:
            raise ValueError(f"duplicate key {key!r}")
        out[key] = value
    return out


def parse_catalog(text: str, path: Optional[Path] = None) -> Catalog:
    # A JSON object of unique string keys to string values; anything else is a ParseError.
    where = path or Path("<memory>")
    try:
        data = json.loads(text, object_pairs_hook=_unique_pairs)
    except ValueError as exc:
        # JSONDecodeError is a ValueError, as is a duplicate key
        raise ParseError(where, str(exc)) from exc
    if not isinstance(data, dict):
        raise ParseError(where, f"top level is {type(data).__name__}, expected an object")
    for key, value in data.items():
        if not isinstance(value, str):
            raise ParseError(where, f"value for key {key!r} is {type(value).__name__}, expected a string")
    return data


def serialize_catalog(catalog: Mapping[str, str]) -> str:
    # Sorted keys keep re-serialization idempotent and diffs stable.
    return json.dumps(dict(catalog), ensure_ascii=False, indent=4, sort_keys=True) + "\n"


class CatalogStore:
    # One <locale>.json file per locale under a single directory.
    def __init__(self, directory: PathLike, *, lock_timeout: float = 10.0) -> None:
        self.directory = ensure_dir(directory)
        self.lock_timeout = lock_timeout

    def path_for(self, locale: str) -> Path:
        return self.directory / f"{validate_locale(locale)}{SUFFIX}"

    def exists(self, locale: str) -> bool:
        return self.path_for(locale).is_file()

    def locales(self) -> list[str]:
        return sorted(p.stem for p in self.directory.glob(f"*{SUFFIX}") if p.is_file() and _LOCALE_RE.match(p.stem))

    def _writer(self, locale: str) -> FileWriter:
        return FileWriter(self.path_for(locale), lock_timeout=self.lock_timeout)

    @log_if_slow()
    def load(self, locale: str) -> Catalog:
        p = self.path_for(locale)
        try:
            raw = p.read_bytes()
        except FileNotFoundError:
            raise NotFoundError(locale, p) from None
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(p, str(exc)) from exc
        catalog = parse_catalog(text, p)
        logger.debug("load(%s) <- %s (%d entries)", locale, p, len(catalog))
        return catalog

    @log_if_slow()
    def create(self, locale: str, catalog: Optional[Mapping[str, str]] = None) -> None:
        self._writer(locale).create(serialize_catalog(catalog or {}))
        logger.info("created catalog %s", locale)

    @log_if_slow()
    def save(self, locale: str, catalog: Mapping[str, str]) -> None:
        self._writer(locale).overwrite(serialize_catalog(catalog))
        logger.debug("save(%s) -> %d entries", locale, len(catalog))

    @log_if_slow()
    def atomic_append(self, locale: str, key: str, phrase: str) -> bool:
        # Read-check-write under the lock; True when the file was changed.
        if not isinstance(key, str) or not key:
            raise ValueError("key must be a non-empty string")
        if not isinstance(phrase, str):
            raise ValueError("phrase must be a string")
        writer = self._writer(locale)
        with writer.locked():
            try:
                text = writer.read_all()
            except FileNotFoundError:
                raise NotFoundError(locale, writer.path) from None
            except UnicodeDecodeError as exc:
                raise ParseError(writer.path, str(exc)) from exc
            if not text.rstrip().endswith(TERMINATOR):
                raise FormatError(writer.path, TERMINATOR)
            catalog = parse_catalog(text, writer.path)
            if key in catalog:
                return False
            catalog[key] = phrase
            writer.overwrite(serialize_catalog(catalog))
        logger.info("append(%s) key=%s (%d entries)", locale, key, len(catalog))
        return True

from __future__ import annotations

import json
from pathlib import Path

import pytest

from phrase_catalog.store import CatalogStore


def write_catalog(directory: Path, locale: str, catalog: dict[str, str]) -> Path:
    path = directory / f"{locale}.json"
    path.write_text(json.dumps(catalog, indent=4, sort_keys=True) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def catalog_dir(tmp_path: Path) -> Path:
    d = tmp_path / "lang"
    d.mkdir()
    return d


@pytest.fixture
def store(catalog_dir: Path) -> CatalogStore:
    return CatalogStore(catalog_dir, lock_timeout=5.0)

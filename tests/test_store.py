from __future__ import annotations

import json

import pytest
from filelock import FileLock

from phrase_catalog.errors import FormatError, LockTimeoutError, NotFoundError, ParseError
from phrase_catalog.store import CatalogStore, parse_catalog, serialize_catalog, validate_locale

from conftest import write_catalog


def test_load_returns_catalog(store, catalog_dir) -> None:
    write_catalog(catalog_dir, "en", {"a.b": "Hello %s", "greeting": "Hi"})
    assert store.load("en") == {"a.b": "Hello %s", "greeting": "Hi"}


def test_load_missing_locale_raises_not_found(store) -> None:
    with pytest.raises(NotFoundError) as info:
        store.load("fr")
    assert info.value.locale == "fr"
    assert isinstance(info.value, FileNotFoundError)


@pytest.mark.parametrize(
    "content",
    [
        "",
        "not json",
        "[1, 2, 3]\n",
        '{"a": 1}\n',
        '{"a": "x", "a": "y"}\n',
    ],
)
def test_load_malformed_raises_parse_error(store, catalog_dir, content) -> None:
    (catalog_dir / "en.json").write_text(content, encoding="utf-8")
    with pytest.raises(ParseError):
        store.load("en")


def test_load_invalid_utf8_raises_parse_error(store, catalog_dir) -> None:
    (catalog_dir / "en.json").write_bytes(b'{"a": "\xff"}\n')
    with pytest.raises(ParseError):
        store.load("en")


def test_serialize_is_sorted_and_terminated() -> None:
    text = serialize_catalog({"b": "2", "a": "1"})
    assert text.index('"a"') < text.index('"b"')
    assert text.endswith("}\n")
    assert serialize_catalog({}) == "{}\n"


def test_roundtrip_is_idempotent() -> None:
    catalog = {
        "quote": "It's \"quoted\"",
        "slash": "C:\\path\\to",
        "newline": "line1\nline2",
        "unicode": "Привет, мир",
        "brace": "ends with }",
    }
    text = serialize_catalog(catalog)
    assert parse_catalog(text) == catalog
    assert serialize_catalog(parse_catalog(text)) == text


def test_create_refuses_existing(store) -> None:
    store.create("en", {"x": "y"})
    assert store.load("en") == {"x": "y"}
    with pytest.raises(FileExistsError):
        store.create("en")


def test_locales_lists_catalog_files(store, catalog_dir) -> None:
    write_catalog(catalog_dir, "fr", {})
    write_catalog(catalog_dir, "en", {})
    (catalog_dir / "notes.txt").write_text("ignored", encoding="utf-8")
    assert store.locales() == ["en", "fr"]
    assert store.exists("en")
    assert not store.exists("de")


@pytest.mark.parametrize("locale", ["../etc", "a/b", "", "WebId:42", "..", "en..x"])
def test_invalid_locales_are_rejected(store, locale) -> None:
    with pytest.raises(ValueError):
        store.path_for(locale)


def test_valid_locale_tags() -> None:
    for tag in ("en", "pt-BR", "zh_Hant", "en.v2"):
        assert validate_locale(tag) == tag


def test_atomic_append_adds_sorted_entry(store, catalog_dir) -> None:
    write_catalog(catalog_dir, "en", {"b": "B", "d": "D"})
    assert store.atomic_append("en", "c", "It's C") is True
    text = (catalog_dir / "en.json").read_text(encoding="utf-8")
    assert list(json.loads(text)) == ["b", "c", "d"]
    assert store.load("en") == {"b": "B", "c": "It's C", "d": "D"}


def test_atomic_append_existing_key_is_noop(store, catalog_dir) -> None:
    path = write_catalog(catalog_dir, "en", {"a": "original"})
    before = path.read_bytes()
    assert store.atomic_append("en", "a", "changed") is False
    assert path.read_bytes() == before


def test_atomic_append_corrupted_terminator_leaves_file_untouched(store, catalog_dir) -> None:
    path = catalog_dir / "en.json"
    path.write_text('{\n    "a": "A",\n    "b": "B"\n', encoding="utf-8")
    before = path.read_bytes()
    with pytest.raises(FormatError):
        store.atomic_append("en", "c", "C")
    assert path.read_bytes() == before


def test_atomic_append_missing_file(store) -> None:
    with pytest.raises(NotFoundError):
        store.atomic_append("en", "a", "A")


def test_atomic_append_rejects_empty_key(store, catalog_dir) -> None:
    write_catalog(catalog_dir, "en", {})
    with pytest.raises(ValueError):
        store.atomic_append("en", "", "A")


def test_atomic_append_times_out_on_held_lock(catalog_dir) -> None:
    path = write_catalog(catalog_dir, "en", {})
    before = path.read_bytes()
    store = CatalogStore(catalog_dir, lock_timeout=0.2)
    holder = FileLock(str(path) + ".lock")
    with holder:
        with pytest.raises(LockTimeoutError) as info:
            store.atomic_append("en", "a", "A")
    assert info.value.timeout == pytest.approx(0.2)
    assert path.read_bytes() == before


def test_reads_do_not_wait_for_the_lock(catalog_dir) -> None:
    path = write_catalog(catalog_dir, "en", {"a": "A"})
    store = CatalogStore(catalog_dir, lock_timeout=0.2)
    with FileLock(str(path) + ".lock"):
        assert store.load("en") == {"a": "A"}


def test_save_replaces_catalog_without_temp_leftovers(store, catalog_dir) -> None:
    write_catalog(catalog_dir, "en", {"old": "x"})
    store.save("en", {"new": "y"})
    assert store.load("en") == {"new": "y"}
    assert not list(catalog_dir.glob("*.tmp"))

from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

import kanaruby.dictionary as dictionary


def _dicdir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    (path / "dicrc").write_text("", encoding="utf-8")
    return path


@pytest.fixture
def no_packages(monkeypatch):
    monkeypatch.delenv(dictionary.DICDIR_ENV, raising=False)
    monkeypatch.setitem(sys.modules, "unidic", None)
    monkeypatch.setitem(sys.modules, "unidic_lite", None)


def test_env_override_wins(no_packages, monkeypatch, tmp_path) -> None:
    custom = _dicdir(tmp_path / "custom")
    monkeypatch.setitem(sys.modules, "unidic_lite", SimpleNamespace(DICDIR=str(_dicdir(tmp_path / "lite"))))
    monkeypatch.setenv(dictionary.DICDIR_ENV, str(custom))
    assert dictionary.find_dicdir() == custom


def test_env_override_without_dicrc_raises(no_packages, monkeypatch, tmp_path) -> None:
    monkeypatch.setenv(dictionary.DICDIR_ENV, str(tmp_path))
    with pytest.raises(dictionary.DictionaryNotFoundError, match=dictionary.DICDIR_ENV):
        dictionary.find_dicdir()


def test_unidic_lite_is_found(no_packages, monkeypatch, tmp_path) -> None:
    lite = _dicdir(tmp_path / "unidic_lite" / "dicdir")
    monkeypatch.setitem(sys.modules, "unidic_lite", SimpleNamespace(DICDIR=str(lite)))
    assert dictionary.find_dicdir() == lite


def test_full_unidic_preferred_over_lite(no_packages, monkeypatch, tmp_path) -> None:
    full = _dicdir(tmp_path / "unidic" / "dicdir")
    lite = _dicdir(tmp_path / "unidic_lite" / "dicdir")
    monkeypatch.setitem(sys.modules, "unidic", SimpleNamespace(DICDIR=str(full)))
    monkeypatch.setitem(sys.modules, "unidic_lite", SimpleNamespace(DICDIR=str(lite)))
    assert dictionary.find_dicdir() == full


def test_undownloaded_unidic_falls_through_to_lite(no_packages, monkeypatch, tmp_path) -> None:
    lite = _dicdir(tmp_path / "unidic_lite" / "dicdir")
    monkeypatch.setitem(sys.modules, "unidic", SimpleNamespace(DICDIR=str(tmp_path / "empty")))
    monkeypatch.setitem(sys.modules, "unidic_lite", SimpleNamespace(DICDIR=str(lite)))
    sources = dictionary.dictionary_sources()
    assert [(source.origin, source.usable) for source in sources] == [
        ("unidic", False),
        ("unidic_lite", True),
    ]
    assert dictionary.find_dicdir() == lite


def test_no_dictionary_detected(no_packages) -> None:
    sources = dictionary.dictionary_sources()
    assert [source.origin for source in sources] == ["unidic", "unidic_lite"]
    assert all(source.path is None for source in sources)
    assert dictionary.find_dicdir() is None

from __future__ import annotations

import importlib
import os
from dataclasses import dataclass
from pathlib import Path

__all__ = [
    "DICDIR_ENV",
    "DictionaryNotFoundError",
    "DictionarySource",
    "dictionary_sources",
    "find_dicdir",
]

DICDIR_ENV = "KANARUBY_UNIDIC_DIR"

# pip-installable dictionaries, best first: full UniDic, then the bundled lite build
_PACKAGED = ("unidic", "unidic_lite")


class DictionaryNotFoundError(RuntimeError):
    """Raised when ``KANARUBY_UNIDIC_DIR`` names a directory without a dictionary."""


@dataclass(frozen=True)
class DictionarySource:
    """One place a UniDic dictionary may come from, in lookup order."""

    origin: str
    path: Path | None

    @property
    def usable(self) -> bool:
        return self.path is not None and _has_dicrc(self.path)


def _has_dicrc(path: Path) -> bool:
    return (path / "dicrc").is_file()


def _packaged_dicdir(module_name: str) -> Path | None:
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    dicdir = getattr(module, "DICDIR", None)
    return Path(dicdir) if dicdir else None


def dictionary_sources() -> list[DictionarySource]:
    sources = []
    env_dir = os.environ.get(DICDIR_ENV)
    if env_dir:
        sources.append(DictionarySource(DICDIR_ENV, Path(env_dir).expanduser()))
    for name in _PACKAGED:
        sources.append(DictionarySource(name, _packaged_dicdir(name)))
    return sources


def find_dicdir() -> Path | None:
    """
    Return the dictionary directory the analyzer should load.

    An explicit ``KANARUBY_UNIDIC_DIR`` wins and must point at a compiled
    dictionary (a directory holding ``dicrc``). Otherwise the ``unidic``
    package is used when its data has been downloaded, then ``unidic-lite``.
    ``None`` means no dictionary could be found.
    """
    for source in dictionary_sources():
        if source.usable:
            return source.path
        if source.origin == DICDIR_ENV:
            raise DictionaryNotFoundError(
                f"{DICDIR_ENV} is set to '{source.path}', which has no dicrc file."
            )
    return None

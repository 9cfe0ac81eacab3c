from __future__ import annotations

import os
import shlex
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

from .dictionary import DICDIR_ENV, DictionaryNotFoundError, find_dicdir
from .kana import to_katakana

__all__ = [
    "Analyzer",
    "AnalyzerUnavailableError",
    "FugashiAnalyzer",
    "Token",
    "TokenizationError",
    "init_analyzer",
]

_READING_FEATURES = ("kana", "reading", "reading_form", "pron", "pronunciation")


class AnalyzerUnavailableError(RuntimeError):
    """Raised when the morphological analyzer cannot be initialized."""


class TokenizationError(RuntimeError):
    """Raised when the tagger reports a surface that is not in the input text."""


@dataclass(frozen=True)
class Token:
    surface: str
    reading: str | None = None


class Analyzer(Protocol):
    def tokenize(self, text: str) -> Sequence[Token]: ...


def _tagger_args(dicdir: Path) -> str:
    mecabrc = dicdir / "mecabrc"
    rc = mecabrc if mecabrc.is_file() else Path(os.devnull)
    return f"-r {shlex.quote(str(rc))} -d {shlex.quote(str(dicdir))}"


class FugashiAnalyzer:
    """Fugashi (MeCab) tokenizer yielding surfaces with katakana readings."""

    def __init__(self, dicdir: Path | None = None) -> None:
        try:
            from fugashi import Tagger  # type: ignore
        except ImportError as exc:
            raise AnalyzerUnavailableError(
                "Conversion requires 'fugashi' (MeCab) to be installed."
            ) from exc

        if dicdir is None:
            try:
                dicdir = find_dicdir()
            except DictionaryNotFoundError as exc:
                raise AnalyzerUnavailableError(str(exc)) from exc
        if dicdir:
            # fugashi picks the UniDic feature layout from the dictionary itself
            try:
                self._tagger = Tagger(_tagger_args(Path(dicdir)))
            except RuntimeError as exc:
                raise AnalyzerUnavailableError(
                    f"Failed to initialize UniDic dictionary at '{dicdir}': {exc}"
                ) from exc
        else:
            warnings.warn(
                f"No UniDic dictionary found (install 'unidic-lite' or set {DICDIR_ENV}); "
                "falling back to MeCab's configured dictionary.",
                RuntimeWarning,
                stacklevel=2,
            )
            try:
                self._tagger = Tagger()
            except RuntimeError as exc:
                raise AnalyzerUnavailableError(
                    f"Failed to initialize the default MeCab dictionary: {exc}"
                ) from exc

    def tokenize(self, text: str) -> list[Token]:
        """
        Split ``text`` into tokens whose surfaces concatenate back to ``text``.

        Characters MeCab skips (whitespace) are emitted as reading-less
        tokens in place.
        """
        tokens: list[Token] = []
        if not text:
            return tokens
        pos = 0
        for raw in self._tagger(text):
            surface = raw.surface
            if not surface:
                continue
            start = text.find(surface, pos)
            if start == -1:
                raise TokenizationError(
                    f"Tagger returned {surface!r}, which does not occur in the input after offset {pos}"
                )
            if start > pos:
                tokens.append(Token(surface=text[pos:start]))
            tokens.append(Token(surface=surface, reading=self._extract_reading(raw)))
            pos = start + len(surface)
        if pos < len(text):
            tokens.append(Token(surface=text[pos:]))
        return tokens

    def _extract_reading(self, token) -> str | None:
        feature = getattr(token, "feature", None)
        if feature is None:
            return None
        for attr in _READING_FEATURES:
            if hasattr(feature, attr):
                value = getattr(feature, attr)
            else:
                try:
                    value = feature[attr]
                except (KeyError, IndexError, TypeError):
                    value = None
            if value and value != "*":
                return to_katakana(str(value))
        return None


def init_analyzer(dicdir: Path | None = None) -> FugashiAnalyzer:
    """Build the analyzer handle that ``convert`` needs; raises on failure."""
    return FugashiAnalyzer(dicdir)

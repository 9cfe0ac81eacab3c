from __future__ import annotations

from typing import Iterable

from .align import Annotation
from .kana import transliterate

__all__ = ["ANNOTATED_MODES", "render"]

ANNOTATED_MODES = ("okurigana", "furigana")


def _ruby_group(base: str, reading: str, delimiter_start: str, delimiter_end: str) -> str:
    return f"{base}<rp>{delimiter_start}</rp><rt>{reading}</rt><rp>{delimiter_end}</rp>"


def render(
    annotations: Iterable[Annotation],
    target: str,
    mode: str,
    delimiter_start: str = "(",
    delimiter_end: str = ")",
) -> str:
    """
    Assemble annotated text.

    Non-kanji spans are emitted as-is. Kanji spans get their reading in the
    target syllabary either inline between the delimiters (okurigana) or as
    ruby markup (furigana). Romaji furigana shares one ``<ruby>`` element for
    the whole text instead of one per kanji span. Nothing is HTML-escaped.
    """
    if mode not in ANNOTATED_MODES:
        raise ValueError(f"Unsupported notation mode: {mode!r}")
    shared_ruby = mode == "furigana" and target == "romaji"
    pieces: list[str] = []
    for annotation in annotations:
        if not annotation.is_kanji:
            pieces.append(annotation.base)
            continue
        reading = transliterate(annotation.reading, target)
        if mode == "okurigana":
            pieces.append(f"{annotation.base}{delimiter_start}{reading}{delimiter_end}")
        elif shared_ruby:
            pieces.append(_ruby_group(annotation.base, reading, delimiter_start, delimiter_end))
        else:
            group = _ruby_group(annotation.base, reading, delimiter_start, delimiter_end)
            pieces.append(f"<ruby>{group}</ruby>")
    text = "".join(pieces)
    if shared_ruby:
        return f"<ruby>{text}</ruby>"
    return text

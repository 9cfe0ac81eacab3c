from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .chars import CompositionClass, classify, is_kanji
from .kana import to_hiragana

__all__ = [
    "Annotation",
    "AnnotationKind",
    "UnalignableTokenError",
    "align",
    "annotate_token",
]


class AnnotationKind(Enum):
    KANJI = "kanji"
    NON_KANJI = "non_kanji"


@dataclass(frozen=True)
class Annotation:
    """
    A span of a token's surface paired with its reading.

    ``KANJI`` spans receive a decoration when rendered; ``NON_KANJI`` spans
    are always emitted verbatim. Readings are stored in hiragana.
    """

    base: str
    kind: AnnotationKind
    reading: str

    @property
    def is_kanji(self) -> bool:
        return self.kind is AnnotationKind.KANJI


class UnalignableTokenError(ValueError):
    """Raised when a token's kana cannot be located inside its reading."""

    def __init__(self, surface: str, reading: str) -> None:
        super().__init__(f"Cannot align reading {reading!r} onto token {surface!r}")
        self.surface = surface
        self.reading = reading


def _match_readings(surface: str, reading: str, greedy: bool) -> list[str] | None:
    total = len(reading)
    # literals_after[i]: reading characters the anchors from i onward will consume
    literals_after = [0] * (len(surface) + 1)
    for idx in range(len(surface) - 1, -1, -1):
        literals_after[idx] = literals_after[idx + 1] + (0 if is_kanji(surface[idx]) else 1)

    captures: list[str] = []
    # (surface index, reading index) pairs already known to lead nowhere
    dead_ends: set[tuple[int, int]] = set()

    def _step(i: int, j: int) -> bool:
        if i == len(surface):
            return j == total
        if (i, j) in dead_ends:
            return False
        ch = surface[i]
        if not is_kanji(ch):
            if j < total and reading[j] == to_hiragana(ch):
                return _step(i + 1, j + 1)
            return False
        longest = total - j - literals_after[i + 1]
        if longest < 0:
            return False
        sizes = range(longest, -1, -1) if greedy else range(0, longest + 1)
        for size in sizes:
            captures.append(reading[j : j + size])
            if _step(i + 1, j + size):
                return True
            captures.pop()
        dead_ends.add((i, j))
        return False

    if _step(0, 0):
        return captures
    return None


def align(surface: str, reading: str, *, greedy: bool = True) -> list[Annotation]:
    """
    Split a token's aggregate reading across its individual kanji.

    Every kanji acts as a wildcard over the reading and every other character
    must appear literally (after hiragana coercion) at the matching position.
    The whole reading has to be consumed. With ``greedy`` the earliest kanji
    take the longest captures that still allow a match, mirroring a greedy
    regular expression; otherwise the shortest captures win.
    """
    hiragana = to_hiragana(reading)
    captures = _match_readings(surface, hiragana, greedy)
    if captures is None:
        raise UnalignableTokenError(surface, reading)
    annotations: list[Annotation] = []
    picked = iter(captures)
    for ch in surface:
        if is_kanji(ch):
            annotations.append(Annotation(ch, AnnotationKind.KANJI, next(picked)))
        else:
            annotations.append(Annotation(ch, AnnotationKind.NON_KANJI, to_hiragana(ch)))
    return annotations


def annotate_token(surface: str, reading: str, *, greedy: bool = True) -> list[Annotation]:
    hiragana = to_hiragana(reading)
    composition = classify(surface)
    if composition is CompositionClass.PURE_KANJI:
        return [Annotation(surface, AnnotationKind.KANJI, hiragana)]
    if composition is CompositionClass.MIXED:
        return align(surface, hiragana, greedy=greedy)
    if composition is CompositionClass.PURE_KANA:
        return [Annotation(ch, AnnotationKind.NON_KANJI, to_hiragana(ch)) for ch in surface]
    return [Annotation(ch, AnnotationKind.NON_KANJI, ch) for ch in surface]

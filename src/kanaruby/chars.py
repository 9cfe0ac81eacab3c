from __future__ import annotations

from enum import Enum

__all__ = [
    "CompositionClass",
    "classify",
    "has_hiragana",
    "has_kanji",
    "has_katakana",
    "is_hiragana",
    "is_kanji",
    "is_katakana",
    "is_romaji",
]


class CompositionClass(Enum):
    PURE_KANJI = "pure_kanji"
    MIXED = "mixed"
    PURE_KANA = "pure_kana"
    OTHER = "other"


def is_kanji(ch: str) -> bool:
    """Return True when the first character is a CJK ideograph.

    Only the unified, compatibility and extension-A blocks count; ideographs
    outside the basic multilingual plane are not recognized.
    """
    if not ch:
        return False
    code = ord(ch[0])
    return (
        0x4E00 <= code <= 0x9FCF
        or 0xF900 <= code <= 0xFAFF
        or 0x3400 <= code <= 0x4DBF
    )


def is_hiragana(ch: str) -> bool:
    if not ch:
        return False
    return 0x3041 <= ord(ch[0]) <= 0x309F


def is_katakana(ch: str) -> bool:
    if not ch:
        return False
    code = ord(ch[0])
    # U+30FB (middle dot) is punctuation, not a syllable.
    return 0x30A1 <= code <= 0x30FF and code != 0x30FB


_MACRON_VOWELS = frozenset("āīūēōĀĪŪĒŌ")


def is_romaji(text: str) -> bool:
    """Return True when every character is ASCII or a Hepburn macron vowel."""
    if not text:
        return False
    return all(ord(ch) < 0x80 or ch in _MACRON_VOWELS for ch in text)


def has_kanji(text: str) -> bool:
    return any(is_kanji(ch) for ch in text)


def has_hiragana(text: str) -> bool:
    return any(is_hiragana(ch) for ch in text)


def has_katakana(text: str) -> bool:
    return any(is_katakana(ch) for ch in text)


def classify(surface: str) -> CompositionClass:
    found_kanji = False
    found_kana = False
    for ch in surface:
        if is_kanji(ch):
            found_kanji = True
        elif is_hiragana(ch) or is_katakana(ch):
            found_kana = True
    if found_kanji and found_kana:
        return CompositionClass.MIXED
    if found_kanji:
        return CompositionClass.PURE_KANJI
    if found_kana:
        return CompositionClass.PURE_KANA
    return CompositionClass.OTHER

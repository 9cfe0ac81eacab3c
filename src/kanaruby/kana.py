from __future__ import annotations

import re
from functools import lru_cache
from typing import Callable

import jaconv
from pykakasi import kakasi

__all__ = [
    "SYLLABARIES",
    "to_hiragana",
    "to_kana",
    "to_katakana",
    "to_romaji",
    "transliterate",
]

SYLLABARIES = ("hiragana", "katakana", "romaji")

_KANA_OFFSET = 0x60
# hiragana and katakana syllables plus the prolonged sound mark; the katakana
# middle dot is punctuation and stays out
_KANA_RUN_RE = re.compile(r"[\u3041-\u309F\u30A1-\u30FA\u30FC-\u30FF]+")
_MACRON_VOWELS = "āīūēōĀĪŪĒŌ"
_ROMAJI_WORD_RE = re.compile(rf"[A-Za-z{_MACRON_VOWELS}][A-Za-z{_MACRON_VOWELS}']*")
_MACRON_SPELLING = str.maketrans(
    {"ā": "aa", "ī": "ii", "ū": "uu", "ē": "ee", "ō": "ou"}
)


def to_katakana(text: str) -> str:
    result = []
    for ch in text:
        code = ord(ch)
        if 0x3041 <= code <= 0x3096:
            result.append(chr(code + _KANA_OFFSET))
        elif ch == "ゝ":
            result.append("ヽ")
        elif ch == "ゞ":
            result.append("ヾ")
        elif ch == "ゟ":
            result.append("ヿ")
        else:
            result.append(ch)
    return "".join(result)


def to_hiragana(text: str) -> str:
    """Shift katakana to hiragana, leaving everything else untouched.

    Katakana without a hiragana counterpart (ヷ, ヸ, ヹ, ヺ) and the prolonged
    sound mark are kept as-is, so applying this twice is a no-op.
    """
    result = []
    for ch in text:
        code = ord(ch)
        if 0x30A1 <= code <= 0x30F6:
            result.append(chr(code - _KANA_OFFSET))
        elif ch == "ヽ":
            result.append("ゝ")
        elif ch == "ヾ":
            result.append("ゞ")
        elif ch == "ヿ":
            result.append("ゟ")
        else:
            result.append(ch)
    return "".join(result)


@lru_cache(maxsize=1)
def _romaji_converter() -> Callable[[str], str]:
    kk = kakasi()

    def _convert(text: str) -> str:
        items = kk.convert(text)
        return "".join(item.get("hepburn") or item.get("orig", "") for item in items)

    return _convert


def to_romaji(text: str) -> str:
    """Romanize kana runs with Hepburn spelling.

    Kanji, Latin text, digits, punctuation and whitespace are copied through
    verbatim, so text without a reading is never guessed at.
    """
    if not text:
        return text
    convert = _romaji_converter()
    return _KANA_RUN_RE.sub(lambda match: convert(match.group(0)), text)


def _romaji_word_to_kana(word: str) -> str:
    kana = jaconv.alphabet2kana(word.lower().translate(_MACRON_SPELLING))
    if word.isupper():
        return to_katakana(kana)
    return kana


def to_kana(text: str) -> str:
    """Spell romaji words in kana: all-caps words as katakana, others as hiragana."""
    if not text:
        return text
    return _ROMAJI_WORD_RE.sub(lambda match: _romaji_word_to_kana(match.group(0)), text)


def transliterate(hiragana: str, target: str) -> str:
    if target == "hiragana":
        return hiragana
    if target == "katakana":
        return to_katakana(hiragana)
    if target == "romaji":
        return to_romaji(hiragana)
    raise ValueError(f"Unknown syllabary: {target!r}")

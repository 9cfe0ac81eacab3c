from .align import Annotation, AnnotationKind, UnalignableTokenError, align, annotate_token
from .chars import (
    CompositionClass,
    classify,
    has_hiragana,
    has_kanji,
    has_katakana,
    is_hiragana,
    is_kanji,
    is_katakana,
    is_romaji,
)
from .core import (
    ConvertOptions,
    InvalidOptionError,
    convert,
    set_debug_logging,
    to_hiragana,
    to_katakana,
    to_romaji,
    tokenize,
)
from .kana import to_kana
from .nlp import AnalyzerUnavailableError, FugashiAnalyzer, Token, TokenizationError, init_analyzer

__all__ = [
    "Annotation",
    "AnnotationKind",
    "UnalignableTokenError",
    "align",
    "annotate_token",
    "CompositionClass",
    "classify",
    "is_kanji",
    "is_hiragana",
    "is_katakana",
    "is_romaji",
    "has_kanji",
    "has_hiragana",
    "has_katakana",
    "ConvertOptions",
    "InvalidOptionError",
    "convert",
    "set_debug_logging",
    "to_hiragana",
    "to_katakana",
    "to_romaji",
    "to_kana",
    "tokenize",
    "AnalyzerUnavailableError",
    "FugashiAnalyzer",
    "Token",
    "TokenizationError",
    "init_analyzer",
]

from __future__ import annotations

import sys
from dataclasses import asdict, dataclass, replace
from typing import Sequence

from .align import Annotation, AnnotationKind, UnalignableTokenError, annotate_token
from .chars import has_kanji, has_katakana
from .kana import SYLLABARIES, to_hiragana as _kana_to_hiragana, to_romaji as _kana_to_romaji
from .nlp import Analyzer, Token
from .render import ANNOTATED_MODES, render

__all__ = [
    "MODES",
    "ConvertOptions",
    "InvalidOptionError",
    "convert",
    "set_debug_logging",
    "to_hiragana",
    "to_katakana",
    "to_romaji",
    "tokenize",
]

MODES = ("normal", "spaced") + ANNOTATED_MODES

_DEBUG_LOG = False


def set_debug_logging(enabled: bool) -> None:
    global _DEBUG_LOG
    _DEBUG_LOG = enabled


def _debug_log(message: str) -> None:
    if _DEBUG_LOG:
        print(f"[kanaruby debug] {message}", file=sys.stderr)


class InvalidOptionError(ValueError):
    """Raised when conversion options name an unknown mode or syllabary."""


@dataclass(frozen=True)
class ConvertOptions:
    """
    Settings for a single ``convert`` call.

    ``strict`` controls what happens when a token's reading cannot be split
    across its kanji: raise ``UnalignableTokenError`` (default) or emit the
    token without annotation. ``greedy`` selects the capture policy of the
    aligner for ambiguous splits.
    """

    to: str = "hiragana"
    mode: str = "normal"
    delimiter_start: str = "("
    delimiter_end: str = ")"
    strict: bool = True
    greedy: bool = True

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise InvalidOptionError(
                f"Unknown mode {self.mode!r}; expected one of: {', '.join(MODES)}"
            )
        if self.to not in SYLLABARIES:
            raise InvalidOptionError(
                f"Unknown target syllabary {self.to!r}; expected one of: {', '.join(SYLLABARIES)}"
            )


def _resolve_options(options: ConvertOptions | None, overrides: dict[str, object]) -> ConvertOptions:
    if options is None:
        try:
            return ConvertOptions(**overrides)  # type: ignore[arg-type]
        except TypeError as exc:
            raise InvalidOptionError(str(exc)) from exc
    if overrides:
        try:
            return replace(options, **overrides)
        except TypeError as exc:
            raise InvalidOptionError(str(exc)) from exc
    return options


def tokenize(text: str, analyzer: Analyzer) -> list[Token]:
    """Segment ``text`` with ``analyzer``; readings are left as the analyzer gave them."""
    return list(analyzer.tokenize(text or ""))


def _normalize_tokens(tokens: Sequence[Token]) -> list[Token]:
    return [token if token.reading else Token(token.surface, token.surface) for token in tokens]


def _plain_reading(token: Token, target: str) -> str:
    if target != "hiragana":
        return token.reading or token.surface
    if has_kanji(token.surface) and not has_katakana(token.surface):
        return _kana_to_hiragana(token.reading or token.surface)
    return token.surface


def _convert_plain(tokens: list[Token], options: ConvertOptions) -> str:
    separator = " " if options.mode == "spaced" else ""
    text = separator.join(_plain_reading(token, options.to) for token in tokens)
    if options.to == "romaji":
        return _kana_to_romaji(text)
    return text


def _annotate(tokens: list[Token], options: ConvertOptions) -> list[Annotation]:
    annotations: list[Annotation] = []
    for token in tokens:
        reading = token.reading or token.surface
        try:
            annotations.extend(annotate_token(token.surface, reading, greedy=options.greedy))
        except UnalignableTokenError as exc:
            if options.strict:
                raise
            _debug_log(f"leaving {exc.surface!r} unannotated (reading {exc.reading!r})")
            annotations.extend(
                Annotation(ch, AnnotationKind.NON_KANJI, ch) for ch in token.surface
            )
    return annotations


def convert(
    text: str,
    analyzer: Analyzer,
    options: ConvertOptions | None = None,
    **overrides: object,
) -> str:
    """
    Convert Japanese ``text`` to the configured syllabary and notation.

    ``normal`` and ``spaced`` replace kanji tokens by their readings;
    ``okurigana`` and ``furigana`` keep the original text and attach a
    reading to every kanji span. Options are validated before ``analyzer``
    is consulted, and either the whole text converts or an exception
    propagates.
    """
    resolved = _resolve_options(options, overrides)
    tokens = _normalize_tokens(tokenize(text, analyzer))
    _debug_log(f"{len(tokens)} tokens; options={asdict(resolved)}")
    if resolved.mode in ANNOTATED_MODES:
        annotations = _annotate(tokens, resolved)
        return render(
            annotations,
            resolved.to,
            resolved.mode,
            resolved.delimiter_start,
            resolved.delimiter_end,
        )
    return _convert_plain(tokens, resolved)


def to_hiragana(text: str, analyzer: Analyzer, **options: object) -> str:
    options["to"] = "hiragana"
    return convert(text, analyzer, **options)


def to_katakana(text: str, analyzer: Analyzer, **options: object) -> str:
    options["to"] = "katakana"
    return convert(text, analyzer, **options)


def to_romaji(text: str, analyzer: Analyzer, **options: object) -> str:
    options["to"] = "romaji"
    return convert(text, analyzer, **options)

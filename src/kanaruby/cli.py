from __future__ import annotations

import argparse
import sys
from importlib import metadata
from pathlib import Path

import tomllib
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .align import UnalignableTokenError
from .core import MODES, ConvertOptions, InvalidOptionError, convert, set_debug_logging
from .dictionary import DICDIR_ENV, DictionaryNotFoundError, dictionary_sources, find_dicdir
from .kana import SYLLABARIES
from .nlp import AnalyzerUnavailableError, TokenizationError, init_analyzer

_UNKNOWN_VERSION = "0.0.0+unknown"


def _resolve_version() -> str:
    try:
        return metadata.version("kanaruby")
    except metadata.PackageNotFoundError:
        pass
    # source checkout: src/kanaruby/cli.py -> pyproject.toml two levels up
    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    try:
        project = tomllib.loads(pyproject.read_text(encoding="utf-8")).get("project", {})
    except (OSError, tomllib.TOMLDecodeError):
        return _UNKNOWN_VERSION
    return project.get("version") or _UNKNOWN_VERSION


__version__ = _resolve_version()


def _add_convert_arguments(ap: argparse.ArgumentParser) -> None:
    ap.add_argument(
        "text",
        nargs="+",
        help="Japanese text to convert. Wrap the phrase in quotes if it contains spaces.",
    )
    ap.add_argument(
        "-t",
        "--to",
        choices=list(SYLLABARIES),
        default="hiragana",
        help="Target syllabary (default: %(default)s).",
    )
    ap.add_argument(
        "-m",
        "--mode",
        choices=list(MODES),
        default="normal",
        help=(
            "'normal' replaces kanji with readings, 'spaced' also separates words, "
            "'okurigana' appends readings in delimiters, 'furigana' emits <ruby> markup "
            "(default: %(default)s)."
        ),
    )
    ap.add_argument(
        "--delimiter-start",
        default="(",
        help="Opening delimiter for okurigana and <rp> fallbacks (default: %(default)s).",
    )
    ap.add_argument(
        "--delimiter-end",
        default=")",
        help="Closing delimiter for okurigana and <rp> fallbacks (default: %(default)s).",
    )
    ap.add_argument(
        "--lenient",
        action="store_true",
        help="Leave tokens whose reading cannot be split across their kanji unannotated instead of failing.",
    )
    ap.add_argument(
        "--lazy",
        action="store_true",
        help="Give ambiguous splits the shortest reading per kanji instead of the longest.",
    )
    ap.add_argument(
        "--debug",
        action="store_true",
        help="Print conversion diagnostics to stderr.",
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="kanaruby",
        description=(
            "Render Japanese text as hiragana, katakana or romaji, optionally with "
            "okurigana or furigana annotations."
        ),
    )
    ap.add_argument("-v", "--version", action="version", version=f"kanaruby {__version__}")
    commands = ap.add_subparsers(dest="command", metavar="{convert,dictionary}")

    convert_cmd = commands.add_parser(
        "convert",
        help="Convert Japanese text using the morphological analyzer.",
    )
    _add_convert_arguments(convert_cmd)
    convert_cmd.set_defaults(handler=_run_convert)

    dictionary_cmd = commands.add_parser(
        "dictionary",
        help=f"Show which UniDic dictionary the analyzer loads ({DICDIR_ENV} overrides).",
    )
    dictionary_cmd.set_defaults(handler=_run_dictionary)
    return ap


def _run_convert(args: argparse.Namespace) -> int:
    set_debug_logging(bool(getattr(args, "debug", False)))
    text = " ".join(args.text).strip()
    if not text:
        raise SystemExit("No text provided for conversion.")
    try:
        options = ConvertOptions(
            to=args.to,
            mode=args.mode,
            delimiter_start=args.delimiter_start,
            delimiter_end=args.delimiter_end,
            strict=not args.lenient,
            greedy=not args.lazy,
        )
    except InvalidOptionError as exc:
        raise SystemExit(str(exc)) from exc
    try:
        analyzer = init_analyzer()
    except AnalyzerUnavailableError as exc:
        raise SystemExit(str(exc)) from exc
    try:
        converted = convert(text, analyzer, options)
    except UnalignableTokenError as exc:
        raise SystemExit(f"{exc} (rerun with --lenient to skip it)") from exc
    except TokenizationError as exc:
        raise SystemExit(str(exc)) from exc
    print(converted)
    return 0


def _run_dictionary(args: argparse.Namespace) -> int:
    console = Console()
    table = Table("source", "path", "status")
    for source in dictionary_sources():
        path = Text(str(source.path)) if source.path else Text("-", style="dim")
        table.add_row(source.origin, path, "ok" if source.usable else "missing")
    console.print(table)
    try:
        selected = find_dicdir()
    except DictionaryNotFoundError as exc:
        raise SystemExit(str(exc)) from exc
    if selected is None:
        console.print(
            Text(f"No UniDic dictionary found; install 'unidic-lite' or set {DICDIR_ENV}."),
            soft_wrap=True,
        )
    else:
        console.print(Text(f"Analyzer dictionary: {selected}"), soft_wrap=True)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 0
    return handler(args)


if __name__ == "__main__":
    raise SystemExit(main())

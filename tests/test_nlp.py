from __future__ import annotations

import sys
import warnings
from collections import namedtuple
from types import SimpleNamespace

import pytest

import kanaruby.nlp as nlp
from kanaruby.core import convert
from kanaruby.dictionary import DICDIR_ENV
from kanaruby.nlp import AnalyzerUnavailableError, FugashiAnalyzer, Token, TokenizationError

_Feature = namedtuple("_Feature", ["pos1", "kana", "pron"])


def _node(surface: str, kana: str | None, pron: str | None = None) -> SimpleNamespace:
    return SimpleNamespace(surface=surface, feature=_Feature("名詞", kana, pron))


def _analyzer_with(nodes: list[SimpleNamespace]) -> FugashiAnalyzer:
    analyzer = FugashiAnalyzer.__new__(FugashiAnalyzer)
    analyzer._tagger = lambda text: list(nodes)
    return analyzer


def test_tokenize_reemits_skipped_whitespace() -> None:
    analyzer = _analyzer_with([_node("漢字", "カンジ"), _node("です", "デス")])
    tokens = analyzer.tokenize("漢字 です ")
    assert tokens == [
        Token("漢字", "カンジ"),
        Token(" ", None),
        Token("です", "デス"),
        Token(" ", None),
    ]
    assert "".join(token.surface for token in tokens) == "漢字 です "


def test_placeholder_readings_become_none() -> None:
    analyzer = _analyzer_with([_node("ＡＢＣ", "*", "*"), _node("。", None, None)])
    assert analyzer.tokenize("ＡＢＣ。") == [Token("ＡＢＣ", None), Token("。", None)]


def test_reading_falls_back_to_pronunciation_and_is_katakana() -> None:
    analyzer = _analyzer_with([_node("今日", None, "きょう")])
    assert analyzer.tokenize("今日") == [Token("今日", "キョウ")]


def test_tuple_features_without_names_yield_no_reading() -> None:
    analyzer = FugashiAnalyzer.__new__(FugashiAnalyzer)
    analyzer._tagger = lambda text: [SimpleNamespace(surface="x", feature=("名詞", "*"))]
    assert analyzer.tokenize("x") == [Token("x", None)]


def test_empty_text_is_not_tagged() -> None:
    analyzer = FugashiAnalyzer.__new__(FugashiAnalyzer)

    def _fail(text: str) -> list[SimpleNamespace]:
        raise AssertionError("tagger should not run")

    analyzer._tagger = _fail
    assert analyzer.tokenize("") == []


def test_surface_missing_from_input_raises() -> None:
    analyzer = _analyzer_with([_node("漢字", "カンジ"), _node("語", "ゴ")])
    with pytest.raises(TokenizationError, match="語"):
        analyzer.tokenize("漢字です")


class _RecordingTagger:
    created: list[str] = []

    def __init__(self, args: str = "") -> None:
        _RecordingTagger.created.append(args)


@pytest.fixture
def fake_fugashi(monkeypatch):
    _RecordingTagger.created = []
    monkeypatch.setitem(sys.modules, "fugashi", SimpleNamespace(Tagger=_RecordingTagger))
    return _RecordingTagger.created


def test_found_dictionary_loads_without_warning(fake_fugashi, monkeypatch, tmp_path) -> None:
    (tmp_path / "mecabrc").write_text("", encoding="utf-8")
    monkeypatch.setattr(nlp, "find_dicdir", lambda: tmp_path)
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        nlp.init_analyzer()
    assert fake_fugashi == [f"-r {tmp_path / 'mecabrc'} -d {tmp_path}"]


def test_missing_dictionary_warns_and_uses_default_tagger(fake_fugashi, monkeypatch) -> None:
    monkeypatch.setattr(nlp, "find_dicdir", lambda: None)
    with pytest.warns(RuntimeWarning, match="unidic-lite"):
        nlp.init_analyzer()
    assert fake_fugashi == [""]


def test_bad_dictionary_override_is_reported(fake_fugashi, monkeypatch, tmp_path) -> None:
    monkeypatch.setenv(DICDIR_ENV, str(tmp_path))
    with pytest.raises(AnalyzerUnavailableError, match=DICDIR_ENV):
        nlp.init_analyzer()
    assert fake_fugashi == []


def _real_analyzer() -> FugashiAnalyzer:
    pytest.importorskip("fugashi")
    from kanaruby.nlp import init_analyzer

    try:
        return init_analyzer()
    except AnalyzerUnavailableError as exc:
        pytest.skip(str(exc))


def test_fugashi_backend_reads_kanji() -> None:
    analyzer = _real_analyzer()
    tokens = analyzer.tokenize("漢字")
    assert tokens == [Token("漢字", "カンジ")]
    assert convert("漢字", analyzer, to="romaji", mode="normal") == "kanji"


def test_fugashi_backend_okurigana_and_furigana() -> None:
    analyzer = _real_analyzer()
    assert convert("食べる", analyzer, to="romaji", mode="okurigana") == "食(ta)べる"
    assert convert("食べる", analyzer, mode="furigana") == "<ruby>食<rp>(</rp><rt>た</rt><rp>)</rp></ruby>べる"


def test_fugashi_backend_keeps_spaces() -> None:
    analyzer = _real_analyzer()
    tokens = analyzer.tokenize("漢字 かな")
    assert "".join(token.surface for token in tokens) == "漢字 かな"

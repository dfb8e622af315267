from __future__ import annotations

import io
from pathlib import Path

import pytest
import word_counter.cleaning as cleaning
from word_counter import lookup
from word_counter.cleaning import TokenSourceOptions, load_tokens, normalize, normalize_word, read_query
from pytest import MonkeyPatch


def test_normalize_lowercases_strips_and_drops_single_letters() -> None:
    assert normalize(["Cheese!", "a", "I", "the", "THE"]) == ["cheese", "a", "the", "the"]


def test_normalize_keeps_order_and_never_splits_tokens() -> None:
    tokens = ["(milk),", "don't", "co-op", "42", "A.", "x"]

    assert normalize(tokens) == ["milk", "dont", "coop", "a"]


def test_normalize_is_idempotent() -> None:
    once = normalize(["The", "QUICK", "brown's", "fox!!", "a", "b", "über"])

    assert normalize(once) == once


def test_normalize_drops_non_ascii_letters() -> None:
    assert normalize(["über", "é", "naïve"]) == ["ber", "nave"]


def test_normalize_word_does_not_filter_length() -> None:
    assert normalize_word("I!") == "i"


def test_load_tokens_splits_on_whitespace(tmp_path: Path) -> None:
    path = tmp_path / "input.txt"
    path.write_text("The cheese,\n\tthe  MILK\n", encoding="utf-8")

    assert load_tokens(path) == ["The", "cheese,", "the", "MILK"]


def test_load_tokens_with_nltk_tokenizer(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "input.txt"
    path.write_text("Cats, dogs.", encoding="utf-8")

    def fake_word_tokenize(text: str) -> list[str]:
        return ["Cats", ",", "dogs", "."]

    monkeypatch.setattr(cleaning, "word_tokenize", fake_word_tokenize)

    tokens = load_tokens(path, TokenSourceOptions(tokenizer="nltk"))

    assert tokens == ["Cats", ",", "dogs", "."]
    assert normalize(tokens) == ["cats", "dogs"]


def test_load_tokens_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_tokens(tmp_path / "missing.txt")


def test_load_tokens_drops_undecodable_bytes(tmp_path: Path) -> None:
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"caf\xe9 the the")

    assert normalize(load_tokens(path)) == ["caf", "the", "the"]


def test_load_tokens_strict_decoding_raises(tmp_path: Path) -> None:
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"caf\xe9")

    with pytest.raises(UnicodeDecodeError):
        load_tokens(path, TokenSourceOptions(errors="strict"))


def test_load_tokens_directory(tmp_path: Path) -> None:
    with pytest.raises(IsADirectoryError):
        load_tokens(tmp_path)


def test_unknown_tokenizer(tmp_path: Path) -> None:
    path = tmp_path / "input.txt"
    path.write_text("words", encoding="utf-8")

    with pytest.raises(ValueError, match="Unknown tokenizer"):
        load_tokens(path, TokenSourceOptions(tokenizer="spacy"))


def test_read_query_lowercases_line() -> None:
    output = io.StringIO()

    assert read_query(io.StringIO("Cheese\r\nmilk\n"), output=output) == "cheese"
    assert "Enter word" in output.getvalue()


def test_read_query_keeps_surrounding_spaces() -> None:
    query = read_query(io.StringIO(" The\n"), prompt=None)

    assert query == " the"
    assert lookup({"the": 2}, query) == (0, False)


def test_read_query_at_eof_returns_empty() -> None:
    assert read_query(io.StringIO(""), prompt=None) == ""


def test_read_query_on_read_error_returns_empty() -> None:
    class BrokenStream(io.StringIO):
        def readline(self, size: int | None = -1) -> str:
            raise OSError("terminal went away")

    assert read_query(BrokenStream(), prompt=None) == ""

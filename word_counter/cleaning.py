from __future__ import annotations

import logging
import os
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, TextIO

from nltk import word_tokenize

LOGGER = logging.getLogger(__name__)

REMOVABLE_PATTERN = re.compile(r"[^a-z]")
QUERY_PROMPT = "Enter word to search count for (confirm with enter):"


@dataclass(frozen=True)
class TokenSourceOptions:
    """Configuration for reading raw tokens."""

    tokenizer: str = "whitespace"  # "whitespace" or "nltk"
    encoding: str = "utf-8"
    errors: str = "ignore"


def env_path(var_name: str, default: str) -> Path:
    return Path(os.getenv(var_name, default))


def normalize_word(token: str) -> str:
    """Lowercase a token and strip everything that is not a-z."""

    return REMOVABLE_PATTERN.sub("", token.lower())


def normalize(tokens: Iterable[str]) -> List[str]:
    """Clean raw tokens into countable words.

    Tokens are lowercased and reduced to the letters a-z. Results shorter than
    two characters are dropped, except for the word "a". Surviving tokens keep
    their input order and running the function on its own output changes
    nothing.
    """

    cleaned: List[str] = []
    for token in tokens:
        word = normalize_word(token)
        if len(word) > 1 or word == "a":
            cleaned.append(word)
    return cleaned


def _whitespace_tokenizer(text: str) -> List[str]:
    return text.split()


def _nltk_tokenizer(text: str) -> List[str]:
    return list(word_tokenize(text))


def build_tokenizer(options: TokenSourceOptions) -> Callable[[str], List[str]]:
    if options.tokenizer == "whitespace":
        return _whitespace_tokenizer
    if options.tokenizer == "nltk":
        return _nltk_tokenizer
    raise ValueError(f"Unknown tokenizer '{options.tokenizer}'. Expected 'whitespace' or 'nltk'.")


def load_tokens(path: Path, options: TokenSourceOptions | None = None) -> List[str]:
    """Read a text file and split it into raw tokens."""

    source_options = options or TokenSourceOptions()
    tokenizer = build_tokenizer(source_options)

    if not path.exists():
        raise FileNotFoundError(f"Input file does not exist: {path}")
    if path.is_dir():
        raise IsADirectoryError(f"Input file is a directory: {path}")

    LOGGER.info("Loading words from %s", path)
    with path.open("r", encoding=source_options.encoding, errors=source_options.errors) as infile:
        tokens = tokenizer(infile.read())
    LOGGER.debug("Read %d raw tokens from %s", len(tokens), path)
    return tokens


def read_query(
    stream: TextIO | None = None,
    *,
    prompt: str | None = QUERY_PROMPT,
    output: TextIO | None = None,
) -> str:
    """Read one query line from the terminal.

    The line ending is dropped and the rest lowercased. End of input or a
    read failure gives an empty string, which never matches a counted word.
    """

    source = stream if stream is not None else sys.stdin
    if prompt:
        print(prompt, file=output if output is not None else sys.stdout)

    try:
        line = source.readline()
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.error("Error on reading input: %s", exc)
        return ""

    return line.rstrip("\r\n").lower()

"""Compatibility wrapper for counting words in a text file.

Use the packaged CLI instead:
    python -m word_counter.cli count input.txt
or install the package and run `word-counter count input.txt`.
"""

from word_counter.cli import count_cli


if __name__ == "__main__":
    count_cli()

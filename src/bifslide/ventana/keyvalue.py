"""Tokenizer for ``key=value`` annotations in TIFF ImageDescription tags.

Ventana pyramid directories describe themselves with whitespace-separated
tokens such as ``level=0 mag=40 quality=90``. The grammar is:

    token   := key "=" value
    value   := quoted | bare
    quoted  := '"' <any chars except '"'> '"'
             | "'" <any chars except "'"> "'"
    bare    := <one or more non-whitespace chars>

A key only matches at the start of the text or after whitespace, so
``sublevel=3`` is not a ``level`` token. A quoted value must be followed
by whitespace or the end of the text; ``level="0"x`` is not a token.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import NamedTuple

QUOTE_CHARS = frozenset({'"', "'"})


class Token(NamedTuple):
    """A single ``key=value`` token.

    Attributes:
        key: Token key.
        value: Token value without surrounding quotes.
        quoted: Whether the value was quote-delimited.
    """

    key: str
    value: str
    quoted: bool


def _read_value(text: str, start: int) -> tuple[str, bool, int] | None:
    """Read a value starting at ``start``.

    Returns:
        (value, quoted, end) or None when no value can be read.
    """
    if start >= len(text):
        return None

    first = text[start]
    if first in QUOTE_CHARS:
        end = text.find(first, start + 1)
        if end == -1:
            return None
        if end + 1 < len(text) and not text[end + 1].isspace():
            return None
        return text[start + 1 : end], True, end + 1

    end = start
    while end < len(text) and not text[end].isspace():
        end += 1
    if end == start:
        return None
    return text[start:end], False, end


def iter_tokens(text: str) -> Iterator[Token]:
    """Yield every ``key=value`` token in ``text`` from left to right.

    Words without ``=`` and tokens whose value cannot be read are skipped.
    """
    pos = 0
    length = len(text)
    while pos < length:
        while pos < length and text[pos].isspace():
            pos += 1
        word_start = pos
        while pos < length and not text[pos].isspace() and text[pos] != "=":
            pos += 1
        if pos >= length or text[pos] != "=" or pos == word_start:
            # not a key; skip the rest of the word
            while pos < length and not text[pos].isspace():
                pos += 1
            continue

        key = text[word_start:pos]
        read = _read_value(text, pos + 1)
        if read is None:
            pos += 1
            while pos < length and not text[pos].isspace():
                pos += 1
            continue

        value, quoted, pos = read
        yield Token(key, value, quoted)


def find_value(text: str, key: str, *, quoted: bool | None = None) -> str | None:
    """Return the value of the first ``key`` token in ``text``.

    Args:
        text: Free-text description to scan.
        key: Key to look for, matched literally.
        quoted: True to accept only quoted values, False to accept only
            unquoted values, None to accept either.

    Returns:
        The value without quotes, or None if the key is absent.
    """
    for token in iter_tokens(text):
        if token.key != key:
            continue
        if quoted is None or token.quoted == quoted:
            return token.value
    return None


def parse_description(text: str) -> dict[str, str]:
    """Return all ``key=value`` pairs in ``text``; the first occurrence wins."""
    values: dict[str, str] = {}
    for token in iter_tokens(text):
        values.setdefault(token.key, token.value)
    return values

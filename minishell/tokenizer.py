"""Split an input line into raw word and operator strings."""

from __future__ import annotations

import os
from typing import Any

_SPACES = " \t\n\v\f\r"
_OPERATORS = "|<>"
_QUOTES = "\"'"


def _is_var_char(char: str) -> bool:
    return (char.isascii() and char.isalnum()) or char == "_"


def _read_quoted(text: str, pos: int) -> tuple[str, int]:
    quote = text[pos]
    end = text.find(quote, pos + 1)
    if end == -1:
        return f"{quote}{text[pos + 1:]}{quote}", len(text)
    return f"{quote}{text[pos + 1:end]}{quote}", end + 1


def _read_variable(text: str, pos: int, shell: Any) -> tuple[str, int]:
    pos += 1
    if pos < len(text) and text[pos] == "?":
        status = shell.exit_status if shell is not None else 0
        return str(status), pos + 1
    if pos >= len(text) or not _is_var_char(text[pos]):
        return "$", pos
    start = pos
    while pos < len(text) and _is_var_char(text[pos]):
        pos += 1
    return os.environ.get(text[start:pos], ""), pos


def _read_operator(text: str, pos: int) -> tuple[str, int]:
    char = text[pos]
    if char in "<>" and text[pos + 1:pos + 2] == char:
        return char * 2, pos + 2
    return char, pos + 1


def _read_word(text: str, pos: int) -> tuple[str, int]:
    start = pos
    stops = _SPACES + _OPERATORS + _QUOTES + "$"
    while pos < len(text) and text[pos] not in stops:
        pos += 1
    return text[start:pos], pos


def tokenize(text: str, shell: Any = None) -> list[str]:
    """Split ``text`` into raw tokens.

    Quoted runs keep their quotes, ``$?`` becomes the shell's exit status and
    ``$NAME`` is replaced with the process environment's value.
    """
    tokens: list[str] = []
    pos = 0
    while True:
        while pos < len(text) and text[pos] in _SPACES:
            pos += 1
        if pos >= len(text):
            break
        char = text[pos]
        if char in _QUOTES:
            token, pos = _read_quoted(text, pos)
        elif char == "$":
            token, pos = _read_variable(text, pos, shell)
        elif char in _OPERATORS:
            token, pos = _read_operator(text, pos)
        else:
            token, pos = _read_word(text, pos)
        tokens.append(token)
    return tokens
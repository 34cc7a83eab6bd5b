"""Splitting a command line into tokens, with quote handling and expansion."""

from __future__ import annotations

from collections.abc import Iterator

from .env import ShellState
from .models import SYNTAX_ERROR_STATUS, ShellSyntaxError

_SPACES = " \t\n\v\f\r"
_QUOTES = "'\""


def _is_space(ch: str) -> bool:
    return ch != "" and ch in _SPACES


def _is_name_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch == "_")


def _char_at(text: str, pos: int) -> str:
    return text[pos] if 0 <= pos < len(text) else ""


def is_empty_or_spaces(text: str) -> bool:
    """True when ``text`` holds nothing but whitespace."""
    return all(_is_space(ch) for ch in text)


def skip_spaces(text: str, pos: int) -> int:
    """Return the first position at or after ``pos`` that is not whitespace."""
    while pos < len(text) and _is_space(text[pos]):
        pos += 1
    return pos


def has_unclosed_quotes(text: str) -> bool:
    """True when a single or double quote in ``text`` is never closed."""
    pos = 0
    length = len(text)
    while pos < length:
        if text[pos] in _QUOTES:
            closing = text.find(text[pos], pos + 1)
            if closing == -1:
                return True
            pos = closing
        pos += 1
    return False


def should_parse_as_special(text: str, pos: int) -> bool:
    """True when position ``pos`` lies outside any quoted section."""
    in_single = False
    in_double = False
    for ch in text[:pos]:
        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
    return not in_single and not in_double


def expand_variable(text: str, pos: int, state: ShellState) -> tuple[str, int]:
    """Expand the variable reference starting at ``pos``.

    ``pos`` may point at the ``$`` or just past it. Returns the expanded
    value and the position after the reference. A lone ``$`` stays literal,
    ``$?`` gives the last exit status and unknown names expand to "".
    """
    if _char_at(text, pos) == "$":
        pos += 1
        following = _char_at(text, pos)
        if following == "" or _is_space(following) or following in _QUOTES:
            return "$", pos
    if _char_at(text, pos) == "?":
        return str(state.last_exit_status), pos + 1
    start = pos
    while pos < len(text) and _is_name_char(text[pos]):
        pos += 1
    value = state.get(text[start:pos])
    return ("" if value is None else value), pos


def _handle_variable(text: str, pos: int, state: ShellState) -> tuple[str, int]:
    following = _char_at(text, pos + 1)
    if following == "" or _is_space(following) or following in _QUOTES:
        return "$", pos + 1
    return expand_variable(text, pos, state)


def parse_single_quote(text: str, pos: int) -> tuple[str, int]:
    """Read a single-quoted section starting at ``pos``, without expansion."""
    start = pos + 1
    closing = text.find("'", start)
    if closing == -1:
        return text[start:], len(text)
    return text[start:closing], closing + 1


def parse_double_quote(text: str, pos: int, state: ShellState) -> tuple[str, int]:
    """Read a double-quoted section starting at ``pos``, expanding variables."""
    pos += 1
    parts: list[str] = []
    length = len(text)
    while pos < length and text[pos] != '"':
        start = pos
        while pos < length and text[pos] not in '"$':
            pos += 1
        parts.append(text[start:pos])
        if _char_at(text, pos) == "$":
            value, pos = expand_variable(text, pos, state)
            parts.append(value)
    if pos < length:
        pos += 1
    return "".join(parts), pos


def _single_quoted(text: str, pos: int) -> tuple[str, int]:
    start = pos + 1
    closing = text.find("'", start)
    if closing == -1:
        return text[start:len(text) - 1], len(text)
    return text[start:closing], closing + 1


def _double_quoted(text: str, pos: int, state: ShellState) -> tuple[str, int]:
    pos += 1
    parts: list[str] = []
    length = len(text)
    while pos < length and text[pos] != '"':
        ch = text[pos]
        if ch == "\\" and _char_at(text, pos + 1) == '"':
            parts.append('"')
            pos += 2
        elif ch == "$":
            pos += 1
            special = _char_at(text, pos)
            if special == "?":
                parts.append(str(state.last_exit_status))
                pos += 1
            elif special == "$":
                pos += 1
            else:
                value, pos = expand_variable(text, pos, state)
                parts.append(value)
        else:
            start = pos
            while pos < length and text[pos] not in '"$' and not (
                text[pos] == "\\" and _char_at(text, pos + 1) == '"'
            ):
                pos += 1
            parts.append(text[start:pos])
    if pos < length:
        pos += 1
    return "".join(parts), pos


def parse_quoted_token(
    text: str, pos: int, state: ShellState
) -> tuple[str, int] | None:
    """Read a quoted section at ``pos``; double quotes honour ``\\"``.

    Returns None when ``pos`` does not hold a quote.
    """
    ch = _char_at(text, pos)
    if ch == "'":
        return _single_quoted(text, pos)
    if ch == '"':
        return _double_quoted(text, pos, state)
    return None


def _read_word(text: str, pos: int, state: ShellState) -> tuple[str, int]:
    parts: list[str] = []
    length = len(text)
    while pos < length and not _is_space(text[pos]):
        ch = text[pos]
        if ch == "|" and should_parse_as_special(text, pos):
            break
        if ch == "'":
            value, pos = parse_single_quote(text, pos)
        elif ch == '"':
            value, pos = parse_double_quote(text, pos, state)
        elif ch == "$" and should_parse_as_special(text, pos):
            value, pos = _handle_variable(text, pos, state)
        else:
            value, pos = ch, pos + 1
        parts.append(value)
    return "".join(parts), pos


def _iter_tokens(text: str, state: ShellState) -> Iterator[str]:
    pos = 0
    length = len(text)
    while pos < length:
        pos = skip_spaces(text, pos)
        if pos >= length:
            break
        ch = text[pos]
        if ch in "<>":
            if _char_at(text, pos + 1) == ch:
                yield ch * 2
                pos += 2
            else:
                yield ch
                pos += 1
        elif ch == "|":
            yield "|"
            pos += 1
        else:
            word, pos = _read_word(text, pos, state)
            yield word


def tokenize(text: str, state: ShellState) -> list[str]:
    """Split a command line into tokens.

    Raises ShellSyntaxError (and records status 2) on unclosed quotes.
    """
    if has_unclosed_quotes(text):
        state.last_exit_status = SYNTAX_ERROR_STATUS
        raise ShellSyntaxError("syntax error: unclosed quotes")
    return list(_iter_tokens(text, state))
"""Syntax checks run over a token list before commands are built."""

from __future__ import annotations

from collections.abc import Sequence

from .env import ShellState
from .models import SYNTAX_ERROR_STATUS, ShellSyntaxError

REDIRECTION_TOKENS = frozenset({"<", "<<", ">", ">>"})
INVALID_TOKENS = frozenset({">>>", "<<<", ">>|", "<<|"})


def is_redirection(token: str | None) -> bool:
    """True when ``token`` is one of the redirection operators."""
    return token in REDIRECTION_TOKENS


def _fail(state: ShellState, token: str) -> ShellSyntaxError:
    state.last_exit_status = SYNTAX_ERROR_STATUS
    return ShellSyntaxError.unexpected(token)


def _check_token(tokens: Sequence[str], index: int, state: ShellState) -> None:
    token = tokens[index]
    following = tokens[index + 1] if index + 1 < len(tokens) else None
    if token == "|" and (following is None or following == "|"):
        raise _fail(state, "|")
    if is_redirection(token) and following is None:
        raise _fail(state, "newline")
    if token in INVALID_TOKENS:
        raise _fail(state, token)


def _check_redirection_conflicts(tokens: Sequence[str], state: ShellState) -> None:
    for token, following in zip(tokens, [*tokens[1:], None]):
        if not is_redirection(token):
            continue
        if following is None or following == "|":
            raise _fail(state, "newline" if following is None else following)
        if is_redirection(following):
            raise _fail(state, following)


def check_syntax_errors(tokens: Sequence[str], state: ShellState) -> None:
    """Reject misplaced pipes and redirections and malformed operators.

    Raises ShellSyntaxError and records exit status 2 on the first problem.
    """
    if not tokens:
        return
    if tokens[0] == "|":
        raise _fail(state, "|")
    _check_token(tokens, 0, state)
    _check_redirection_conflicts(tokens, state)
    for index in range(1, len(tokens)):
        _check_token(tokens, index, state)
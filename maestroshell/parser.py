"""Turning a command line into a pipeline of commands."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from .env import ShellState
from .lexer import tokenize
from .models import SYNTAX_ERROR_STATUS, Command, RedirType, ShellSyntaxError
from .syntax import check_syntax_errors, is_redirection

ReadLine = Callable[[str], "str | None"]

_INCOMPLETE_ENDINGS = frozenset({"|", "<", "<<", ">", ">>"})


def _read_stdin(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def is_command_incomplete(tokens: Sequence[str], state: ShellState) -> bool:
    """True when the line ends with a pipe or a redirection operator."""
    return bool(tokens) and tokens[-1] in _INCOMPLETE_ENDINGS


def tokenize_and_validate(text: str, state: ShellState) -> list[str]:
    """Tokenize ``text`` and run the syntax checks over the tokens.

    An empty token list records exit status 2 and is returned as is.
    """
    tokens = tokenize(text, state)
    if not tokens:
        state.last_exit_status = SYNTAX_ERROR_STATUS
        return tokens
    check_syntax_errors(tokens, state)
    return tokens


def _syntax_error(state: ShellState, token: str) -> ShellSyntaxError:
    state.last_exit_status = SYNTAX_ERROR_STATUS
    return ShellSyntaxError.unexpected(token)


def build_commands(tokens: Sequence[str], state: ShellState) -> list[Command]:
    """Group tokens into commands, one per pipeline stage.

    Raises ShellSyntaxError (status 2) for a trailing pipe or a redirection
    with no target.
    """
    commands = [Command()]
    pos = 0
    while pos < len(tokens):
        token = tokens[pos]
        current = commands[-1]
        if token == "|":
            if pos + 1 >= len(tokens):
                raise _syntax_error(state, "|")
            current.is_pipe = True
            commands.append(Command())
            pos += 1
        elif is_redirection(token):
            if pos + 1 >= len(tokens):
                raise _syntax_error(state, "newline")
            kind = RedirType(token)
            target = tokens[pos + 1]
            if kind.is_input:
                current.add_input(kind, target)
            else:
                current.add_output(kind, target)
            pos += 2
        else:
            current.add_arg(token)
            pos += 1
    return commands


def _complete_tokens(
    tokens: list[str], state: ShellState, read_line: ReadLine
) -> bool:
    """Read continuation lines until the command is complete.

    Returns False when input ends or yields no tokens.
    """
    while is_command_incomplete(tokens, state):
        line = read_line("> ")
        if line is None:
            return False
        new_tokens = tokenize(line, state)
        if not new_tokens:
            return False
        tokens.extend(new_tokens)
        if is_command_incomplete(tokens, state) and len(tokens) == 1:
            state.last_exit_status = SYNTAX_ERROR_STATUS
            raise ShellSyntaxError("syntax error: incomplete command after '|'")
    return True


def parse_input(
    text: str, state: ShellState, read_line: ReadLine | None = None
) -> list[Command] | None:
    """Parse a command line into its pipeline of commands.

    Returns None when there is nothing to run; raises ShellSyntaxError on
    malformed input. ``read_line`` supplies continuation lines.
    """
    if not text:
        return None
    tokens = tokenize_and_validate(text, state)
    if not tokens:
        return None
    if not _complete_tokens(tokens, state, read_line or _read_stdin):
        state.last_exit_status = SYNTAX_ERROR_STATUS
        return None
    return build_commands(tokens, state)
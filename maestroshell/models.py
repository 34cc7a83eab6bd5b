"""Core data types shared by the parser and the executor."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

MAX_ARGS = 255
SYNTAX_ERROR_STATUS = 2


class RedirType(Enum):
    """Kinds of redirection a command can carry."""

    INPUT = "<"
    OUTPUT = ">"
    APPEND = ">>"
    HEREDOC = "<<"

    @property
    def is_input(self) -> bool:
        return self in (RedirType.INPUT, RedirType.HEREDOC)


@dataclass
class Redirection:
    """A single redirection: its kind and its target (file name or limiter)."""

    type: RedirType
    target: str


@dataclass
class Command:
    """One simple command of a pipeline."""

    args: list[str] = field(default_factory=list)
    inputs: list[Redirection] = field(default_factory=list)
    outputs: list[Redirection] = field(default_factory=list)
    is_pipe: bool = False
    path: str | None = None
    tmp_filename: str | None = None

    def add_arg(self, value: str) -> bool:
        """Append an argument; arguments past the limit are dropped.

        Returns True when the argument was stored.
        """
        if len(self.args) >= MAX_ARGS:
            return False
        self.args.append(value)
        return True

    def add_input(self, kind: RedirType, target: str) -> Redirection:
        """Record an input redirection (``<`` or ``<<``)."""
        kind = RedirType(kind)
        if not kind.is_input:
            raise ValueError(f"{kind.value!r} is not an input redirection")
        redirection = Redirection(kind, target)
        self.inputs.append(redirection)
        return redirection

    def add_output(self, kind: RedirType, target: str) -> Redirection:
        """Record an output redirection (``>`` or ``>>``)."""
        kind = RedirType(kind)
        if kind.is_input:
            raise ValueError(f"{kind.value!r} is not an output redirection")
        redirection = Redirection(kind, target)
        self.outputs.append(redirection)
        return redirection

    def clear_redirections(self) -> None:
        """Drop every input and output redirection."""
        self.inputs.clear()
        self.outputs.clear()


class ShellSyntaxError(Exception):
    """Raised when a command line cannot be parsed."""

    def __init__(self, message: str, status: int = SYNTAX_ERROR_STATUS):
        super().__init__(message)
        self.message = message
        self.status = status

    @classmethod
    def unexpected(cls, token: str) -> "ShellSyntaxError":
        """Error for an unexpected token, in the shell's usual wording."""
        return cls(f"syntax error near unexpected token `{token}'")
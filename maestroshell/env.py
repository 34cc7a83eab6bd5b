"""Environment handling and the shell's runtime state."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field


def copy_environment(envp: Iterable[str]) -> list[str]:
    """Return an independent copy of a ``KEY=value`` list."""
    return list(envp)


def _key_of(key: str) -> str:
    return key.split("=", 1)[0]


def _find(envp: list[str], key: str) -> int | None:
    name = _key_of(key)
    prefix = name + "="
    for index, entry in enumerate(envp):
        if entry.startswith(prefix):
            return index
    return None


def set_env_var(envp: list[str], key: str, value: str | None) -> list[str]:
    """Set ``key`` to ``value`` in ``envp``, replacing or appending the entry.

    The list is updated in place and returned.
    """
    if key is None or envp is None:
        return envp
    entry = f"{key}={'' if value is None else value}"
    index = _find(envp, key)
    if index is None:
        envp.append(entry)
    else:
        envp[index] = entry
    return envp


def search_in_local_env(envp: Iterable[str], key: str) -> str | None:
    """Return the value of ``key`` in ``envp``, or None when it is absent."""
    prefix = key + "="
    for entry in envp:
        if entry.startswith(prefix):
            return entry[len(prefix):]
    return None


def _atoi(text: str | None) -> int:
    if not text:
        return 0
    pos = 0
    while pos < len(text) and text[pos] in " \t\n\v\f\r":
        pos += 1
    sign = 1
    if pos < len(text) and text[pos] in "+-":
        if text[pos] == "-":
            sign = -1
        pos += 1
    digits = ""
    while pos < len(text) and text[pos].isdigit():
        digits += text[pos]
        pos += 1
    return sign * int(digits) if digits else 0


@dataclass
class ShellState:
    """Everything the shell keeps between command lines."""

    envp: list[str] = field(default_factory=list)
    current_path: str = ""
    last_exit_status: int = 0
    num_pipes: int = 0
    index: int = 0
    pids: list[int] = field(default_factory=list)
    pipes: list[tuple[int, int]] = field(default_factory=list)

    def reset(self) -> None:
        """Clear the per-command-line bookkeeping, keeping env and status."""
        self.num_pipes = 0
        self.index = 0
        self.pids = []
        self.pipes = []

    def get(self, key: str) -> str | None:
        """Look a variable up in the shell's environment."""
        return search_in_local_env(self.envp, key)

    def set(self, key: str, value: str | None) -> None:
        """Set a variable in the shell's environment."""
        self.envp = set_env_var(self.envp, key, value)


def init_state(envp: Iterable[str] | None = None) -> ShellState:
    """Build the initial state: copy the environment and bump ``SHLVL``.

    Raises OSError when the working directory cannot be determined.
    """
    if envp is None:
        envp = [f"{k}={v}" for k, v in os.environ.items()]
    env = copy_environment(envp)
    level = _atoi(search_in_local_env(env, "SHLVL")) + 1
    set_env_var(env, "SHLVL", str(level))
    current_path = os.getcwd()
    return ShellState(envp=env, current_path=current_path)
"""Signal handling for the interactive prompt, execution and here-documents."""

from __future__ import annotations

import os
import signal
import sys
from types import FrameType

_SIGQUIT = getattr(signal, "SIGQUIT", None)


def _children_running() -> bool:
    try:
        pid, _ = os.waitpid(-1, os.WNOHANG)
    except ChildProcessError:
        return False
    return pid == 0


def handle_sigint(signo: int, frame: FrameType | None) -> None:
    """Handle Ctrl-C at the prompt.

    Always prints a newline. When no child process is running, the pending
    input line is abandoned by raising KeyboardInterrupt, so the prompt loop
    can show a fresh prompt.
    """
    sys.stdout.write("\n")
    sys.stdout.flush()
    if not _children_running():
        raise KeyboardInterrupt


def setup_signals() -> None:
    """Install the prompt handlers: Ctrl-C is handled, Ctrl-\\ is ignored."""
    signal.signal(signal.SIGINT, handle_sigint)
    if _SIGQUIT is not None:
        signal.signal(_SIGQUIT, signal.SIG_IGN)


def setup_signals_for_execution() -> None:
    """Restore the default dispositions of SIGINT and SIGQUIT."""
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    if _SIGQUIT is not None:
        signal.signal(_SIGQUIT, signal.SIG_DFL)


def setup_signals_for_heredoc() -> None:
    """Let Ctrl-C abort here-document input; Ctrl-\\ takes its default action.

    Ctrl-C raises KeyboardInterrupt, which stops the reading in progress.
    """
    signal.signal(signal.SIGINT, signal.default_int_handler)
    if _SIGQUIT is not None:
        signal.signal(_SIGQUIT, signal.SIG_DFL)


def reset_signals_after_execution() -> None:
    """Reinstall the prompt handlers."""
    setup_signals()
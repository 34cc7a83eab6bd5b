"""Here-document collection into temporary files."""

from __future__ import annotations

import os
from collections.abc import Callable

from .models import Command, RedirType

ReadLine = Callable[[str], "str | None"]

DEFAULT_TMP_DIR = "/tmp"
HEREDOC_PROMPT = "> "


def _read_stdin(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def generate_tmp_filename(directory: str | os.PathLike[str] | None = None) -> str:
    """Return the here-document file name for this process.

    The name has the form ``<directory>/heredoc_<pid>_``; the directory
    defaults to ``/tmp``.
    """
    base = DEFAULT_TMP_DIR if directory is None else os.fspath(directory)
    return os.path.join(base, f"heredoc_{os.getpid()}_")


def write_heredoc(
    path: str | os.PathLike[str],
    limiter: str,
    read_line: ReadLine | None = None,
) -> int:
    """Read lines until ``limiter`` or end of input and write them to ``path``.

    The file is created or truncated with mode 0644. Each line is written
    followed by a newline. Returns the number of lines written; raises
    OSError when the file cannot be opened or written.
    """
    reader = read_line or _read_stdin
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
    written = 0
    with os.fdopen(fd, "w") as handle:
        while True:
            line = reader(HEREDOC_PROMPT)
            if line is None or line == limiter:
                break
            handle.write(line)
            handle.write("\n")
            written += 1
    return written


def handle_all_heredocs(
    command: Command,
    read_line: ReadLine | None = None,
    directory: str | os.PathLike[str] | None = None,
) -> list[str]:
    """Collect every ``<<`` redirection of ``command`` into a temporary file.

    Each here-document's target, its limiter, is replaced by the path of the
    file holding its body. If reading is interrupted or fails, the file is
    removed and the exception propagates. Returns the files written, in order.
    """
    created: list[str] = []
    for redirection in command.inputs:
        if redirection.type is not RedirType.HEREDOC:
            continue
        path = generate_tmp_filename(directory)
        try:
            write_heredoc(path, redirection.target, read_line)
        except BaseException:
            try:
                os.unlink(path)
            except OSError:
                pass
            raise
        redirection.target = path
        created.append(path)
    return created
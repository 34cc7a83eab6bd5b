import os

import pytest

from maestroshell.heredoc import (
    generate_tmp_filename,
    handle_all_heredocs,
    write_heredoc,
)
from maestroshell.models import Command, RedirType


def make_reader(lines):
    prompts = []
    feed = iter(lines)

    def read_line(prompt):
        prompts.append(prompt)
        return next(feed, None)

    return read_line, prompts


def test_generate_tmp_filename_uses_pid(tmp_path):
    name = generate_tmp_filename(tmp_path)
    assert name == os.path.join(str(tmp_path), f"heredoc_{os.getpid()}_")


def test_generate_tmp_filename_default_directory():
    name = generate_tmp_filename()
    assert os.path.dirname(name) == "/tmp"
    assert os.path.basename(name).startswith("heredoc_")


def test_write_heredoc_stops_at_limiter(tmp_path):
    target = tmp_path / "doc"
    read_line, prompts = make_reader(["hello", "world", "EOF", "after"])
    count = write_heredoc(target, "EOF", read_line)
    assert count == 2
    assert target.read_text() == "hello\nworld\n"
    assert prompts == ["> "] * 3


def test_write_heredoc_stops_at_end_of_input(tmp_path):
    target = tmp_path / "doc"
    read_line, _ = make_reader(["only"])
    assert write_heredoc(target, "EOF", read_line) == 1
    assert target.read_text() == "only\n"


def test_write_heredoc_truncates_existing(tmp_path):
    target = tmp_path / "doc"
    target.write_text("old content that is long\n")
    read_line, _ = make_reader(["new", "END"])
    write_heredoc(target, "END", read_line)
    assert target.read_text() == "new\n"


def test_write_heredoc_limiter_must_match_whole_line(tmp_path):
    target = tmp_path / "doc"
    read_line, _ = make_reader(["EOF ", "EOFX", "EOF"])
    write_heredoc(target, "EOF", read_line)
    assert target.read_text() == "EOF \nEOFX\n"


def test_write_heredoc_missing_directory(tmp_path):
    read_line, _ = make_reader(["x"])
    with pytest.raises(FileNotFoundError):
        write_heredoc(tmp_path / "missing" / "doc", "EOF", read_line)


def test_handle_all_heredocs_replaces_targets(tmp_path):
    command = Command(args=["cat"])
    command.add_input(RedirType.INPUT, "infile")
    command.add_input(RedirType.HEREDOC, "STOP")
    read_line, _ = make_reader(["line one", "STOP"])
    created = handle_all_heredocs(command, read_line, tmp_path)
    assert created == [generate_tmp_filename(tmp_path)]
    assert command.inputs[0].target == "infile"
    assert command.inputs[1].target == created[0]
    with open(created[0]) as handle:
        assert handle.read() == "line one\n"


def test_handle_all_heredocs_without_heredoc(tmp_path):
    command = Command(args=["cat"])
    command.add_input(RedirType.INPUT, "infile")
    read_line, prompts = make_reader(["never"])
    assert handle_all_heredocs(command, read_line, tmp_path) == []
    assert prompts == []
    assert list(tmp_path.iterdir()) == []


def test_handle_all_heredocs_interrupt_removes_file(tmp_path):
    command = Command(args=["cat"])
    command.add_input(RedirType.HEREDOC, "EOF")
    calls = []

    def read_line(prompt):
        calls.append(prompt)
        if len(calls) > 1:
            raise KeyboardInterrupt
        return "partial"

    with pytest.raises(KeyboardInterrupt):
        handle_all_heredocs(command, read_line, tmp_path)
    assert command.inputs[0].target == "EOF"
    assert not os.path.exists(generate_tmp_filename(tmp_path))


def test_handle_all_heredocs_open_failure(tmp_path):
    command = Command(args=["cat"])
    command.add_input(RedirType.HEREDOC, "EOF")
    read_line, _ = make_reader(["x"])
    with pytest.raises(OSError):
        handle_all_heredocs(command, read_line, tmp_path / "nope")
    assert command.inputs[0].target == "EOF"
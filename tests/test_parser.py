import pytest

from maestroshell.env import ShellState
from maestroshell.models import MAX_ARGS, Redirection, RedirType, ShellSyntaxError
from maestroshell.parser import (
    build_commands,
    is_command_incomplete,
    parse_input,
    tokenize_and_validate,
)


@pytest.fixture
def state():
    return ShellState(envp=["HOME=/home/user", "USER=user"])


def _no_read(prompt):
    raise AssertionError("unexpected continuation read")


@pytest.mark.parametrize(
    "tokens, expected",
    [
        ([], False),
        (["ls"], False),
        (["ls", "|"], True),
        (["cat", "<<"], True),
        (["echo", ">"], True),
        (["echo", ">>"], True),
        (["cat", "<"], True),
    ],
)
def test_is_command_incomplete(state, tokens, expected):
    assert is_command_incomplete(tokens, state) is expected


def test_tokenize_and_validate(state):
    assert tokenize_and_validate("echo hi | wc", state) == ["echo", "hi", "|", "wc"]


def test_tokenize_and_validate_blank_sets_status(state):
    assert tokenize_and_validate("   ", state) == []
    assert state.last_exit_status == 2


def test_tokenize_and_validate_syntax_error(state):
    with pytest.raises(ShellSyntaxError):
        tokenize_and_validate("| ls", state)
    assert state.last_exit_status == 2


def test_build_pipeline(state):
    commands = build_commands(["echo", "hi", "|", "wc", "-l"], state)
    assert [c.args for c in commands] == [["echo", "hi"], ["wc", "-l"]]
    assert [c.is_pipe for c in commands] == [True, False]


def test_build_redirections(state):
    (command,) = build_commands(["cat", "<", "in", "<<", "EOF", ">>", "out"], state)
    assert command.args == ["cat"]
    assert command.inputs == [
        Redirection(RedirType.INPUT, "in"),
        Redirection(RedirType.HEREDOC, "EOF"),
    ]
    assert command.outputs == [Redirection(RedirType.APPEND, "out")]


def test_build_trailing_pipe_fails(state):
    with pytest.raises(ShellSyntaxError):
        build_commands(["ls", "|"], state)
    assert state.last_exit_status == 2


def test_build_redirection_without_target_fails(state):
    with pytest.raises(ShellSyntaxError) as info:
        build_commands(["ls", ">"], state)
    assert "newline" in info.value.message
    assert state.last_exit_status == 2


def test_build_drops_excess_arguments(state):
    tokens = [f"a{n}" for n in range(MAX_ARGS + 20)]
    (command,) = build_commands(tokens, state)
    assert len(command.args) == MAX_ARGS
    assert command.args == tokens[:MAX_ARGS]


def test_parse_empty_input(state):
    assert parse_input("", state, _no_read) is None


def test_parse_expands_and_redirects(state):
    commands = parse_input("echo $HOME > out", state, _no_read)
    assert len(commands) == 1
    assert commands[0].args == ["echo", "/home/user"]
    assert commands[0].outputs == [Redirection(RedirType.OUTPUT, "out")]


def test_parse_pipeline_does_not_read_more(state):
    calls = []

    def recorder(prompt):
        calls.append(prompt)
        return None

    commands = parse_input("ls -l | grep x", state, recorder)
    assert calls == []
    assert [c.args for c in commands] == [["ls", "-l"], ["grep", "x"]]


def test_parse_syntax_error(state):
    with pytest.raises(ShellSyntaxError):
        parse_input("ls | | wc", state, _no_read)
    assert state.last_exit_status == 2


def test_parse_unclosed_quotes(state):
    with pytest.raises(ShellSyntaxError):
        parse_input("echo 'oops", state, _no_read)
    assert state.last_exit_status == 2


def test_parse_quoted_pipe_is_an_argument(state):
    commands = parse_input("echo 'a|b'", state, _no_read)
    assert [c.args for c in commands] == [["echo", "a|b"]]
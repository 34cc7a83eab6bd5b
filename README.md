# maestroshell

The parsing core of a small interactive shell, as a Python library. It
turns a line of input into a list of commands, one per pipeline stage:

- **Tokenizing** with single quotes (taken literally), double quotes (with
  `$VAR` and `$?` expansion), and the operators `|`, `<`, `<<`, `>`, `>>`.
  A lone `$` stays literal and unknown variables expand to an empty string.
  Unclosed quotes raise `ShellSyntaxError`.
- **Syntax checks** with the usual shell wording,
  ``syntax error near unexpected token `|'``, for a leading pipe, a doubled
  or trailing pipe, a redirection with no target or followed by a pipe or
  another redirection.
- **Pipelines and redirections**: each `Command` keeps its arguments (at
  most 255) and its input and output redirections in the order they were
  written.
- **Here-documents**: the body of each `<<` is read line by line up to the
  limiter and written to a temporary file, whose path then replaces the
  limiter as the redirection target.
- **Environment handling**: a private list of `KEY=value` entries, with
  `SHLVL` raised by one when a shell state is created, and the status of
  the last command kept for `$?`.
- **Signal setup** for the prompt, for running commands and for reading
  here-documents.

## Modules

| Module | What it holds |
| --- | --- |
| `maestroshell.models` | `RedirType`, `Redirection`, `Command`, `ShellSyntaxError` |
| `maestroshell.env` | `ShellState`, `init_state`, `copy_environment`, `set_env_var`, `search_in_local_env` |
| `maestroshell.lexer` | `tokenize`, `expand_variable`, `parse_single_quote`, `parse_double_quote`, `parse_quoted_token`, `has_unclosed_quotes`, `should_parse_as_special`, `skip_spaces`, `is_empty_or_spaces` |
| `maestroshell.syntax` | `is_redirection`, `check_syntax_errors` |
| `maestroshell.parser` | `parse_input`, `tokenize_and_validate`, `build_commands`, `is_command_incomplete` |
| `maestroshell.heredoc` | `generate_tmp_filename`, `write_heredoc`, `handle_all_heredocs` |
| `maestroshell.signals` | `setup_signals`, `setup_signals_for_execution`, `setup_signals_for_heredoc`, `reset_signals_after_execution`, `handle_sigint` |

## Example

```python
from maestroshell.env import init_state
from maestroshell.lexer import tokenize
from maestroshell.parser import parse_input

state = init_state(["HOME=/home/demo", "SHLVL=1"])
print(state.get("SHLVL"))          # 2

print(tokenize('echo "$HOME" | wc -c > out.txt', state))
# ['echo', '/home/demo', '|', 'wc', '-c', '>', 'out.txt']

commands = parse_input("cat < notes.txt | grep todo >> found.txt", state)
print(len(commands))                # 2
print(commands[0].args, commands[0].inputs)
```

`init_state` takes `KEY=value` strings (the process environment when none
are given) and records the current working directory.

`parse_input` returns `None` when there is nothing to run and raises
`ShellSyntaxError` on malformed input. It also accepts a `read_line`
callable (standard input by default) for continuation lines; since a line
ending with a pipe or a redirection operator already fails the syntax
checks, such lines are reported as errors.

Syntax errors set `state.last_exit_status` to 2, so `$?` reflects them in
the next expansion. The error's `status` attribute carries the same value.

## Here-documents

`handle_all_heredocs` takes a `read_line` callable too, so bodies can come
from the terminal or from prepared lines:

```python
from maestroshell.heredoc import handle_all_heredocs

commands = parse_input("cat << EOF", state)
lines = iter(["first line", "second line", "EOF"])
paths = handle_all_heredocs(commands[0], lambda prompt: next(lines), "/tmp")
print(commands[0].inputs[0].target == paths[0])   # True
```

Files are named `heredoc_<pid>_` in the given directory (`/tmp` by
default), so here-documents read in the same process share one name. If
reading fails or is interrupted, the file is removed and the exception is
raised again.

## Signals

`setup_signals` installs `handle_sigint` for Ctrl-C and ignores Ctrl-\\.
When no child process is running, `handle_sigint` prints a newline and
raises `KeyboardInterrupt` so a prompt loop can start a fresh line.
`setup_signals_for_execution` restores the default dispositions, and
`setup_signals_for_heredoc` makes Ctrl-C raise `KeyboardInterrupt` to stop
here-document input.

## What it does not do

The package parses command lines; it does not run them. There is no prompt
loop, no command to start, no builtins (`cd`, `echo`, `export` and the
like), no search of `PATH`, and no execution of pipelines or opening of
redirection targets. A caller builds those on top of the `Command` lists
that `parse_input` returns.

## Requirements

Python 3.10 or later, on a POSIX system. No third-party dependencies.
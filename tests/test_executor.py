import os
import signal
import sys

import pytest

from minishell.builtins import ShellExit
from minishell.environment import Environment
from minishell.executor import execute, exit_code_from_returncode
from minishell.models import Command, Redirect, Shell, TokenType

PY = sys.executable


def _shell(*commands):
    env = Environment.from_entries(f"{k}={v}" for k, v in os.environ.items())
    env.set("PATH", os.environ.get("PATH", os.defpath))
    return Shell(env=env, commands=list(commands))


def _out(path):
    return Redirect(TokenType.REDIRECT_OUT, str(path))


def _feeder(lines):
    queue = list(lines)

    def read_line(prompt):
        if not queue:
            raise EOFError
        return queue.pop(0)

    return read_line


def test_exit_code_plain():
    assert exit_code_from_returncode(0) == 0
    assert exit_code_from_returncode(3) == 3


def test_exit_code_signal():
    assert exit_code_from_returncode(-signal.SIGINT) == 130


def test_builtin_output_redirected(tmp_path):
    target = tmp_path / "out"
    shell = _shell(Command(["echo", "hi"], [_out(target)]))
    execute(shell)
    assert target.read_text() == "hi\n"
    assert shell.exit_status == 0


def test_external_status(tmp_path):
    shell = _shell(Command([PY, "-c", "import sys; sys.exit(3)"]))
    execute(shell)
    assert shell.exit_status == 3


def test_external_output_redirected(tmp_path):
    target = tmp_path / "out"
    shell = _shell(Command([PY, "-c", "print('out')"], [_out(target)]))
    execute(shell)
    assert target.read_text() == "out\n"
    assert shell.exit_status == 0


def test_unknown_command_status():
    shell = _shell(Command(["no-such-command-anywhere"]))
    execute(shell)
    assert shell.exit_status == 127


def test_redirection_failure_skips_command(tmp_path):
    target = tmp_path / "out"
    redirs = [Redirect(TokenType.REDIRECT_IN, str(tmp_path / "missing")), _out(target)]
    shell = _shell(Command([PY, "-c", "print('x')"], redirs))
    execute(shell)
    assert shell.exit_status == 1
    assert not target.exists()


def test_pipeline_passes_data(tmp_path):
    target = tmp_path / "out"
    upper = "import sys; sys.stdout.write(sys.stdin.read().upper())"
    shell = _shell(
        Command([PY, "-c", "print('abc')"]),
        Command([PY, "-c", upper], [_out(target)]),
    )
    execute(shell)
    assert target.read_text() == "ABC\n"
    assert shell.exit_status == 0


def test_pipeline_builtin_stage(tmp_path):
    target = tmp_path / "out"
    upper = "import sys; sys.stdout.write(sys.stdin.read().upper())"
    shell = _shell(
        Command(["echo", "piped"]),
        Command([PY, "-c", upper], [_out(target)]),
    )
    execute(shell)
    assert target.read_text() == "PIPED\n"


def test_pipeline_status_from_last():
    shell = _shell(
        Command([PY, "-c", "import sys; sys.exit(0)"]),
        Command([PY, "-c", "import sys; sys.exit(4)"]),
    )
    execute(shell)
    assert shell.exit_status == 4


def test_pipeline_cd_does_not_change_parent(tmp_path):
    before = os.getcwd()
    shell = _shell(Command(["cd", str(tmp_path)]), Command([PY, "-c", "pass"]))
    execute(shell)
    assert os.getcwd() == before
    assert shell.exit_status == 0


def test_exit_builtin_raises():
    shell = _shell(Command(["exit", "5"]))
    before = sys.stdout
    with pytest.raises(ShellExit) as info:
        execute(shell)
    assert info.value.status == 5
    assert sys.stdout is before


def test_heredoc_feeds_command(tmp_path):
    target = tmp_path / "out"
    copy = "import sys; sys.stdout.write(sys.stdin.read())"
    redirs = [Redirect(TokenType.HEREDOC, "EOF"), _out(target)]
    shell = _shell(Command([PY, "-c", copy], redirs))
    execute(shell, _feeder(["one", "EOF"]))
    assert target.read_text() == "one\n"
    assert shell.exit_status == 0


def test_heredoc_interrupt_skips_execution(tmp_path):
    target = tmp_path / "out"

    def read_line(prompt):
        raise KeyboardInterrupt

    shell = _shell(
        Command([PY, "-c", "print('x')"],
                [Redirect(TokenType.HEREDOC, "EOF"), _out(target)])
    )
    execute(shell, read_line)
    assert shell.exit_status == 1
    assert not target.exists()
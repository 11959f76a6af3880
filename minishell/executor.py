"""Running parsed commands: builtins, single programs and pipelines."""

from __future__ import annotations

import os
import signal
import subprocess
import sys
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager, suppress
from itertools import chain
from typing import NoReturn

from minishell.builtins import ShellExit, run_builtin
from minishell.heredoc import HeredocInterrupted, ReadLine, collect_heredocs
from minishell.models import Command, Shell
from minishell.pathsearch import CommandLookupError, find_command
from minishell.redirection import (
    RedirectionError,
    attach_fd,
    close_redirections,
    open_redirections,
    preserved_stdio,
)

_NEWLINE_SIGNALS = (-signal.SIGINT, -signal.SIGQUIT)


def exit_code_from_returncode(returncode: int) -> int:
    """Map a child's return code to a shell status; signals give 128 + number."""
    if returncode < 0:
        return 128 - returncode
    return returncode


def _record_status(shell: Shell, returncode: int) -> None:
    shell.exit_status = exit_code_from_returncode(returncode)
    if returncode in _NEWLINE_SIGNALS:
        sys.stdout.write("\n")
        sys.stdout.flush()


def _reset_child_signals() -> None:
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    signal.signal(signal.SIGQUIT, signal.SIG_DFL)


@contextmanager
def _sigint_ignored() -> Iterator[None]:
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.getsignal(signal.SIGINT)
    signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous if previous is not None else signal.SIG_DFL)


def _report_exec_failure(error: OSError, shell: Shell, status: int) -> None:
    sys.stderr.write(f"execve: {os.strerror(error.errno or 0)}\n")
    sys.stderr.flush()
    shell.exit_status = status


def execute_single(command: Command, shell: Shell) -> None:
    """Run one command in the shell process or as a child program."""
    try:
        open_redirections(command.redirs, shell)
    except RedirectionError:
        shell.exit_status = 1
        return
    if run_builtin(command, shell):
        return
    if not command.args:
        shell.exit_status = 0
        return
    try:
        path = find_command(command.args[0], shell)
    except CommandLookupError as error:
        shell.report_error(error.message, error.name, error.status)
        return
    sys.stdout.flush()
    try:
        process = subprocess.Popen(
            command.args,
            executable=path,
            env=shell.env.as_dict(),
            preexec_fn=_reset_child_signals,
        )
    except OSError as error:
        _report_exec_failure(error, shell, 127)
        return
    with _sigint_ignored():
        returncode = process.wait()
    _record_status(shell, returncode)


def _child_status(command: Command, shell: Shell) -> int:
    if not command.args:
        return 0
    try:
        open_redirections(command.redirs, shell)
    except RedirectionError:
        return 1
    if run_builtin(command, shell):
        return shell.exit_status
    try:
        path = find_command(command.args[0], shell)
    except CommandLookupError as error:
        shell.report_error(error.message, error.name, error.status)
        return 1
    sys.stdout.flush()
    try:
        os.execve(path, command.args, shell.env.as_dict())
    except OSError as error:
        _report_exec_failure(error, shell, 1)
    return 1


def _run_in_child(command: Command, shell: Shell,
                  pipes: list[tuple[int, int]], index: int) -> NoReturn:
    status = 1
    try:
        shell.is_forked = True
        read_fd = pipes[index - 1][0] if index > 0 else None
        write_fd = pipes[index][1] if index < len(pipes) else None
        for fd in chain.from_iterable(pipes):
            if fd not in (read_fd, write_fd):
                os.close(fd)
        if read_fd is not None:
            attach_fd(read_fd, 0)
        if write_fd is not None:
            attach_fd(write_fd, 1)
        status = _child_status(command, shell)
    except ShellExit as exit_request:
        status = exit_request.status
    finally:
        with suppress(Exception):
            sys.stdout.flush()
            sys.stderr.flush()
        os._exit(status)


def _close_pipes(pipes: Iterable[tuple[int, int]]) -> None:
    for fd in chain.from_iterable(pipes):
        with suppress(OSError):
            os.close(fd)


def execute_pipeline(commands: Iterable[Command], shell: Shell) -> None:
    """Run ``commands`` connected by pipes, each in its own child process.

    The exit status is that of the last command.
    """
    commands = list(commands)
    pipes: list[tuple[int, int]] = []
    try:
        for _ in commands[1:]:
            pipes.append(os.pipe())
    except OSError:
        _close_pipes(pipes)
        shell.report_error("pipe", None, 1)
        return
    sys.stdout.flush()
    sys.stderr.flush()
    pids: list[int] = []
    for index, command in enumerate(commands):
        try:
            pid = os.fork()
        except OSError as error:
            sys.stderr.write(f"fork error: {os.strerror(error.errno or 0)}\n")
            break
        if pid == 0:
            _run_in_child(command, shell, pipes, index)
        pids.append(pid)
    _close_pipes(pipes)
    status = 0
    for pid in pids:
        _, status = os.waitpid(pid, 0)
    _record_status(shell, os.waitstatus_to_exitcode(status))


def execute(shell: Shell, read_line: ReadLine | None = None) -> None:
    """Run the shell's parsed commands, restoring stdin and stdout afterwards.

    ShellExit from the ``exit`` builtin propagates to the caller.
    """
    shell.is_forked = False
    commands = shell.commands
    if not commands:
        return
    with preserved_stdio():
        try:
            collect_heredocs(commands, shell, read_line)
        except HeredocInterrupted:
            return
        try:
            if len(commands) == 1:
                execute_single(commands[0], shell)
            else:
                execute_pipeline(commands, shell)
        finally:
            for command in commands:
                close_redirections(command.redirs)
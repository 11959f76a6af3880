"""Reading here-document bodies before a command line runs."""

from __future__ import annotations

import signal
import sys
import threading
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager

from minishell.expansion import expand
from minishell.models import Command, Shell, TokenType

ReadLine = Callable[[str], str]


class HeredocInterrupted(Exception):
    """Raised when reading a here-document is cut short by an interrupt."""


def strip_delimiter_quotes(delimiter: str) -> tuple[str, bool]:
    """Return the delimiter without quotes and whether the body is expanded."""
    stripped = "".join(char for char in delimiter if char not in "\"'")
    return stripped, stripped == delimiter


def read_heredoc(delimiter: str, shell: Shell,
                 read_line: ReadLine | None = None) -> str:
    """Read lines until the delimiter or end of input and return the body."""
    read_line = read_line or input
    end, expand_body = strip_delimiter_quotes(delimiter)
    lines: list[str] = []
    while True:
        try:
            line = read_line("> ")
        except EOFError:
            break
        if line == end:
            break
        if expand_body and "$" in line:
            line = expand(line, shell.env, shell.exit_status)
        lines.append(line + "\n")
    return "".join(lines)


@contextmanager
def _interruptible() -> Iterator[None]:
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.getsignal(signal.SIGINT)
    signal.signal(signal.SIGINT, signal.default_int_handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous if previous is not None else signal.SIG_DFL)


def collect_heredocs(commands: Iterable[Command], shell: Shell,
                     read_line: ReadLine | None = None) -> None:
    """Read the body of every here-document of ``commands`` in order.

    An interrupt sets the exit status to 1 and raises HeredocInterrupted.
    """
    with _interruptible():
        for command in commands:
            for redir in command.redirs:
                if redir.type is not TokenType.HEREDOC:
                    continue
                try:
                    redir.heredoc = read_heredoc(redir.filename, shell, read_line)
                except KeyboardInterrupt:
                    sys.stdout.write("\n")
                    sys.stdout.flush()
                    shell.exit_status = 1
                    raise HeredocInterrupted(redir.filename) from None
                shell.exit_status = 0
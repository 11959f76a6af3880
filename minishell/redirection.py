"""Attaching redirections to the shell's standard input and output."""

from __future__ import annotations

import os
import sys
import tempfile
from collections.abc import Iterable, Iterator
from contextlib import contextmanager, suppress

from minishell.models import Redirect, Shell, TokenType

_OUTPUT_FLAGS = {
    TokenType.REDIRECT_OUT: os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
    TokenType.APPEND: os.O_WRONLY | os.O_CREAT | os.O_APPEND,
}
_INPUT_TYPES = (TokenType.REDIRECT_IN, TokenType.HEREDOC)


class RedirectionError(Exception):
    """Raised when a redirection target cannot be opened."""

    def __init__(self, filename: str, message: str) -> None:
        self.filename = filename
        self.message = message
        super().__init__(f"{filename}: {message}")


def _rebind_stream(target: int) -> None:
    if target == 0:
        sys.stdin = open(0, "r", closefd=False)
    else:
        sys.stdout = open(1, "w", closefd=False)


def attach_fd(fd: int, target: int) -> None:
    """Make ``fd`` the process's stdin (0) or stdout (1) and close ``fd``."""
    try:
        if target == 1:
            sys.stdout.flush()
        os.dup2(fd, target)
    finally:
        os.close(fd)
    _rebind_stream(target)


def _heredoc_fd(text: str) -> int:
    with tempfile.TemporaryFile() as handle:
        handle.write(text.encode())
        handle.flush()
        fd = os.dup(handle.fileno())
    os.lseek(fd, 0, os.SEEK_SET)
    return fd


def _open_target(redir: Redirect) -> int:
    if redir.type is TokenType.REDIRECT_IN:
        return os.open(redir.filename, os.O_RDONLY)
    if redir.type is TokenType.HEREDOC:
        return _heredoc_fd(redir.heredoc or "")
    return os.open(redir.filename, _OUTPUT_FLAGS[redir.type], 0o644)


def open_redirections(redirs: Iterable[Redirect], shell: Shell) -> None:
    """Apply each redirection in order to stdin or stdout.

    The first target that cannot be opened is reported, the exit status
    is set to 1 and RedirectionError is raised; later ones are not tried.
    """
    for redir in redirs:
        try:
            fd = _open_target(redir)
        except OSError as error:
            message = os.strerror(error.errno) if error.errno else str(error)
            shell.report_error(message, redir.filename, 1)
            raise RedirectionError(redir.filename, message) from error
        redir.fd = fd
        try:
            attach_fd(fd, 0 if redir.type in _INPUT_TYPES else 1)
        finally:
            redir.fd = None


def close_redirections(redirs: Iterable[Redirect]) -> None:
    """Close any descriptors still held by the redirections."""
    for redir in redirs:
        if redir.fd is not None:
            with suppress(OSError):
                os.close(redir.fd)
            redir.fd = None


@contextmanager
def preserved_stdio() -> Iterator[None]:
    """Restore stdin and stdout, descriptors and stream objects, on exit."""
    saved_in = os.dup(0)
    saved_out = os.dup(1)
    streams = (sys.stdin, sys.stdout)
    try:
        yield
    finally:
        with suppress(OSError, ValueError):
            sys.stdout.flush()
        os.dup2(saved_in, 0)
        os.dup2(saved_out, 1)
        os.close(saved_in)
        os.close(saved_out)
        sys.stdin, sys.stdout = streams
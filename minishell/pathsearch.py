"""Locating the program a command names."""

from __future__ import annotations

import errno
import os

from minishell.models import Shell


class CommandLookupError(Exception):
    """Raised when a command cannot be resolved to a runnable file."""

    def __init__(self, message: str, name: str, status: int) -> None:
        self.message = message
        self.name = name
        self.status = status
        super().__init__(f"{name}: {message}")


def _direct_path(name: str) -> str:
    if os.path.isdir(name):
        raise CommandLookupError("Is a directory", name, 126)
    try:
        os.stat(name)
    except OSError as error:
        raise CommandLookupError(
            os.strerror(error.errno or errno.ENOENT), name, 127
        ) from error
    if not os.access(name, os.X_OK):
        raise CommandLookupError(os.strerror(errno.EACCES), name, 126)
    return name


def find_command(name: str, shell: Shell) -> str:
    """Return the path to run for ``name`` using the shell's ``PATH``.

    Raises CommandLookupError carrying the message and exit status to report.
    """
    if not name:
        raise CommandLookupError("Command not found", "''", 127)
    search = shell.env.get("PATH")
    if search is None:
        raise CommandLookupError("Command not found", name, 127)
    if "/" in name:
        return _direct_path(name)
    for directory in filter(None, search.split(":")):
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.X_OK):
            return candidate
    raise CommandLookupError("command not found", name, 127)
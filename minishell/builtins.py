"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Sequence

from minishell.expansion import is_var_char
from minishell.models import Command, Shell


class ShellExit(Exception):
    """Raised by the ``exit`` builtin; ``status`` is the code to exit with."""

    def __init__(self, status: int) -> None:
        self.status = status
        super().__init__(f"exit {status}")


def _write_out(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _builtin_error(builtin: str, message: str, name: str | None,
                   status: int, shell: Shell) -> None:
    prefix = f"Minishell: {builtin}: "
    if name is not None:
        prefix += f"{name}: "
    sys.stderr.write(f"{prefix}{message}\n")
    sys.stderr.flush()
    shell.exit_status = status


def run_echo(args: Sequence[str], shell: Shell) -> None:
    """Print the arguments separated by spaces; leading ``-n`` drops the newline."""
    words = list(args[1:])
    newline = True
    while words and words[0] == "-n":
        words.pop(0)
        newline = False
    _write_out(" ".join(words) + ("\n" if newline else ""))
    shell.exit_status = 0


def _change_dir(path: str, shell: Shell) -> None:
    try:
        os.chdir(path)
    except OSError as error:
        _builtin_error("cd", os.strerror(error.errno or 0), path, 1, shell)
    else:
        shell.exit_status = 0


def run_cd(args: Sequence[str], shell: Shell) -> None:
    """Change the working directory; with no argument go to ``$HOME``."""
    if len(args) < 2:
        home = os.environ.get("HOME")
        if home is None:
            _builtin_error("cd", "HOME not set", None, 1, shell)
        else:
            _change_dir(home, shell)
    elif len(args) > 2:
        _builtin_error("cd", "Too many arguments", None, 1, shell)
    else:
        _change_dir(args[1], shell)


def run_env(args: Sequence[str], shell: Shell) -> None:
    """Print every variable as ``KEY=VALUE``; arguments are refused."""
    if len(args) > 1:
        _write_out("Minishell: env: too many arguments\n")
        shell.exit_status = 1
        return
    _write_out("".join(f"{key}={value or ''}\n" for key, value in shell.env.items()))
    shell.exit_status = 0


def _numeric_kind(text: str) -> int:
    """Return 0 when not a number, 2 when too long, 1 otherwise."""
    digits = text[1:] if text[:1] in ("-", "+") else text
    if not digits or not all(char in "0123456789" for char in digits):
        return 0
    if len(text) >= 20 and text[0] != "0":
        return 2
    return 1


def _exit_code(args: Sequence[str], shell: Shell) -> int:
    kind = _numeric_kind(args[1])
    if kind and len(args) > 2:
        _builtin_error("exit", "too many arguments", None, 1, shell)
        return 2
    if kind != 1:
        _builtin_error("exit", "numeric argument required", args[1], 2, shell)
        return 2
    return int(args[1]) % 256


def run_exit(args: Sequence[str], shell: Shell) -> None:
    """Leave the shell by raising ShellExit with the chosen status."""
    status = shell.exit_status if len(args) < 2 else _exit_code(args, shell)
    if not shell.is_forked:
        _write_out("exit\n")
    raise ShellExit(status)


def check_identifier(arg: str, shell: Shell) -> bool:
    """Return True when ``arg`` names a valid variable; otherwise report it."""
    name = get_identifier(arg)
    first = arg[:1]
    valid = (
        bool(first)
        and ((first.isascii() and first.isalpha()) or first == "_")
        and all(is_var_char(char) for char in name)
    )
    if not valid:
        shell.report_error("not a valid identifier", arg, 1)
    return valid


def get_identifier(arg: str) -> str:
    """Return the part of ``arg`` before the first ``=``."""
    return arg.partition("=")[0]


def _print_sorted_env(shell: Shell) -> None:
    lines = []
    for key, value in shell.env.sorted_items():
        line = f"declare -x {key}"
        if value is not None:
            line += f'="{value}"'
        lines.append(line + "\n")
    _write_out("".join(lines))


def run_export(args: Sequence[str], shell: Shell) -> None:
    """Set variables from ``NAME[=VALUE]`` arguments, or list them all."""
    if len(args) < 2:
        shell.exit_status = 0
        _print_sorted_env(shell)
        return
    for arg in args[1:]:
        if not check_identifier(arg, shell):
            return
        key, sep, value = arg.partition("=")
        shell.env.export(key, value if sep else None)
    shell.exit_status = 0


def run_pwd(args: Sequence[str], shell: Shell) -> None:
    """Print the working directory."""
    try:
        path = os.getcwd()
    except OSError as error:
        sys.stderr.write(f"getcwd error: {os.strerror(error.errno or 0)}\n")
        sys.stderr.flush()
        shell.exit_status = 1
        return
    _write_out(f"{path}\n")
    shell.exit_status = 0


def run_unset(args: Sequence[str], shell: Shell) -> None:
    """Remove each named variable."""
    for name in args[1:]:
        shell.env.unset(name)
    shell.exit_status = 0


_BUILTINS: dict[str, Callable[[Sequence[str], Shell], None]] = {
    "echo": run_echo,
    "cd": run_cd,
    "export": run_export,
    "unset": run_unset,
    "pwd": run_pwd,
    "env": run_env,
    "exit": run_exit,
}


def run_builtin(command: Command, shell: Shell) -> bool:
    """Run ``command`` if it is a builtin and return whether it was one."""
    if not command.args:
        return False
    handler = _BUILTINS.get(command.args[0])
    if handler is None:
        return False
    handler(command.args, shell)
    return True
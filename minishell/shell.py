"""Interactive loop: read a line, show how it parses, then run it."""

from __future__ import annotations

import os
import signal
import sys
import threading
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager

from minishell.builtins import ShellExit
from minishell.environment import Environment
from minishell.executor import execute
from minishell.lexer import lex
from minishell.models import Command, Shell, Token
from minishell.parser import parse_tokens
from minishell.syntax import ShellSyntaxError, has_unclosed_quotes
from minishell.tokenizer import tokenize

try:
    import readline  # noqa: F401  (enables line editing and history for input())
except ImportError:
    readline = None

PROMPT = "minishell> "
BANNER = "Enter commands to test parsing. Type 'exit' to quit.\n"


def format_tokens(tokens: Iterable[Token]) -> str:
    """Return a listing of ``tokens`` with their positions and type numbers."""
    lines = ["=== TOKENS ===\n"]
    lines.extend(
        f"Token[{index}]: '{token.value}' (type: {token.type.value})\n"
        for index, token in enumerate(tokens)
    )
    lines.append("==============\n")
    return "".join(lines)


def format_commands(commands: Iterable[Command]) -> str:
    """Return a listing of each command's arguments and redirections."""
    lines: list[str] = []
    for index, command in enumerate(commands):
        lines.append(f"Command {index}:\n")
        lines.extend(
            f"  Arg[{position}]: {arg}\n" for position, arg in enumerate(command.args)
        )
        lines.extend(
            f"    Redir: type={redir.type.value}, target={redir.filename}\n"
            for redir in command.redirs
        )
    return "".join(lines)


def _say(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def run_line(line: str, shell: Shell) -> None:
    """Check, tokenize, parse and run one input line, reporting each stage.

    ShellExit raised by the ``exit`` builtin propagates to the caller.
    """
    if not line or line == " ":
        return
    if has_unclosed_quotes(line):
        sys.stderr.write("Missing closing quote!!\n")
        sys.stderr.flush()
        _say("Quote check failed!\n")
        return
    _say("Quote check passed\n")
    words = tokenize(line, shell)
    _say("Tokenization completed\n")
    shell.tokens = lex(words)
    if not shell.tokens:
        _say("Lexer failed\n")
        return
    _say("Lexer completed\n")
    _say(format_tokens(shell.tokens))
    try:
        try:
            shell.commands = parse_tokens(shell.tokens, shell)
        except ShellSyntaxError as error:
            sys.stderr.write(f"{error}\n")
            sys.stderr.flush()
            _say("Parsing failed (syntax error or other issue)\n")
            if shell.exit_status == 2:
                _say(f"Exit status: {shell.exit_status} (syntax error)\n")
            return
        _say("Parsing completed successfully\n")
        _say(format_commands(shell.commands))
        execute(shell)
    finally:
        shell.tokens = []
        shell.commands = []


@contextmanager
def _interactive_signals() -> Iterator[None]:
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.getsignal(signal.SIGQUIT)
    signal.signal(signal.SIGQUIT, signal.SIG_IGN)
    try:
        yield
    finally:
        signal.signal(
            signal.SIGQUIT, previous if previous is not None else signal.SIG_DFL
        )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the interactive shell until end of input or ``exit``."""
    shell = Shell(env=Environment.from_entries(
        f"{key}={value}" for key, value in os.environ.items()
    ))
    _say(BANNER + "\n")
    with _interactive_signals():
        while True:
            try:
                line = input(PROMPT)
            except EOFError:
                break
            except KeyboardInterrupt:
                _say("\n")
                continue
            try:
                run_line(line, shell)
            except ShellExit as exit_request:
                return exit_request.status
            except KeyboardInterrupt:
                _say("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
"""Core data types shared across the shell."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum

from minishell.environment import Environment


class TokenType(Enum):
    """Kinds of lexical token."""

    WORD = 0
    PIPE = 1
    REDIRECT_IN = 2
    REDIRECT_OUT = 3
    APPEND = 4
    HEREDOC = 5

    @property
    def is_redirection(self) -> bool:
        return self in (
            TokenType.REDIRECT_IN,
            TokenType.REDIRECT_OUT,
            TokenType.APPEND,
            TokenType.HEREDOC,
        )


@dataclass
class Token:
    """A lexed token; ``quoted`` marks a value wrapped in matching quotes."""

    value: str
    type: TokenType = TokenType.WORD
    quoted: bool = False


@dataclass
class Redirect:
    """A redirection attached to a command."""

    type: TokenType
    filename: str
    fd: int | None = None
    heredoc: str | None = None


@dataclass
class Command:
    """One simple command of a pipeline."""

    args: list[str] = field(default_factory=list)
    redirs: list[Redirect] = field(default_factory=list)


@dataclass
class Shell:
    """State of a running shell."""

    env: Environment = field(default_factory=Environment)
    tokens: list[Token] = field(default_factory=list)
    commands: list[Command] = field(default_factory=list)
    exit_status: int = 0
    is_forked: bool = False

    def report_error(self, message: str | None, name: str | None, status: int) -> None:
        """Write ``minishell: name: message`` to stderr and set the exit status."""
        parts = ["minishell: "]
        if name is not None:
            parts.append(f"{name}: ")
        if message is not None:
            parts.append(message)
        parts.append("\n")
        sys.stderr.write("".join(parts))
        sys.stderr.flush()
        self.exit_status = status
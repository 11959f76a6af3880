"""Build commands from a token list."""

from __future__ import annotations

from collections.abc import Iterable

from minishell.expansion import expand
from minishell.models import Command, Redirect, Shell, Token, TokenType
from minishell.syntax import ShellSyntaxError, check_syntax


def parse_tokens(tokens: Iterable[Token], shell: Shell) -> list[Command]:
    """Group ``tokens`` into the commands of a pipeline.

    Quoted words holding ``$`` are expanded against the shell. On a syntax
    error the shell's exit status is set to 2 and ShellSyntaxError is raised.
    """
    tokens = list(tokens)
    if not tokens:
        return []
    try:
        check_syntax(tokens)
    except ShellSyntaxError as error:
        shell.exit_status = error.exit_status
        raise

    current = Command()
    commands = [current]
    stream = iter(tokens)
    for token in stream:
        if token.type is TokenType.WORD or token.quoted:
            value = token.value
            if token.quoted and "$" in value:
                value = expand(value, shell.env, shell.exit_status)
            current.args.append(value)
        elif token.type.is_redirection:
            target = next(stream, None)
            if target is not None:
                current.redirs.append(Redirect(token.type, target.value))
        elif token.type is TokenType.PIPE:
            current = Command()
            commands.append(current)
    return commands
"""Expansion of ``$?`` and ``$NAME`` inside words."""

from __future__ import annotations

from minishell.environment import Environment


def is_var_char(char: str) -> bool:
    """Return True for a character allowed in a variable name."""
    return len(char) == 1 and ((char.isascii() and char.isalnum()) or char == "_")


def is_valid_var_name(name: str) -> bool:
    """Return True when ``name`` starts with a letter and holds only name characters."""
    if not name or not (name[0].isascii() and name[0].isalpha()):
        return False
    return all(is_var_char(char) for char in name)


def expand_exit_status(text: str, exit_status: int) -> str:
    """Replace every ``$?`` outside single quotes with ``exit_status``."""
    out: list[str] = []
    pos = 0
    in_double = False
    while pos < len(text):
        char = text[pos]
        if char == "'" and not in_double:
            end = text.find("'", pos + 1)
            if end == -1:
                out.append(text[pos:])
                break
            out.append(text[pos:end + 1])
            pos = end + 1
            continue
        if char == '"':
            in_double = not in_double
        elif char == "$" and text[pos + 1:pos + 2] == "?":
            out.append(str(exit_status))
            pos += 2
            continue
        out.append(char)
        pos += 1
    return "".join(out)


def expand_vars(text: str, env: Environment) -> str:
    """Replace ``$NAME`` outside single quotes with its value in ``env``.

    Unknown or valueless names expand to the empty string; a ``$`` followed
    by ``?`` is dropped, leaving the ``?``. Substituted values are not
    expanded again.
    """
    out: list[str] = []
    pos = 0
    while pos < len(text):
        char = text[pos]
        if char == "'":
            end = text.find("'", pos + 1)
            if end == -1:
                out.append(text[pos:])
                break
            out.append(text[pos:end + 1])
            pos = end + 1
            continue
        following = text[pos + 1:pos + 2]
        if char == "$" and (is_var_char(following) or following == "?"):
            end = pos + 1
            while end < len(text) and is_var_char(text[end]):
                end += 1
            name = text[pos + 1:end]
            out.append((env.get(name) if name else None) or "")
            pos = end
            continue
        out.append(char)
        pos += 1
    return "".join(out)


def expand(text: str, env: Environment, exit_status: int) -> str:
    """Expand ``$?`` and then ``$NAME`` references in ``text``."""
    return expand_vars(expand_exit_status(text, exit_status), env)
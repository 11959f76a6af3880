"""A small interactive command shell with pipes, redirections, here-documents and builtins."""

__version__ = "0.1.0"
__all__ = [
    "builtins",
    "environment",
    "executor",
    "expansion",
    "heredoc",
    "lexer",
    "models",
    "parser",
    "pathsearch",
    "redirection",
    "shell",
    "syntax",
    "tokenizer",
]
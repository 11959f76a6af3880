# minishell

A small interactive command shell for POSIX systems. It reads a line,
splits it into words, quoted strings and operators, checks the syntax,
and runs the result: a single command, or a pipeline of commands joined
by `|`. While it works it prints how the line was tokenized and how the
tokens were grouped into commands, which makes it handy for seeing how a
line is parsed.

## Features

- Pipelines: `ls | grep py | wc -l`, each command in its own child process;
  the exit status is that of the last command
- Redirections: `<` input, `>` truncate, `>>` append
- Here-documents: `<< EOF`, read with a `> ` prompt before the line runs;
  a delimiter containing quotes turns off `$` expansion of the body
- Builtins, run inside the shell: `echo` (with `-n`), `cd` (no argument
  means `$HOME`), `pwd`, `env`, `export` (no argument lists the variables
  as `declare -x NAME="value"`, sorted), `unset`, `exit [status]`
- Other commands are looked up in the shell's `PATH`; a name containing
  `/` is run directly. Not found gives status 127, a directory or a file
  that cannot be executed gives 126
- Syntax errors (a leading or doubled `|`, a `|` at the end, a redirection
  without a target) are reported and set the exit status to 2
- Lines with an unclosed quote are rejected before anything runs

## Installing

```
pip install .
```

## Running

```
minishell
```

The shell prints `minishell> ` and waits for input. End the session with
`exit` (optionally with a numeric status, which becomes the process exit
code) or with end-of-file (Ctrl-D).

```
minishell> echo hello world | tr a-z A-Z
HELLO WORLD
minishell> cat << EOF > notes.txt
> first line
> EOF
minishell> exit 3
```

## How words are expanded

- An unquoted `$?` is replaced by the last exit status, and an unquoted
  `$NAME` by its value in the process environment, when the line is
  tokenized.
- A quoted word that contains `$` is expanded against the shell's own
  variables (those set with `export`); text inside single quotes within it
  is left alone.
- Quote characters are kept in the arguments: `echo 'hi'` prints `'hi'`.

## What it does not do

There is no `;`, `&&`, `||`, subshells, background jobs, globbing or
script files. Variables set with `export` reach child programs and quoted
words, but not unquoted `$NAME` references, which read the environment
the shell was started with.

## Using it from Python

```python
from minishell.environment import Environment
from minishell.models import Shell
from minishell.shell import run_line

shell = Shell(env=Environment.from_entries(["PATH=/usr/bin:/bin"]))
run_line("echo hello | tr a-z A-Z", shell)
print(shell.exit_status)
```

`run_line` raises `minishell.builtins.ShellExit` when the line runs
`exit`. The stages can also be used on their own:
`minishell.tokenizer.tokenize`, `minishell.lexer.lex`,
`minishell.syntax.check_syntax` (raises `ShellSyntaxError`),
`minishell.parser.parse_tokens`, `minishell.expansion.expand` and
`minishell.executor.execute`.

## Tests

```
pip install .[test]
pytest
```
import pytest

from minishell.models import Shell
from minishell.tokenizer import tokenize


def test_words_and_pipe():
    assert tokenize("echo hello | cat") == ["echo", "hello", "|", "cat"]


def test_operators_without_spaces():
    assert tokenize("ls>>out<in") == ["ls", ">>", "out", "<", "in"]
    assert tokenize("cat<<EOF") == ["cat", "<<", "EOF"]


def test_double_pipe_is_two_pipes():
    assert tokenize("a||b") == ["a", "|", "|", "b"]


def test_whitespace_only_gives_nothing():
    assert tokenize(" \t\n ") == []
    assert tokenize("") == []


def test_quoted_token_keeps_quotes():
    assert tokenize('echo "a b" \'c  d\'') == ["echo", '"a b"', "'c  d'"]


def test_unterminated_quote_is_closed():
    assert tokenize('"abc') == ['"abc"']


def test_quote_breaks_word():
    assert tokenize('ab"cd"') == ["ab", '"cd"']


def test_exit_status_substitution():
    shell = Shell(exit_status=42)
    assert tokenize("echo $?", shell) == ["echo", "42"]


def test_exit_status_without_shell_is_zero():
    assert tokenize("$?") == ["0"]


def test_lone_dollar():
    assert tokenize("echo $") == ["echo", "$"]
    assert tokenize("$ x") == ["$", "x"]


def test_dollar_before_non_name_char():
    assert tokenize("$-a") == ["$", "-a"]


def test_variable_from_process_environment(monkeypatch):
    monkeypatch.setenv("MS_TEST_VAR", "value one")
    assert tokenize("a$MS_TEST_VAR") == ["a", "value one"]


def test_unset_variable_gives_empty_token(monkeypatch):
    monkeypatch.delenv("MS_TEST_MISSING", raising=False)
    assert tokenize("echo $MS_TEST_MISSING") == ["echo", ""]


@pytest.mark.parametrize("line", ["ls -l", "a | b | c", "x > y"])
def test_plain_tokens_rejoin_to_input(line):
    assert " ".join(tokenize(line)) == line
import os

import pytest

from minishell.environment import Environment
from minishell.models import Shell
from minishell.pathsearch import CommandLookupError, find_command


def _shell(path=None):
    env = Environment()
    if path is not None:
        env.set("PATH", path)
    return Shell(env=env)


def _make_file(path, mode):
    path.write_text("#!/bin/sh\n")
    path.chmod(mode)
    return path


def test_empty_name_not_found():
    with pytest.raises(CommandLookupError) as info:
        find_command("", _shell("/bin"))
    assert info.value.status == 127
    assert info.value.name == "''"


def test_missing_path_variable():
    with pytest.raises(CommandLookupError) as info:
        find_command("ls", _shell())
    assert info.value.status == 127
    assert info.value.message == "Command not found"


def test_finds_executable_in_path(tmp_path):
    _make_file(tmp_path / "tool", 0o755)
    empty = tmp_path / "empty"
    empty.mkdir()
    result = find_command("tool", _shell(f"{empty}::{tmp_path}"))
    assert result == f"{tmp_path}/tool"


def test_skips_non_executable(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    _make_file(first / "tool", 0o644)
    _make_file(second / "tool", 0o755)
    assert find_command("tool", _shell(f"{first}:{second}")) == f"{second}/tool"


def test_unknown_command(tmp_path):
    with pytest.raises(CommandLookupError) as info:
        find_command("nothing-here", _shell(str(tmp_path)))
    assert info.value.status == 127
    assert info.value.message == "command not found"


def test_direct_path_directory(tmp_path):
    with pytest.raises(CommandLookupError) as info:
        find_command(str(tmp_path) + "/", _shell("/bin"))
    assert info.value.status == 126


def test_direct_path_missing(tmp_path):
    with pytest.raises(CommandLookupError) as info:
        find_command(str(tmp_path / "gone"), _shell("/bin"))
    assert info.value.status == 127
    assert info.value.message == os.strerror(2)


def test_direct_path_not_executable(tmp_path):
    script = _make_file(tmp_path / "script", 0o644)
    with pytest.raises(CommandLookupError) as info:
        find_command(str(script), _shell("/bin"))
    assert info.value.status == 126


def test_direct_path_executable(tmp_path):
    script = _make_file(tmp_path / "script", 0o755)
    assert find_command(str(script), _shell("/bin")) == str(script)
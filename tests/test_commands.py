import io

import pytest

from mshell.commands import (
    is_valid_n_flag,
    print_export_env,
    process_export_arg,
    process_unset_arg,
    sorted_env_entries,
)
from mshell.environment import Environment, ShellState


@pytest.fixture
def shell():
    return ShellState(Environment(["PATH=/bin", "HOME=/home/user", "ZED=z"]))


@pytest.mark.parametrize("arg", ["-n", "-nn", "-nnnn"])
def test_valid_n_flags(arg):
    assert is_valid_n_flag(arg) is True


@pytest.mark.parametrize("arg", ["", "-", "n", "-na", "--n", "-n-", None])
def test_invalid_n_flags(arg):
    assert is_valid_n_flag(arg) is False


def test_export_sets_value(shell):
    assert process_export_arg("FOO=bar", shell) == 0
    assert shell.env.get("FOO") == "bar"


def test_export_value_may_contain_equals(shell):
    assert process_export_arg("FOO=a=b", shell) == 0
    assert shell.env.get("FOO") == "a=b"


def test_export_empty_value(shell):
    assert process_export_arg("FOO=", shell) == 0
    assert shell.env.get("FOO") == ""
    assert "FOO=" in shell.env.to_array()


def test_export_name_only_keeps_existing_value(shell):
    assert process_export_arg("PATH", shell) == 0
    assert shell.env.get("PATH") == "/bin"


def test_export_name_only_adds_valueless_variable(shell):
    assert process_export_arg("NEWVAR", shell) == 0
    assert "NEWVAR" in shell.env
    assert shell.env.get("NEWVAR") is None
    assert all(not line.startswith("NEWVAR") for line in shell.env.to_array())


def test_export_invalid_identifier(shell, capsys):
    assert process_export_arg("1ABC=x", shell) == 1
    assert "1ABC" not in shell.env
    err = capsys.readouterr().err
    assert "`1ABC=x': not a valid identifier" in err


def test_export_bare_dash_is_invalid_identifier(shell):
    assert process_export_arg("-", shell) == 1


@pytest.mark.parametrize("arg", ["-x", "--", "--foo=bar", "-p"])
def test_export_invalid_option(shell, capsys, arg):
    before = len(shell.env)
    assert process_export_arg(arg, shell) == 2
    assert len(shell.env) == before
    err = capsys.readouterr().err
    assert f"{arg}: invalid option" in err
    assert "export: usage:" in err


def test_sorted_entries_are_ordered_and_complete(shell):
    entries = sorted_env_entries(shell)
    keys = [key for key, _ in entries]
    assert keys == sorted(keys)
    assert set(keys) == set(shell.env)


def test_sorted_entries_use_byte_order():
    state = ShellState(Environment(["b=1", "B=2", "_x=3", "a=4"]))
    keys = [key for key, _ in sorted_env_entries(state)]
    assert keys == ["B", "OLDPWD", "_x", "a", "b"]


def test_print_export_env(shell):
    out = io.StringIO()
    assert print_export_env(shell, out) == 0
    lines = out.getvalue().splitlines()
    assert 'declare -x OLDPWD=""' in lines
    assert 'declare -x PATH="/bin"' in lines
    assert len(lines) == len(shell.env)
    assert lines == sorted(lines)


def test_print_export_env_defaults_to_stdout(shell, capsys):
    print_export_env(shell)
    assert 'declare -x ZED="z"' in capsys.readouterr().out


def test_unset_removes_variable(shell):
    assert process_unset_arg("PATH", shell) == 0
    assert "PATH" not in shell.env


def test_unset_missing_variable_succeeds(shell):
    before = len(shell.env)
    assert process_unset_arg("NOPE", shell) == 0
    assert len(shell.env) == before


def test_unset_invalid_option(shell, capsys):
    assert process_unset_arg("-v", shell) == 2
    err = capsys.readouterr().err
    assert "-v: invalid option" in err
    assert "unset: usage: unset [-fv] [name ...]" in err


def test_unset_invalid_identifier(shell, capsys):
    assert process_unset_arg("A-B", shell) == 1
    assert "`A-B': not a valid identifier" in capsys.readouterr().err


def test_unset_bare_dash_is_invalid_identifier(shell):
    assert process_unset_arg("-", shell) == 1
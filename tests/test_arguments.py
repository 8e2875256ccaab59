import pytest

from mshell.arguments import (
    expand_args,
    expand_tilde,
    expand_tilde_array,
    expand_variables_array,
    remove_empty_args,
    remove_quote_markers,
)
from mshell.environment import Environment, ShellState

HOME = "/home/tester"
NAME = "value"


@pytest.fixture
def shell():
    return ShellState(env=Environment([f"HOME={HOME}", f"NAME={NAME}"]))


@pytest.fixture
def homeless():
    return ShellState(env=Environment([f"NAME={NAME}"]))


def test_bare_tilde(shell):
    assert expand_tilde("~", shell) == HOME


def test_tilde_slash(shell):
    assert expand_tilde("~/docs", shell) == HOME + "/docs"


@pytest.mark.parametrize("word", ["~user", "a~", "", "x/~"])
def test_tilde_left_alone(shell, word):
    assert expand_tilde(word, shell) == word


def test_tilde_without_home(homeless):
    assert expand_tilde("~/docs", homeless) == "~/docs"


def test_tilde_array(shell):
    assert expand_tilde_array(["~", "plain", "~/a"], shell) == [HOME, "plain", HOME + "/a"]


def test_variables_array(shell):
    assert expand_variables_array(["$NAME", "\x01$NAME\x01"], shell) == [
        NAME,
        "\x01$NAME\x01",
    ]


def test_remove_quote_markers():
    assert remove_quote_markers("\x01a\x01\x02b\x02") == "ab"
    assert remove_quote_markers("plain") == "plain"


def test_remove_empty_args_keeps_quoted_empty():
    assert remove_empty_args(["", "a", "\x01\x01", ""]) == ["a", ""]


def test_expand_args_drops_unset_variable(shell, tmp_path):
    assert expand_args(["echo", "$MISSING"], shell, tmp_path) == ["echo"]


def test_expand_args_tilde_then_variable(shell, tmp_path):
    assert expand_args(["~/$NAME"], shell, tmp_path) == [f"{HOME}/{NAME}"]


def test_expand_args_wildcard_sorted(shell, tmp_path):
    for name in ("b.txt", "a.txt", "c.log"):
        (tmp_path / name).write_text("")
    assert expand_args(["ls", "*.txt"], shell, tmp_path) == ["ls", "a.txt", "b.txt"]


def test_expand_args_quoted_wildcard_not_expanded(shell, tmp_path):
    (tmp_path / "a.txt").write_text("")
    assert expand_args(["\x01*.txt\x01"], shell, tmp_path) == ["*.txt"]


def test_expand_args_no_match_keeps_pattern(shell, tmp_path):
    assert expand_args(["*.none"], shell, tmp_path) == ["*.none"]


def test_expand_args_single_quotes_block_variable(shell, tmp_path):
    assert expand_args(["\x01$NAME\x01"], shell, tmp_path) == ["$NAME"]
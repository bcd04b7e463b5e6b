"""Tests for entry-file record parsing."""

from __future__ import annotations

import pytest

from boxmenu.records import ActionDescriptor, parse_line


def test_parses_leaf_command() -> None:
    item = parse_line("Shell,.,bash")

    assert item == ActionDescriptor(name="Shell", working_dir=".", command=("bash",))
    assert not item.is_submenu
    assert item.program == "bash"
    assert item.arguments == ()


def test_empty_command_is_submenu_marker() -> None:
    item = parse_line("Nested,./sub,")

    assert item is not None
    assert item.command == ()
    assert item.is_submenu
    assert item.program is None


def test_whitespace_only_command_is_submenu_marker() -> None:
    item = parse_line("Nested,./sub,   ")

    assert item is not None
    assert item.is_submenu


@pytest.mark.parametrize("line", ["Bad,only-two-fields", "single", ""])
def test_lines_with_fewer_than_three_fields_are_rejected(line: str) -> None:
    assert parse_line(line) is None


def test_quoted_argument_stays_one_token() -> None:
    item = parse_line('Edit,.,vim "file with space.txt"')

    assert item is not None
    assert item.command == ("vim", "file with space.txt")


def test_escaped_space_and_single_quotes() -> None:
    item = parse_line(r"Grep,~/src,grep -r 'two words' a\ b")

    assert item is not None
    assert item.working_dir == "~/src"
    assert item.command == ("grep", "-r", "two words", "a b")


def test_unbalanced_quotes_are_rejected() -> None:
    assert parse_line('Broken,.,echo "unterminated') is None


def test_empty_name_is_rejected() -> None:
    assert parse_line(",.,ls") is None


def test_fields_after_the_third_are_ignored() -> None:
    item = parse_line("List,/tmp,ls -l,extra,fields")

    assert item is not None
    assert item.command == ("ls", "-l")


def test_trailing_newline_is_stripped() -> None:
    item = parse_line("Top,/,htop\r\n")

    assert item is not None
    assert item.command == ("htop",)


def test_working_dir_is_kept_unexpanded() -> None:
    item = parse_line("Home,~,ls")

    assert item is not None
    assert item.working_dir == "~"


def test_descriptor_is_immutable() -> None:
    item = parse_line("Shell,.,bash")

    with pytest.raises(AttributeError):
        item.name = "Other"  # type: ignore[misc]

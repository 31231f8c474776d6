"""Tests for CLI argument parsing and dispatch."""

import pytest

from kanbanmd.__main__ import main
from kanbanmd.cli import build_parser
from kanbanmd.cli.board import board_format
from kanbanmd.cli.card import card_add


def test_parse_board_format():
    args = build_parser().parse_args(["board", "format", "b.md", "-w"])
    assert args.func is board_format
    assert args.file == "b.md"
    assert args.write is True
    assert args.json is False


def test_parse_card_add_defaults():
    args = build_parser().parse_args(["card", "add", "b.md", "Do it", "--json"])
    assert args.func is card_add
    assert args.text == "Do it"
    assert args.lane == 1
    assert args.json is True


def test_main_dispatches(board_file, capsys, monkeypatch):
    monkeypatch.setattr("sys.argv", ["kanbanmd", "board", "summary", str(board_file)])
    with pytest.raises(SystemExit) as exc_info:
        main()
    assert exc_info.value.code == 0
    assert "Todo" in capsys.readouterr().out


def test_main_without_command(capsys, monkeypatch):
    monkeypatch.setattr("sys.argv", ["kanbanmd"])
    with pytest.raises(SystemExit) as exc_info:
        main()
    assert exc_info.value.code == 1

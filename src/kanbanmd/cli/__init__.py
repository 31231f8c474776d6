"""CLI argument parser and dispatch for kanbanmd."""

import argparse

from kanbanmd.cli.board import board_dump, board_format, board_summary
from kanbanmd.cli.card import card_add


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("-v", "--verbose", action="store_true", help="Log parser diagnostics to stderr")

    parser = argparse.ArgumentParser(
        prog="kanbanmd",
        description="Markdown kanban board tools",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- board ---
    board_p = nouns.add_parser("board", help="Board operations", parents=[common])
    board_verbs = board_p.add_subparsers(dest="verb")

    board_summary_p = board_verbs.add_parser("summary", help="Show board summary", parents=[common])
    board_summary_p.add_argument("file", help="Board markdown file")
    board_summary_p.set_defaults(func=board_summary)

    board_format_p = board_verbs.add_parser("format", help="Print board in canonical form", parents=[common])
    board_format_p.add_argument("file", help="Board markdown file")
    board_format_p.add_argument("-w", "--write", action="store_true", help="Rewrite the file in place")
    board_format_p.set_defaults(func=board_format)

    board_dump_p = board_verbs.add_parser("dump", help="Dump parsed board as JSON", parents=[common])
    board_dump_p.add_argument("file", help="Board markdown file")
    board_dump_p.set_defaults(func=board_dump)

    # --- card ---
    card_p = nouns.add_parser("card", help="Card operations", parents=[common])
    card_verbs = card_p.add_subparsers(dest="verb")

    card_add_p = card_verbs.add_parser("add", help="Add a card", parents=[common])
    card_add_p.add_argument("file", help="Board markdown file")
    card_add_p.add_argument("text", help="Card text, sigils included")
    card_add_p.add_argument("--lane", type=int, default=1, help="Target lane position (1-indexed, default: 1)")
    card_add_p.set_defaults(func=card_add)

    return parser

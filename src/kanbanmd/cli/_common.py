"""Shared helpers for CLI command handlers."""

import json
import sys
from dataclasses import asdict
from pathlib import Path

from kanbanmd.assemble import parse_board
from kanbanmd.context import BoardContext
from kanbanmd.models import Board, Item, Lane
from kanbanmd.serialize import board_to_md


def load_board_or_die(path: str, json_mode: bool, context: BoardContext | None = None) -> Board:
    """Read and parse a board file. Exit 1 with message if it can't be read."""
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        error(f"cannot read {path}: {e}", json_mode)
    return parse_board(text, context, board_id=str(file_path))


def save(path: str, board: Board) -> None:
    """Serialize board back to path."""
    Path(path).write_text(board_to_md(board), encoding="utf-8")


def find_lane(board: Board, position: int, json_mode: bool) -> Lane:
    """Lookup lane by 1-indexed position. Exit 1 listing available lanes if not found."""
    if 1 <= position <= len(board.children):
        return board.children[position - 1]
    available = [f"  {i}  {lane.data.title}" for i, lane in enumerate(board.children, 1)]
    msg = f"Lane {position} not found. Available:\n" + "\n".join(available)
    error(msg, json_mode)


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2, default=str))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)


def item_to_dict(item: Item) -> dict:
    return {"id": item.id, **asdict(item.data)}


def build_lane_summaries(board: Board) -> list[dict]:
    """Build lane summary dicts from board."""
    return [
        {
            "id": i,
            "title": lane.data.title,
            "items": len(lane.children),
            "complete": lane.data.should_mark_items_complete,
        }
        for i, lane in enumerate(board.children, 1)
    ]


def format_lane_line(lane: dict, indent: str = "") -> str:
    """Format a lane summary dict as a text line."""
    complete = "  (complete)" if lane["complete"] else ""
    items = "item" if lane["items"] == 1 else "items"
    return f"{indent}{lane['id']}  {lane['title']:<16} {lane['items']} {items}{complete}"

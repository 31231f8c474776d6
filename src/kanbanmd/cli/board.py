"""Handlers for 'kanbanmd board' commands."""

import sys

from kanbanmd.cli._common import (
    build_lane_summaries,
    format_lane_line,
    item_to_dict,
    load_board_or_die,
    output_json,
    save,
)
from kanbanmd.serialize import board_to_md


def board_summary(args) -> int:
    """Show board summary: lanes, item counts, archive size, anomalies."""
    board = load_board_or_die(args.file, args.json)
    lanes = build_lane_summaries(board)
    errors = [{"kind": e.kind, "description": e.description} for e in board.data.errors]

    if args.json:
        output_json({"lanes": lanes, "archived": len(board.data.archive), "errors": errors})
    else:
        print(board.id)
        for lane in lanes:
            print(format_lane_line(lane, indent="  "))
        if board.data.archive:
            print(f"  archive: {len(board.data.archive)}")
        for e in errors:
            print(f"warning: {e['kind']}: {e['description']}", file=sys.stderr)

    return 0


def board_format(args) -> int:
    """Print (or write back) the board in canonical form."""
    board = load_board_or_die(args.file, args.json)

    if args.write:
        save(args.file, board)
        if args.json:
            output_json({"file": args.file, "written": True})
        else:
            print(f"Formatted {args.file}")
        return 0

    markdown = board_to_md(board)
    if args.json:
        output_json({"file": args.file, "markdown": markdown})
    else:
        sys.stdout.write(markdown)
        sys.stdout.write("\n")

    return 0


def board_dump(args) -> int:
    """Dump the parsed board as JSON."""
    board = load_board_or_die(args.file, json_mode=True)
    output_json(
        {
            "id": board.id,
            "lanes": [
                {
                    "id": lane.id,
                    "title": lane.data.title,
                    "shouldMarkItemsComplete": lane.data.should_mark_items_complete,
                    "items": [item_to_dict(item) for item in lane.children],
                }
                for lane in board.children
            ],
            "archive": [item_to_dict(item) for item in board.data.archive],
            "frontmatter": board.data.frontmatter,
            "settings": board.data.settings,
            "errors": [{"kind": e.kind, "description": e.description} for e in board.data.errors],
        }
    )
    return 0

"""Handlers for 'kanbanmd card' commands."""

import asyncio
from dataclasses import replace

from kanbanmd.cli._common import find_lane, item_to_dict, load_board_or_die, output_result, save
from kanbanmd.context import BoardContext
from kanbanmd.items import new_item


def card_add(args) -> int:
    """Append a card to a lane and write the board back."""
    board = load_board_or_die(args.file, args.json)
    lane = find_lane(board, args.lane, args.json)

    context = BoardContext().with_settings(board.data.settings)
    item = asyncio.run(new_item(context, args.text, is_complete=lane.data.should_mark_items_complete))

    lanes = [replace(other, children=[*other.children, item]) if other is lane else other for other in board.children]
    save(args.file, replace(board, children=lanes))

    output_result(
        {"lane": lane.data.title, "item": item_to_dict(item)},
        f"Added to {lane.data.title}: {item.data.title}",
        args.json,
    )
    return 0

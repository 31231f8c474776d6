"""Create and edit single cards without re-parsing the whole board."""

from __future__ import annotations

from dataclasses import replace

from kanbanmd.context import BoardContext
from kanbanmd.extract import list_item_to_item_data
from kanbanmd.hydrate import hydrate_item, hydrate_items
from kanbanmd.models import Board, Item, ItemData
from kanbanmd.parser import first_list_item, parse_fragment
from kanbanmd.serialize import format_item_line
from kanbanmd.spans import decode_line_breaks


def item_data_from_line(context: BoardContext, line: str) -> ItemData:
    """Run one checklist line through the full-board extraction pipeline."""
    list_item = first_list_item(parse_fragment(line, context.config))
    if list_item is None:
        text = decode_line_breaks(line)
        return ItemData(title_raw=text, title=text)
    return list_item_to_item_data(list_item)


def _reparsed(context: BoardContext, item: Item, content: str) -> Item:
    line = format_item_line(content, item.data.is_complete, item.data.block_id)
    return replace(item, data=item_data_from_line(context, line))


async def new_item(context: BoardContext, content: str, is_complete: bool = False) -> Item:
    """Create a hydrated card with a fresh ID from user-entered text."""
    line = format_item_line(content, is_complete)
    item = Item(id=context.ids(), data=item_data_from_line(context, line))
    return await hydrate_item(item, context.settings, context.provider)


async def update_item_content(context: BoardContext, item: Item, content: str) -> Item:
    """Replace a card's text, keeping its ID, checkbox state and block ID."""
    return await hydrate_item(_reparsed(context, item, content), context.settings, context.provider)


async def reparse_board(context: BoardContext, board: Board) -> Board:
    """Rebuild every card from its own title_raw, e.g. after a settings change.

    Lane and card IDs and order are preserved. Cards are hydrated as one
    batch; a card whose hydration fails keeps its freshly extracted data.
    """
    lanes = [[_reparsed(context, item, item.data.title_raw) for item in lane.children] for lane in board.children]
    archive = [_reparsed(context, item, item.data.title_raw) for item in board.data.archive]

    flat = [item for items in lanes for item in items] + archive
    hydrated = iter(await hydrate_items(flat, context.settings, context.provider))

    children = [replace(lane, children=[next(hydrated) for _ in items]) for lane, items in zip(board.children, lanes)]
    return replace(board, children=children, data=replace(board.data, archive=list(hydrated)))

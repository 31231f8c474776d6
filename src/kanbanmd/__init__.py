"""Markdown kanban boards: parse board text into lanes and cards, and back."""

from kanbanmd.assemble import md_to_board, parse_board
from kanbanmd.config import Labels, ParserConfig, Settings, labels_for
from kanbanmd.context import BoardContext
from kanbanmd.extract import extract_item, list_item_to_item_data
from kanbanmd.hydrate import MetadataProvider, hydrate_board, hydrate_item, should_refresh_board
from kanbanmd.ids import SequentialIds, generate_instance_id
from kanbanmd.items import new_item, reparse_board, update_item_content
from kanbanmd.models import (
    Board,
    BoardData,
    BoardError,
    FileAccessor,
    Item,
    ItemData,
    ItemMetadata,
    Lane,
    LaneData,
)
from kanbanmd.serialize import board_to_md
from kanbanmd.spans import TextSpan, reconstruct_title

__all__ = [
    "Board",
    "BoardContext",
    "BoardData",
    "BoardError",
    "FileAccessor",
    "Item",
    "ItemData",
    "ItemMetadata",
    "Labels",
    "Lane",
    "LaneData",
    "MetadataProvider",
    "ParserConfig",
    "SequentialIds",
    "Settings",
    "TextSpan",
    "board_to_md",
    "extract_item",
    "generate_instance_id",
    "hydrate_board",
    "hydrate_item",
    "labels_for",
    "list_item_to_item_data",
    "md_to_board",
    "new_item",
    "parse_board",
    "reconstruct_title",
    "reparse_board",
    "should_refresh_board",
    "update_item_content",
]

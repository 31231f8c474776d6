"""Assemble a Board from board markdown: lanes, archive, front-matter, settings."""

from __future__ import annotations

import json
import logging

from markdown_it.tree import SyntaxTreeNode

from kanbanmd.config import ParserConfig, Settings
from kanbanmd.context import BoardContext
from kanbanmd.extract import list_item_to_item_data
from kanbanmd.hydrate import hydrate_board
from kanbanmd.ids import IdGenerator
from kanbanmd.models import Board, BoardData, BoardError, Item, Lane, LaneData
from kanbanmd.parser import (
    LIST_TYPES,
    FrontMatterError,
    inline_text,
    normalize_newlines,
    parse_markdown,
    split_front_matter,
)

logger = logging.getLogger(__name__)


def _report(errors: list[BoardError], kind: str, description: str) -> None:
    logger.warning("%s: %s", kind, description)
    errors.append(BoardError(kind=kind, description=description))


def is_settings_paragraph(node: SyntaxTreeNode, config: ParserConfig) -> bool:
    """A paragraph opening the %% settings %% comment block."""
    if node.type != "paragraph" or not node.children:
        return False
    return node.children[0].content.startswith(f"%% {config.settings_marker}")


def is_archive_heading(children: list[SyntaxTreeNode], index: int, config: ParserConfig) -> bool:
    """The archive label heading, directly preceded by a thematic break."""
    heading = children[index]
    if heading.type != "heading" or inline_text(heading) != config.labels.archive:
        return False
    return index > 0 and children[index - 1].type == "hr"


def find_lane_list(
    children: list[SyntaxTreeNode],
    index: int,
    config: ParserConfig,
) -> tuple[SyntaxTreeNode | None, bool]:
    """Find the list belonging to the heading at index.

    Returns (list_node, should_mark_items_complete). The scan stops at the
    next heading or at the settings block. A paragraph reading exactly the
    complete label marks the lane's items complete.
    """
    should_mark_items_complete = False
    for node in children[index + 1 :]:
        if node.type == "heading":
            break
        if node.type in LIST_TYPES:
            return node, should_mark_items_complete
        if node.type == "paragraph":
            if is_settings_paragraph(node, config):
                break
            if inline_text(node) == config.labels.complete:
                should_mark_items_complete = True
    return None, should_mark_items_complete


def read_settings(children: list[SyntaxTreeNode], config: ParserConfig, errors: list[BoardError]) -> dict:
    """Read the JSON settings from the first settings block."""
    settings: dict | None = None
    for index, node in enumerate(children):
        if not is_settings_paragraph(node, config):
            continue
        fence = children[index + 1] if index + 1 < len(children) else None
        if fence is None or fence.type not in ("fence", "code_block"):
            _report(errors, "settings", "settings marker is not followed by a code block")
            continue
        if settings is not None:
            _report(errors, "duplicate-settings", "ignoring additional settings block")
            continue
        try:
            value = json.loads(fence.content or "{}")
        except json.JSONDecodeError as e:
            _report(errors, "settings", f"settings block is not valid JSON: {e}")
            value = {}
        if not isinstance(value, dict):
            _report(errors, "settings", f"settings block is a {type(value).__name__}, not an object")
            value = {}
        settings = value
    return settings or {}


def _list_to_items(list_node: SyntaxTreeNode, ids: IdGenerator) -> list[Item]:
    return [Item(id=ids(), data=list_item_to_item_data(list_item)) for list_item in list_node.children]


def ast_to_board(
    root: SyntaxTreeNode,
    frontmatter: dict,
    settings: dict,
    context: BoardContext,
    board_id: str = "",
    errors: list[BoardError] | None = None,
) -> Board:
    """Group heading + list pairs into lanes and the archive.

    Every heading becomes a lane, empty if no list follows it, except the
    archive heading, whose list items go to the board archive instead.
    """
    config = context.config
    children = root.children
    lanes: list[Lane] = []
    archive: list[Item] = []

    for index, child in enumerate(children):
        if child.type != "heading":
            continue

        title = child.children[0].content if child.children else ""
        list_node, should_mark_items_complete = find_lane_list(children, index, config)

        if list_node is not None and is_archive_heading(children, index, config):
            archive.extend(_list_to_items(list_node, context.ids))
            continue

        lane_id = context.ids()
        lanes.append(
            Lane(
                id=lane_id,
                children=_list_to_items(list_node, context.ids) if list_node is not None else [],
                data=LaneData(title=title, should_mark_items_complete=should_mark_items_complete),
            )
        )

    return Board(
        id=board_id,
        children=lanes,
        data=BoardData(
            settings=settings,
            frontmatter=frontmatter,
            archive=archive,
            is_searching=False,
            errors=list(errors or []),
        ),
    )


def parse_board(text: str, context: BoardContext | None = None, board_id: str = "") -> Board:
    """Parse board markdown into an unhydrated Board. Never raises on bad input.

    When context uses the default parser config, the document's own
    settings (date/time triggers, locale) decide how it is parsed.
    """
    context = context or BoardContext()
    errors: list[BoardError] = []

    text = normalize_newlines(text)
    try:
        body, frontmatter = split_front_matter(text)
    except FrontMatterError as e:
        body, frontmatter = e.remaining, {}
        _report(errors, "frontmatter", f"invalid front-matter: {e}")

    root = parse_markdown(body, context.config)
    settings = read_settings(root.children, context.config, errors)

    if context.config == ParserConfig():
        derived = context.with_settings(settings)
        if derived.config != context.config:
            logger.debug("re-parsing %r with document settings", board_id)
            context = derived
            root = parse_markdown(body, context.config)

    return ast_to_board(root, frontmatter, settings, context, board_id, errors)


async def md_to_board(text: str, context: BoardContext | None = None, board_id: str = "") -> Board:
    """Parse board markdown and hydrate every card."""
    context = context or BoardContext()
    board = parse_board(text, context, board_id)
    settings = Settings({**context.settings.to_dict(), **board.data.settings})
    return await hydrate_board(board, settings, context.provider)

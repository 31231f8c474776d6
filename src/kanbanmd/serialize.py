"""Serialize a Board back to board markdown."""

from __future__ import annotations

import json

import yaml

from kanbanmd.config import SETTINGS_MARKER, Labels, ParserConfig
from kanbanmd.models import Board, Item, Lane
from kanbanmd.spans import encode_line_breaks

ARCHIVE_DIVIDER = "***"


def complete_marker(labels: Labels) -> str:
    return f"**{labels.complete}**"


def format_item_line(title_raw: str, is_complete: bool, block_id: str | None = None) -> str:
    """One checklist bullet: checkbox, text with newlines as <br>, optional ^anchor."""
    line = f"- [{'x' if is_complete else ' '}] {encode_line_breaks(title_raw).strip()}"
    if block_id:
        line += f" ^{block_id}"
    return line


def item_to_md(item: Item) -> str:
    return format_item_line(item.data.title_raw, item.data.is_complete, item.data.block_id)


def lane_to_md(lane: Lane, labels: Labels | None = None) -> str:
    """Heading, blank line, optional complete marker, items, then the lane separator."""
    labels = labels or Labels()
    lines = [f"## {lane.data.title}", ""]
    if lane.data.should_mark_items_complete:
        lines.append(complete_marker(labels))
    lines.extend(item_to_md(item) for item in lane.children)
    lines.extend(["", "", ""])
    return "\n".join(lines)


def archive_to_md(archive: list[Item], labels: Labels | None = None) -> str:
    if not archive:
        return ""
    labels = labels or Labels()
    lines = [ARCHIVE_DIVIDER, "", f"## {labels.archive}", ""]
    lines.extend(item_to_md(item) for item in archive)
    return "\n".join(lines)


def frontmatter_to_md(frontmatter: dict) -> str:
    dumped = yaml.dump(frontmatter or {}, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return "\n".join(["---", "", dumped.rstrip("\n"), "", "---", "", ""])


def settings_to_codeblock(settings: dict, marker: str = SETTINGS_MARKER) -> str:
    """Settings JSON inside a %% comment %%, hidden when rendered."""
    return "\n".join(
        [
            "",
            "",
            f"%% {marker}",
            "```",
            json.dumps(settings or {}, separators=(",", ":"), ensure_ascii=False, default=str),
            "```",
            "%%",
        ]
    )


def board_to_md(board: Board, labels: Labels | None = None) -> str:
    """Render the whole board: front-matter, lanes, archive, settings block.

    Labels default to the locale named in the board's own settings.
    """
    if labels is None:
        labels = ParserConfig.from_settings(board.data.settings).labels
    lanes = "".join(lane_to_md(lane, labels) for lane in board.children)
    return (
        frontmatter_to_md(board.data.frontmatter)
        + lanes
        + archive_to_md(board.data.archive, labels)
        + settings_to_codeblock(board.data.settings)
    )

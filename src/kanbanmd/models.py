"""Data models for kanban boards."""

import datetime
from dataclasses import dataclass, field
from typing import Any


@dataclass
class FileAccessor:
    """Opaque reference to a linked file, as written in the card text."""

    target: str
    is_embed: bool = False


@dataclass
class ItemMetadata:
    """Metadata extracted from (or hydrated onto) a card."""

    tags: list[str] = field(default_factory=list)
    date_str: str | None = None
    time_str: str | None = None
    date: datetime.date | None = None
    time: datetime.time | None = None
    file_accessor: FileAccessor | None = None
    file_metadata: dict[str, Any] | None = None


@dataclass
class ItemData:
    """Content of a single card."""

    title_raw: str = ""
    title: str = ""
    title_search: str = ""
    block_id: str | None = None
    is_complete: bool = False
    metadata: ItemMetadata = field(default_factory=ItemMetadata)


@dataclass
class Item:
    """A card. Identity is excluded from equality."""

    id: str = field(compare=False)
    data: ItemData = field(default_factory=ItemData)


@dataclass
class LaneData:
    title: str = ""
    should_mark_items_complete: bool = False


@dataclass
class Lane:
    """An ordered column of cards. Identity is excluded from equality."""

    id: str = field(compare=False)
    children: list[Item] = field(default_factory=list)
    data: LaneData = field(default_factory=LaneData)


@dataclass
class BoardError:
    """A recoverable anomaly found while assembling a board."""

    kind: str
    description: str


@dataclass
class BoardData:
    settings: dict[str, Any] = field(default_factory=dict)
    frontmatter: dict[str, Any] = field(default_factory=dict)
    archive: list[Item] = field(default_factory=list)
    is_searching: bool = False
    errors: list[BoardError] = field(default_factory=list)


@dataclass
class Board:
    """The full board state, identified by its source document."""

    id: str = ""
    children: list[Lane] = field(default_factory=list)
    data: BoardData = field(default_factory=BoardData)

    def items(self):
        """Yield every card in lane order, then the archive."""
        for lane in self.children:
            yield from lane.children
        yield from self.data.archive

"""Optional enrichment of parsed cards: resolved dates, linked-file metadata, search text.

Hydration never changes what the parser extracted. A board that is never
hydrated is still complete; only date, time, file_metadata and
title_search stay unset.
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import replace
from datetime import datetime
from typing import Any, Mapping, Protocol, runtime_checkable

from kanbanmd.config import Settings
from kanbanmd.models import Board, FileAccessor, Item

logger = logging.getLogger(__name__)

_MOMENT_TOKENS = {
    "YYYY": "%Y",
    "YY": "%y",
    "MMMM": "%B",
    "MMM": "%b",
    "MM": "%m",
    "M": "%m",
    "DD": "%d",
    "D": "%d",
    "dddd": "%A",
    "ddd": "%a",
    "HH": "%H",
    "H": "%H",
    "hh": "%I",
    "h": "%I",
    "mm": "%M",
    "m": "%M",
    "ss": "%S",
    "s": "%S",
    "A": "%p",
    "a": "%p",
}
_MOMENT_RE = re.compile(r"\[[^\]]*\]|" + "|".join(sorted(_MOMENT_TOKENS, key=len, reverse=True)) + "|.", re.DOTALL)

# Settings whose change alters parsing or hydration output.
_REFRESH_KEYS = (
    "metadata-keys",
    "date-trigger",
    "time-trigger",
    "link-date-to-daily-note",
    "date-format",
    "time-format",
    "hide-date-in-title",
    "hide-tags-in-title",
)


@runtime_checkable
class MetadataProvider(Protocol):
    """Host capability resolving metadata for a linked file."""

    async def file_metadata(self, accessor: FileAccessor, keys: list[str]) -> Mapping[str, Any] | None: ...


def moment_to_strptime(fmt: str) -> str:
    """Translate a moment.js style format ("YYYY-MM-DD") into a strptime one."""
    parts = []
    for token in _MOMENT_RE.findall(fmt):
        if token in _MOMENT_TOKENS:
            parts.append(_MOMENT_TOKENS[token])
        elif token.startswith("[") and token.endswith("]") and len(token) > 1:
            parts.append(token[1:-1].replace("%", "%%"))
        else:
            parts.append(token.replace("%", "%%"))
    return "".join(parts)


def parse_moment(value: str, fmt: str) -> datetime | None:
    """Parse value with a moment.js style format, or None if it doesn't match."""
    try:
        return datetime.strptime(value.strip(), moment_to_strptime(fmt))
    except ValueError:
        return None


def get_search_value(title: str, tags: list[str] | None = None, file_metadata: Mapping | None = None) -> str:
    """Lowercased text a card is searched by: title, tags, linked metadata."""
    search = title.strip()
    if tags:
        search += " " + " ".join(tags)
    if file_metadata:
        values = []
        for entry in file_metadata.values():
            value = entry.get("value") if isinstance(entry, Mapping) else entry
            if isinstance(value, (list, tuple)):
                values.append(" ".join(str(v) for v in value))
            else:
                values.append(str(value))
        search += " " + " ".join(file_metadata) + " " + " ".join(values)
    return search.lower()


def should_refresh_board(old: Mapping[str, Any] | None, new: Mapping[str, Any] | None) -> bool:
    """Whether a settings change requires re-parsing the board's cards."""
    if not old and new:
        return True
    old_settings, new_settings = Settings(old), Settings(new)
    return any(old_settings.get(k) != new_settings.get(k) for k in _REFRESH_KEYS)


def _metadata_entries(settings: Settings, values: Mapping[str, Any]) -> dict[str, Any] | None:
    """Pair resolved values with their metadata-keys config, in config order."""
    configs = {}
    for entry in settings.get("metadata-keys") or []:
        if isinstance(entry, Mapping) and entry.get("metadataKey"):
            configs.setdefault(entry["metadataKey"], dict(entry))
    entries = {}
    for key in settings.metadata_keys():
        if values.get(key) in (None, "", []):
            continue
        entries[key] = {**configs.get(key, {"metadataKey": key}), "value": values[key]}
    return entries or None


async def hydrate_item(item: Item, settings: Settings | None = None, provider: MetadataProvider | None = None) -> Item:
    """Return a copy of item with enrichment-only fields filled in."""
    settings = settings or Settings()
    metadata = item.data.metadata

    parsed_date = parse_moment(metadata.date_str, settings.get("date-format")) if metadata.date_str else None
    parsed_time = parse_moment(metadata.time_str, settings.get("time-format")) if metadata.time_str else None

    file_metadata = None
    keys = settings.metadata_keys()
    if provider is not None and metadata.file_accessor is not None and keys:
        values = await provider.file_metadata(metadata.file_accessor, keys)
        if values:
            file_metadata = _metadata_entries(settings, values)

    metadata = replace(
        metadata,
        date=parsed_date.date() if parsed_date else None,
        time=parsed_time.time() if parsed_time else None,
        file_metadata=file_metadata,
    )
    data = replace(
        item.data,
        metadata=metadata,
        title_search=get_search_value(item.data.title, metadata.tags, file_metadata),
    )
    return replace(item, data=data)


async def hydrate_items(
    items: list[Item],
    settings: Settings | None = None,
    provider: MetadataProvider | None = None,
) -> list[Item]:
    """Hydrate all items concurrently. Output order matches input order.

    An item whose hydration fails is returned unchanged.
    """
    results = await asyncio.gather(
        *(hydrate_item(item, settings, provider) for item in items),
        return_exceptions=True,
    )
    hydrated = []
    for item, result in zip(items, results):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            logger.warning("hydrating item %s failed: %s", item.id, result)
            hydrated.append(item)
        else:
            hydrated.append(result)
    return hydrated


async def hydrate_board(board: Board, settings: Settings | None = None, provider: MetadataProvider | None = None) -> Board:
    """Hydrate every lane item and archive item in one batch."""
    if settings is None:
        settings = Settings(board.data.settings)
    counts = [len(lane.children) for lane in board.children]
    hydrated = iter(await hydrate_items(list(board.items()), settings, provider))
    lanes = [replace(lane, children=[next(hydrated) for _ in range(n)]) for lane, n in zip(board.children, counts)]
    archive = list(hydrated)
    return replace(board, children=lanes, data=replace(board.data, archive=archive))

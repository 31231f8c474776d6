"""Extract card data and title spans from a parsed list item.

Extraction is a fold over the inline nodes of the item's first paragraph:
each sigil node yields a partial update, and updates are merged in
document order. Tags accumulate; dates, times and file links are
last-write-wins.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import reduce
from urllib.parse import unquote

from markdown_it.tree import SyntaxTreeNode

from kanbanmd.models import FileAccessor, ItemData, ItemMetadata
from kanbanmd.spans import TextSpan, decode_line_breaks, encode_line_breaks, reconstruct_title

_URL_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")


@dataclass(frozen=True)
class _Update:
    tags: tuple[str, ...] = ()
    spans: tuple[TextSpan, ...] = ()
    block_id: str | None = None
    date_str: str | None = None
    time_str: str | None = None
    file_accessor: FileAccessor | None = None


def _later(old, new):
    return old if new is None else new


def _merge(acc: _Update, update: _Update) -> _Update:
    return _Update(
        tags=acc.tags + update.tags,
        spans=acc.spans + update.spans,
        block_id=_later(acc.block_id, update.block_id),
        date_str=_later(acc.date_str, update.date_str),
        time_str=_later(acc.time_str, update.time_str),
        file_accessor=_later(acc.file_accessor, update.file_accessor),
    )


@dataclass(frozen=True)
class Extraction:
    """Extracted card data plus the spans removed from raw to build the title."""

    raw: str
    data: ItemData
    spans: tuple[TextSpan, ...] = ()


def _span(node: SyntaxTreeNode) -> TextSpan:
    return TextSpan(node.meta["start"], node.meta["end"])


def _link_accessor(href: str | None, is_embed: bool) -> FileAccessor | None:
    """Relative hrefs point at files; URLs and in-page anchors do not."""
    if not href or href.startswith("#") or _URL_SCHEME_RE.match(href):
        return None
    return FileAccessor(unquote(href), is_embed=is_embed)


def token_update(node: SyntaxTreeNode) -> _Update | None:
    """Map one inline node to the partial update it contributes, if any."""
    kind = node.type
    if kind == "blockid":
        return _Update(block_id=node.meta["value"])
    if kind == "hashtag":
        return _Update(tags=("#" + node.meta["value"],), spans=(_span(node),))
    if kind in ("date", "dateLink"):
        return _Update(date_str=node.meta["date"], spans=(_span(node),))
    if kind == "time":
        return _Update(time_str=node.meta["time"], spans=(_span(node),))
    if kind in ("wikilink", "embedWikilink"):
        return _Update(file_accessor=FileAccessor(node.meta["target"], is_embed=kind == "embedWikilink"))
    if kind == "link":
        accessor = _link_accessor(node.attrs.get("href"), is_embed=False)
        return _Update(file_accessor=accessor) if accessor else None
    if kind == "image":
        accessor = _link_accessor(node.attrs.get("src"), is_embed=True)
        return _Update(file_accessor=accessor) if accessor else None
    return None


def _inline_nodes(node: SyntaxTreeNode):
    """Yield inline descendants in document order.

    Image alt text is parsed from its own buffer, so its offsets do not
    belong to the card text and it is not descended into.
    """
    for child in node.children:
        yield child
        if child.type != "image":
            yield from _inline_nodes(child)


def _card_inline(block: SyntaxTreeNode) -> SyntaxTreeNode | None:
    """First inline node of the item's first block: a paragraph, heading or quote."""
    for node in block.walk():
        if node.type == "inline":
            return node
    return None


def extract_item(list_item: SyntaxTreeNode) -> Extraction:
    """Extract ItemData from a list item, using its first block as the card text.

    Nested blocks after the first (sub-lists, code, quotes) are not visited
    and are not part of the card text. A first block without inline content,
    such as a code block, contributes its literal text.
    """
    is_complete = bool(list_item.meta.get("checked"))
    if not list_item.children:
        return Extraction(raw="", data=ItemData(is_complete=is_complete))

    block = list_item.children[0]
    inline = _card_inline(block)
    if inline is None:
        text = block.content.strip("\n")
        return Extraction(
            raw=encode_line_breaks(text),
            data=ItemData(title_raw=text, title=text, is_complete=is_complete),
        )

    raw = inline.content
    updates = (u for u in map(token_update, _inline_nodes(inline)) if u is not None)
    found = reduce(_merge, updates, _Update())

    data = ItemData(
        title_raw=decode_line_breaks(raw),
        title=reconstruct_title(raw, found.spans),
        block_id=found.block_id,
        is_complete=is_complete,
        metadata=ItemMetadata(
            tags=list(found.tags),
            date_str=found.date_str,
            time_str=found.time_str,
            file_accessor=found.file_accessor,
        ),
    )
    return Extraction(raw=raw, data=data, spans=found.spans)


def list_item_to_item_data(list_item: SyntaxTreeNode) -> ItemData:
    return extract_item(list_item).data

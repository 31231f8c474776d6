"""Markdown-it plugins recognising card sigils: tags, dates, times, links, anchors.

Every sigil token records meta["start"] and meta["end"], offsets into the
inline content it was parsed from, and content holding the matched source.
"""

from __future__ import annotations

import re

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.rules_inline import StateInline
from markdown_it.token import Token

from kanbanmd.config import ParserConfig
from kanbanmd.spans import BR

_TAG_RE = re.compile(r"#([\w/-]+)")
_EMPHASIS_OPENERS = "*_~"
_CHECKBOX_RE = re.compile(r"\[([ xX])\](?:[ \t]+|(?=\n)|$)")
_BLOCK_ID_RE = re.compile(r"(?:^|\s+)\^([A-Za-z0-9-]+)$")


def _push(state: StateInline, kind: str, start: int, end: int, **meta) -> None:
    token = state.push(kind, "", 0)
    token.content = state.src[start:end]
    token.meta = {"start": start, "end": end, **meta}


def _at_word_start(src: str, pos: int) -> bool:
    """True at text start, after whitespace or <br>, or after an emphasis opener there."""
    while pos > 0 and src[pos - 1] in _EMPHASIS_OPENERS:
        pos -= 1
    return pos == 0 or src[pos - 1].isspace() or src.endswith(BR, 0, pos)


def _braced(src: str, pos: int, opener: str, closer: str) -> tuple[str, int] | None:
    """Return (inner text, end offset) for opener...closer at pos, or None."""
    if not src.startswith(opener, pos):
        return None
    inner_start = pos + len(opener)
    close = src.find(closer, inner_start)
    if close == -1:
        return None
    inner = src[inner_start:close]
    if not inner.strip() or any(c in inner for c in "{}[]\n"):
        return None
    return inner, close + len(closer)


def hashtag_rule(state: StateInline, silent: bool) -> bool:
    src, pos = state.src, state.pos
    if src[pos] != "#" or not _at_word_start(src, pos):
        return False
    match = _TAG_RE.match(src, pos, state.posMax)
    if not match or match.group(1).isdigit():
        return False
    if not silent:
        _push(state, "hashtag", pos, match.end(), value=match.group(1))
    state.pos = match.end()
    return True


def _wikilink(state: StateInline, silent: bool, embed: bool) -> bool:
    src, pos = state.src, state.pos
    opener = "![[" if embed else "[["
    found = _braced(src[: state.posMax], pos, opener, "]]")
    if found is None:
        return False
    inner, end = found
    target, _, alias = inner.partition("|")
    if not target.strip():
        return False
    if not silent:
        kind = "embedWikilink" if embed else "wikilink"
        _push(state, kind, pos, end, target=target.strip(), alias=alias.strip() or None)
    state.pos = end
    return True


def wikilink_rule(state: StateInline, silent: bool) -> bool:
    return _wikilink(state, silent, embed=False)


def embed_wikilink_rule(state: StateInline, silent: bool) -> bool:
    return _wikilink(state, silent, embed=True)


def date_plugin(md: MarkdownIt, config: ParserConfig) -> None:
    """Register time, date and date-link rules for the configured triggers."""
    date_trigger = config.date_trigger
    time_trigger = config.time_trigger

    def time_rule(state: StateInline, silent: bool) -> bool:
        found = _braced(state.src[: state.posMax], state.pos, time_trigger + "{", "}")
        if found is None:
            return False
        value, end = found
        if not silent:
            _push(state, "time", state.pos, end, time=value)
        state.pos = end
        return True

    def date_rule(state: StateInline, silent: bool) -> bool:
        src = state.src[: state.posMax]
        kind = "date"
        found = _braced(src, state.pos, date_trigger + "{", "}")
        if found is None:
            kind = "dateLink"
            found = _braced(src, state.pos, date_trigger + "[[", "]]")
        if found is None:
            return False
        value, end = found
        if not silent:
            _push(state, kind, state.pos, end, date=value)
        state.pos = end
        return True

    md.inline.ruler.before("link", "time", time_rule)
    md.inline.ruler.before("link", "date", date_rule)


def link_plugin(md: MarkdownIt) -> None:
    """Register [[wikilink]] and ![[embed]] rules ahead of regular links."""
    md.inline.ruler.before("link", "wikilink", wikilink_rule)
    md.inline.ruler.before("image", "embed_wikilink", embed_wikilink_rule)


def hashtag_plugin(md: MarkdownIt) -> None:
    """Register the #tag rule ahead of regular links."""
    md.inline.ruler.before("link", "hashtag", hashtag_rule)


def _card_paragraphs(tokens: list[Token]):
    """Yield (list_item_open, inline) pairs for list items opening with a paragraph or heading."""
    for i, token in enumerate(tokens[:-2]):
        if token.type != "list_item_open":
            continue
        if tokens[i + 1].type in ("paragraph_open", "heading_open") and tokens[i + 2].type == "inline":
            yield token, tokens[i + 2]


def task_item_plugin(md: MarkdownIt) -> None:
    """Core rules for checklist items.

    Before inline parsing, a leading [ ] / [x] checkbox and a trailing ^anchor
    are cut from the item's first paragraph or heading, so the remaining
    inline content is exactly the card text. After inline parsing the anchor
    is appended back as a blockid token.
    """

    def split_task(state: StateCore) -> None:
        for item, inline in _card_paragraphs(state.tokens):
            content = inline.content
            match = _CHECKBOX_RE.match(content)
            item.meta["checked"] = bool(match) and match.group(1) != " "
            if match:
                content = content[match.end() :]
            anchor = _BLOCK_ID_RE.search(content)
            if anchor:
                inline.meta["block_id"] = anchor.group(1)
                content = content[: anchor.start()].rstrip()
            inline.content = content

    def append_block_id(state: StateCore) -> None:
        for _, inline in _card_paragraphs(state.tokens):
            block_id = inline.meta.get("block_id")
            if block_id is None:
                continue
            token = Token("blockid", "", 0)
            token.content = f"^{block_id}"
            end = len(inline.content)
            token.meta = {"start": end, "end": end, "value": block_id}
            inline.children = (inline.children or []) + [token]

    md.core.ruler.before("inline", "split_task", split_task)
    md.core.ruler.after("inline", "append_block_id", append_block_id)

"""Parse board markdown into a syntax tree, with front-matter split off."""

from __future__ import annotations

import re
from functools import lru_cache

import yaml
from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from kanbanmd.config import ParserConfig
from kanbanmd.sigils import date_plugin, hashtag_plugin, link_plugin, task_item_plugin

_FRONT_MATTER_RE = re.compile(r"^---[ \t]*\n(.*?)\n---[ \t]*(?:\n|$)", re.DOTALL)

LIST_TYPES = ("bullet_list", "ordered_list")


class FrontMatterError(ValueError):
    """Front-matter block present but not a YAML mapping."""

    def __init__(self, message: str, remaining: str) -> None:
        super().__init__(message)
        self.remaining = remaining


@lru_cache(maxsize=16)
def create_parser(config: ParserConfig) -> MarkdownIt:
    """Build a markdown-it parser with the card sigil plugins for config."""
    md = MarkdownIt("commonmark").enable(["table", "strikethrough"])
    md.use(task_item_plugin)
    md.use(date_plugin, config)
    md.use(link_plugin)
    md.use(hashtag_plugin)
    return md


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_front_matter(text: str) -> tuple[str, dict]:
    """Extract YAML front-matter from text. Returns (remaining_text, meta).

    Text without front-matter yields an empty dict. Raises FrontMatterError
    if the block exists but is not valid YAML or not a mapping; the block is
    still cut from the remaining text.
    """
    match = _FRONT_MATTER_RE.match(text)
    if not match:
        return text, {}

    remaining = text[match.end() :]
    try:
        meta = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        raise FrontMatterError(str(e), remaining) from e
    if meta is None:
        return remaining, {}
    if not isinstance(meta, dict):
        raise FrontMatterError(f"expected a mapping, got {type(meta).__name__}", remaining)
    return remaining, meta


def parse_markdown(text: str, config: ParserConfig | None = None) -> SyntaxTreeNode:
    """Parse markdown (without front-matter) into a syntax tree root."""
    md = create_parser(config or ParserConfig())
    return SyntaxTreeNode(md.parse(normalize_newlines(text)))


def parse_fragment(text: str, config: ParserConfig | None = None) -> SyntaxTreeNode:
    """Parse a small markdown fragment, such as a single list item line."""
    return parse_markdown(text, config)


def first_list_item(root: SyntaxTreeNode) -> SyntaxTreeNode | None:
    """Return the first item of the first top-level list, if any."""
    for child in root.children:
        if child.type in LIST_TYPES and child.children:
            return child.children[0]
    return None


def inline_text(node: SyntaxTreeNode) -> str:
    """Plain text of a node: text content with markup and images dropped."""
    if node.type in ("softbreak", "hardbreak"):
        return "\n"
    if node.type == "image":
        return ""
    if not node.children:
        return "" if node.type == "inline" else node.content
    return "".join(inline_text(child) for child in node.children)

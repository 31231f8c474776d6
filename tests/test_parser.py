"""Tests for front-matter splitting and the card sigil plugins."""

import pytest

from kanbanmd.config import ParserConfig
from kanbanmd.parser import (
    FrontMatterError,
    create_parser,
    first_list_item,
    inline_text,
    parse_fragment,
    parse_markdown,
    split_front_matter,
)


def _inline_children(source, config=None):
    """Parse source and return children of the first inline token."""
    for token in create_parser(config or ParserConfig()).parse(source):
        if token.type == "inline" and token.children:
            return token.children
    return []


def _sigils(source, config=None):
    return [(t.type, t.content) for t in _inline_children(source, config) if "start" in t.meta]


# --- front-matter ---


def test_split_front_matter():
    text, meta = split_front_matter("---\nkanban-plugin: basic\n---\n## Todo\n")
    assert meta == {"kanban-plugin": "basic"}
    assert text == "## Todo\n"


def test_split_front_matter_blank_padded():
    text, meta = split_front_matter("---\n\nkanban-plugin: basic\n\n---\n\n## Todo")
    assert meta == {"kanban-plugin": "basic"}
    assert text == "\n## Todo"


def test_split_front_matter_missing():
    text, meta = split_front_matter("## Todo\n")
    assert meta == {}
    assert text == "## Todo\n"


def test_split_front_matter_empty_block():
    text, meta = split_front_matter("---\n\n---\n## Todo")
    assert meta == {}
    assert text == "## Todo"


def test_split_front_matter_invalid_yaml():
    with pytest.raises(FrontMatterError) as exc_info:
        split_front_matter("---\ninvalid: yaml: content: [\n---\n## Todo\n")
    assert exc_info.value.remaining == "## Todo\n"


def test_split_front_matter_not_a_mapping():
    with pytest.raises(FrontMatterError):
        split_front_matter("---\n- a\n- b\n---\n")


def test_split_front_matter_unclosed():
    """Front-matter that starts with --- but has no closing --- is ignored."""
    text, meta = split_front_matter("---\nkey: value\n## Todo\n")
    assert meta == {}
    assert text.startswith("---\n")


# --- sigils ---


def test_hashtags():
    assert _sigils("- [ ] A #one B #two") == [("hashtag", "#one"), ("hashtag", "#two")]


def test_hashtag_offsets_are_card_relative():
    tags = [t for t in _inline_children("- [ ] A #one") if t.type == "hashtag"]
    assert tags[0].meta == {"start": 2, "end": 6, "value": "one"}


def test_hashtag_needs_word_start():
    assert _sigils("- [ ] issue#12 and a#b") == []


def test_hashtag_numeric_is_text():
    assert _sigils("- [ ] item #123") == []


def test_hashtag_stops_at_punctuation():
    assert _sigils("- [ ] (#urgent), ok") == []
    assert _sigils("- [ ] #urgent, ok") == [("hashtag", "#urgent")]


def test_hashtag_after_line_break_sigil():
    assert _sigils("- [ ] one<br>#two") == [("hashtag", "#two")]


def test_hashtag_in_code_is_text():
    assert _sigils("- [ ] `#not` #yes") == [("hashtag", "#yes")]


def test_date_and_time():
    assert _sigils("- [ ] Call @{2024-01-02} @@{09:15}") == [("date", "@{2024-01-02}"), ("time", "@@{09:15}")]
    tokens = [t for t in _inline_children("- [ ] Call @{2024-01-02} @@{09:15}") if "start" in t.meta]
    assert tokens[0].meta["date"] == "2024-01-02"
    assert tokens[1].meta["time"] == "09:15"


def test_date_link():
    assert _sigils("- [ ] Due @[[2024-01-02]]") == [("dateLink", "@[[2024-01-02]]")]


def test_date_invalid_is_text():
    assert _sigils("- [ ] Mail me@{ } or @{unclosed") == []


def test_custom_triggers():
    config = ParserConfig(date_trigger="!", time_trigger="!!")
    assert _sigils("- [ ] x !{2024-01-02} !!{10:00}", config) == [("date", "!{2024-01-02}"), ("time", "!!{10:00}")]
    assert _sigils("- [ ] x @{2024-01-02}", config) == []


def test_wikilinks():
    children = _inline_children("- [ ] See [[Plans/Q3#Goals|goals]] and ![[diagram.png]]")
    links = [t for t in children if t.type in ("wikilink", "embedWikilink")]
    assert [(t.type, t.meta["target"], t.meta["alias"]) for t in links] == [
        ("wikilink", "Plans/Q3#Goals", "goals"),
        ("embedWikilink", "diagram.png", None),
    ]


def test_regular_links_untouched():
    types = [t.type for t in _inline_children("- [ ] [docs](docs/readme.md)")]
    assert types == ["link_open", "text", "link_close"]


def test_checkbox_split():
    tokens = create_parser(ParserConfig()).parse("- [x] Done\n- [ ] Todo\n- plain\n")
    items = [t for t in tokens if t.type == "list_item_open"]
    inlines = [t for t in tokens if t.type == "inline"]
    assert [t.meta["checked"] for t in items] == [True, False, False]
    assert [t.content for t in inlines] == ["Done", "Todo", "plain"]


def test_checkbox_uppercase():
    item = first_list_item(parse_fragment("- [X] Done"))
    assert item.meta["checked"] is True


def test_block_id_is_cut_and_appended():
    children = _inline_children("- [x] Done ^abc123")
    assert children[-1].type == "blockid"
    assert children[-1].meta["value"] == "abc123"
    assert [t.content for t in children if t.type == "text"] == ["Done"]


def test_block_id_requires_preceding_space():
    children = _inline_children("- [ ] x^abc")
    assert all(t.type != "blockid" for t in children)


def test_block_id_only_on_list_items():
    tokens = create_parser(ParserConfig()).parse("Paragraph ^abc\n")
    assert tokens[1].content == "Paragraph ^abc"


def test_parse_markdown_tree():
    root = parse_markdown("## Todo\n\n- [ ] a\n")
    assert [child.type for child in root.children] == ["heading", "bullet_list"]


def test_first_list_item_none():
    assert first_list_item(parse_fragment("just text")) is None


def test_inline_text_drops_markup():
    root = parse_markdown("**Complete**\n\n## An *Archive*\n")
    assert inline_text(root.children[0]) == "Complete"
    assert inline_text(root.children[1]) == "An Archive"


def test_create_parser_cached_per_config():
    assert create_parser(ParserConfig()) is create_parser(ParserConfig())
    assert create_parser(ParserConfig(date_trigger="!")) is not create_parser(ParserConfig())

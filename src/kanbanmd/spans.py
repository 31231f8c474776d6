"""Character spans over a card's raw text, and title reconstruction."""

from __future__ import annotations

import re
from dataclasses import dataclass

BR = "<br>"

_NEWLINE_RE = re.compile(r"\r\n|\n")


@dataclass(frozen=True, order=True)
class TextSpan:
    """Half-open [start, end) range of offsets into one specific raw text."""

    start: int
    end: int

    def __len__(self) -> int:
        return max(0, self.end - self.start)

    def shift(self, offset: int) -> TextSpan:
        """Return the span moved by offset characters."""
        return TextSpan(self.start + offset, self.end + offset)


def encode_line_breaks(text: str) -> str:
    """Replace newlines with the <br> line-break sigil."""
    return _NEWLINE_RE.sub(BR, text)


def decode_line_breaks(text: str) -> str:
    """Replace <br> line-break sigils with newlines."""
    return text.replace(BR, "\n")


def merge_spans(spans) -> list[TextSpan]:
    """Sort spans by start and coalesce overlapping or adjacent ones."""
    merged: list[TextSpan] = []
    for span in sorted(s for s in spans if s.end > s.start):
        if merged and span.start <= merged[-1].end:
            last = merged[-1]
            merged[-1] = TextSpan(last.start, max(last.end, span.end))
        else:
            merged.append(span)
    return merged


def reconstruct_title(raw: str, spans) -> str:
    """Copy raw, skipping every character covered by a span, then decode <br>.

    All spans must be offsets into raw itself. Whitespace next to removed
    spans is kept as-is.
    """
    parts: list[str] = []
    pos = 0
    for span in merge_spans(spans):
        start = min(max(span.start, pos), len(raw))
        parts.append(raw[pos:start])
        pos = max(pos, min(span.end, len(raw)))
    parts.append(raw[pos:])
    return decode_line_breaks("".join(parts))

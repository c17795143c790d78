"""
DiagramScholar Explanation Formatter Module

Converts the small markdown subset the model is asked to write into typed
block nodes, and renders those nodes as HTML (Streamlit view) or plain text
(terminal).

Recognized line types, checked in this order:
    - Bullet:    stripped line starts with "- " (consecutive bullets form one list)
    - Heading 2: line starts with "## "
    - Heading 3: line starts with "### "
    - Numbered:  stripped line matches "<digits>. <text>"
    - Spacer:    line is blank
    - Paragraph: anything else

Inline bold spans use the "**text**" delimiter pair. Headings are plain text.

Usage:
    from diagramscholar.formatter import format_text, render_html

    blocks = format_text("### Main Purpose\\nThe **pump** moves water.")
    html = render_html(blocks)
"""

import re
import html
from dataclasses import dataclass, field
from typing import List, Union

_BOLD_SPLIT_RE = re.compile(r"(\*\*.*?\*\*)")
_NUMBERED_RE = re.compile(r"^([0-9]+)\.\s(.*)$")

BULLET_MARKER = "- "
H2_MARKER = "## "
H3_MARKER = "### "


# --- Node Types ---

@dataclass(frozen=True)
class Span:
    text: str
    bold: bool = False


@dataclass(frozen=True)
class Heading:
    level: int
    text: str


@dataclass(frozen=True)
class BulletList:
    items: List[List[Span]] = field(default_factory=list)


@dataclass(frozen=True)
class NumberedItem:
    number: str
    spans: List[Span]


@dataclass(frozen=True)
class Paragraph:
    spans: List[Span]


@dataclass(frozen=True)
class Spacer:
    pass


Block = Union[Heading, BulletList, NumberedItem, Paragraph, Spacer]


def parse_inline(text: str) -> List[Span]:
    """Splits a line into plain and bold spans."""
    spans = []
    for part in _BOLD_SPLIT_RE.split(text):
        if not part:
            continue
        if len(part) >= 4 and part.startswith("**") and part.endswith("**"):
            spans.append(Span(part[2:-2], bold=True))
        else:
            spans.append(Span(part))
    return spans


def is_bullet(line: str) -> bool:
    return line.strip().startswith(BULLET_MARKER)


class MarkdownFormatter:
    """
    Line-at-a-time formatter.

    The only state kept between feed() calls is the run of pending bullet
    items; it is emitted as a single BulletList as soon as a non-bullet line
    arrives or close() is called. reset() drops pending items so the
    formatter can be reused.
    """

    def __init__(self):
        self._pending_items: List[List[Span]] = []

    def reset(self) -> None:
        self._pending_items = []

    def _flush(self) -> List[Block]:
        if not self._pending_items:
            return []
        block = BulletList(items=self._pending_items)
        self._pending_items = []
        return [block]

    def feed(self, line: str) -> List[Block]:
        """Consumes one line and returns the blocks completed by it."""
        line = line.rstrip("\r")
        if is_bullet(line):
            item = line.lstrip()[len(BULLET_MARKER):]
            self._pending_items.append(parse_inline(item))
            return []

        blocks = self._flush()
        stripped = line.strip()
        numbered = _NUMBERED_RE.match(stripped)
        if line.startswith(H2_MARKER):
            blocks.append(Heading(2, line[len(H2_MARKER):]))
        elif line.startswith(H3_MARKER):
            blocks.append(Heading(3, line[len(H3_MARKER):]))
        elif numbered:
            blocks.append(NumberedItem(numbered.group(1), parse_inline(numbered.group(2))))
        elif stripped == "":
            blocks.append(Spacer())
        else:
            blocks.append(Paragraph(parse_inline(line)))
        return blocks

    def close(self) -> List[Block]:
        """Emits any pending bullet list; the formatter is ready for new input afterwards."""
        return self._flush()


def format_text(text: str) -> List[Block]:
    formatter = MarkdownFormatter()
    blocks: List[Block] = []
    for line in text.split("\n"):
        blocks.extend(formatter.feed(line))
    blocks.extend(formatter.close())
    return blocks


# --- Renderers ---

def _spans_html(spans: List[Span]) -> str:
    out = []
    for span in spans:
        text = html.escape(span.text)
        out.append(f"<strong>{text}</strong>" if span.bold else text)
    return "".join(out)


def _spans_text(spans: List[Span]) -> str:
    return "".join(span.text for span in spans)


def render_html(blocks: List[Block]) -> str:
    parts = []
    for block in blocks:
        if isinstance(block, Heading):
            parts.append(f'<h{block.level} class="ds-h{block.level}">{html.escape(block.text)}</h{block.level}>')
        elif isinstance(block, BulletList):
            items = "".join(f"<li>{_spans_html(item)}</li>" for item in block.items)
            parts.append(f'<ul class="ds-list">{items}</ul>')
        elif isinstance(block, NumberedItem):
            parts.append(
                f'<div class="ds-numbered"><span class="ds-number">{html.escape(block.number)}.</span> '
                f"<span>{_spans_html(block.spans)}</span></div>"
            )
        elif isinstance(block, Spacer):
            parts.append('<div class="ds-spacer"></div>')
        else:
            parts.append(f'<p class="ds-paragraph">{_spans_html(block.spans)}</p>')
    return "\n".join(parts)


def render_text(blocks: List[Block]) -> str:
    lines = []
    for block in blocks:
        if isinstance(block, Heading):
            lines.append(block.text.upper() if block.level == 2 else block.text)
            lines.append(("=" if block.level == 2 else "-") * len(block.text))
        elif isinstance(block, BulletList):
            lines.extend(f"  * {_spans_text(item)}" for item in block.items)
        elif isinstance(block, NumberedItem):
            lines.append(f"  {block.number}. {_spans_text(block.spans)}")
        elif isinstance(block, Spacer):
            lines.append("")
        else:
            lines.append(_spans_text(block.spans))
    return "\n".join(lines)

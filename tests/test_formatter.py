"""Tests for the markdown-subset explanation formatter."""

from diagramscholar.formatter import (
    BulletList,
    Heading,
    MarkdownFormatter,
    NumberedItem,
    Paragraph,
    Spacer,
    Span,
    format_text,
    parse_inline,
    render_html,
    render_text,
)


# ---------------------------------------------------------------------------
# Inline spans
# ---------------------------------------------------------------------------

class TestParseInline:
    def test_plain_text(self):
        assert parse_inline("just text") == [Span("just text")]

    def test_bold_in_middle(self):
        assert parse_inline("The **pump** moves water") == [
            Span("The "),
            Span("pump", bold=True),
            Span(" moves water"),
        ]

    def test_multiple_bold_spans_are_non_greedy(self):
        assert parse_inline("**a** and **b**") == [
            Span("a", bold=True),
            Span(" and "),
            Span("b", bold=True),
        ]

    def test_unmatched_delimiter_stays_literal(self):
        assert parse_inline("2 ** 3 is eight") == [Span("2 ** 3 is eight")]

    def test_empty_string(self):
        assert parse_inline("") == []

    def test_empty_bold_pair(self):
        assert parse_inline("****") == [Span("", bold=True)]


# ---------------------------------------------------------------------------
# Block detection
# ---------------------------------------------------------------------------

class TestFormatText:
    def test_headings(self):
        assert format_text("## Overview\n### Main Purpose") == [
            Heading(2, "Overview"),
            Heading(3, "Main Purpose"),
        ]

    def test_heading_text_is_not_parsed_for_bold(self):
        assert format_text("### **Key** Terms") == [Heading(3, "**Key** Terms")]

    def test_indented_heading_is_a_paragraph(self):
        assert format_text("  ## Not a heading") == [Paragraph([Span("  ## Not a heading")])]

    def test_consecutive_bullets_form_one_list(self):
        blocks = format_text("- **Valve**: controls flow\n- Pipe\n  - Pump")
        assert blocks == [
            BulletList(items=[
                [Span("Valve", bold=True), Span(": controls flow")],
                [Span("Pipe")],
                [Span("Pump")],
            ])
        ]

    def test_bullet_run_is_flushed_by_non_bullet_line(self):
        blocks = format_text("- one\n- two\nAfter the list\n- three")
        assert blocks == [
            BulletList(items=[[Span("one")], [Span("two")]]),
            Paragraph([Span("After the list")]),
            BulletList(items=[[Span("three")]]),
        ]

    def test_bullet_run_is_flushed_by_blank_line(self):
        blocks = format_text("- one\n\n- two")
        assert blocks == [
            BulletList(items=[[Span("one")]]),
            Spacer(),
            BulletList(items=[[Span("two")]]),
        ]

    def test_numbered_items(self):
        blocks = format_text("1. First **step**\n12. Twelfth")
        assert blocks == [
            NumberedItem("1", [Span("First "), Span("step", bold=True)]),
            NumberedItem("12", [Span("Twelfth")]),
        ]

    def test_indented_numbered_item(self):
        assert format_text("   3. Third") == [NumberedItem("3", [Span("Third")])]

    def test_non_ascii_digits_are_not_numbered(self):
        assert format_text("\u0663. Arabic-Indic three") == [Paragraph([Span("\u0663. Arabic-Indic three")])]

    def test_number_without_space_is_paragraph(self):
        assert format_text("3.14 is pi") == [Paragraph([Span("3.14 is pi")])]

    def test_blank_lines_become_spacers(self):
        assert format_text("a\n   \nb") == [
            Paragraph([Span("a")]),
            Spacer(),
            Paragraph([Span("b")]),
        ]

    def test_empty_input(self):
        assert format_text("") == [Spacer()]

    def test_windows_line_endings(self):
        assert format_text("## Title\r\n- item\r\n") == [
            Heading(2, "Title"),
            BulletList(items=[[Span("item")]]),
            Spacer(),
        ]

    def test_dash_without_space_is_paragraph(self):
        assert format_text("-not a bullet") == [Paragraph([Span("-not a bullet")])]

    def test_full_explanation(self):
        text = (
            "### Main Purpose\n"
            "This diagram shows a **heat pump**.\n"
            "\n"
            "### Key Terms & Concepts\n"
            "- **Compressor**: raises pressure.\n"
            "- **Evaporator**: absorbs heat.\n"
            "### How it Works\n"
            "1. Refrigerant evaporates.\n"
            "2. It is compressed."
        )
        kinds = [type(b).__name__ for b in format_text(text)]
        assert kinds == [
            "Heading", "Paragraph", "Spacer", "Heading", "BulletList",
            "Heading", "NumberedItem", "NumberedItem",
        ]


class TestMarkdownFormatter:
    def test_feed_holds_bullets_until_a_non_bullet_line(self):
        fmt = MarkdownFormatter()
        assert fmt.feed("- a") == []
        assert fmt.feed("- b") == []
        blocks = fmt.feed("## Next")
        assert blocks == [BulletList(items=[[Span("a")], [Span("b")]]), Heading(2, "Next")]

    def test_close_flushes_trailing_list(self):
        fmt = MarkdownFormatter()
        fmt.feed("- last")
        assert fmt.close() == [BulletList(items=[[Span("last")]])]
        assert fmt.close() == []

    def test_reset_drops_pending_items(self):
        fmt = MarkdownFormatter()
        fmt.feed("- stale")
        fmt.reset()
        assert fmt.feed("fresh") == [Paragraph([Span("fresh")])]

    def test_formatter_is_reusable_after_close(self):
        fmt = MarkdownFormatter()
        fmt.feed("- first run")
        fmt.close()
        fmt.feed("- second run")
        assert fmt.close() == [BulletList(items=[[Span("second run")]])]


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------

class TestRenderHtml:
    def test_bold_and_headings(self):
        html = render_html(format_text("### Parts\nThe **pump**"))
        assert '<h3 class="ds-h3">Parts</h3>' in html
        assert "The <strong>pump</strong>" in html

    def test_list_markup(self):
        html = render_html(format_text("- a\n- b"))
        assert html == '<ul class="ds-list"><li>a</li><li>b</li></ul>'

    def test_text_is_escaped(self):
        html = render_html(format_text("<script>alert(1)</script> & **<b>**"))
        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "<strong>&lt;b&gt;</strong>" in html

    def test_numbered_and_spacer(self):
        html = render_html(format_text("1. One\n"))
        assert '<span class="ds-number">1.</span>' in html
        assert '<div class="ds-spacer"></div>' in html


class TestRenderText:
    def test_plain_text_rendering(self):
        text = render_text(format_text("## Overview\nThe **pump**\n- a\n2. Two"))
        assert text.splitlines() == [
            "OVERVIEW",
            "========",
            "The pump",
            "  * a",
            "  2. Two",
        ]

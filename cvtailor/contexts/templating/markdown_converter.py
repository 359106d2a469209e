"""
Markdown to HTML conversion for AI-generated section bodies.

A small, deterministic converter covering the constructs CV text actually
uses: headings, bold/italic emphasis, bullet lists and paragraphs. Rules run in
a fixed order because later rules consume the output of earlier ones.

Only the tags introduced here are guaranteed to be balanced. Markup already
present in the input is passed through untouched.
"""

import re
from typing import List

from cvtailor.contexts.templating.placeholder_patterns import MarkdownPatterns

_HR_RE = re.compile(MarkdownPatterns.HORIZONTAL_RULE, re.MULTILINE)
_EXCESS_BLANK_RE = re.compile(MarkdownPatterns.EXCESS_BLANK_LINES)

# Most specific heading first so '### x' never becomes '<h1>## x</h1>'
_HEADING_RULES = (
    (re.compile(MarkdownPatterns.H3, re.MULTILINE), "h3"),
    (re.compile(MarkdownPatterns.H2, re.MULTILINE), "h2"),
    (re.compile(MarkdownPatterns.H1, re.MULTILINE), "h1"),
)

_BOLD_RE = re.compile(MarkdownPatterns.BOLD)
_ITALIC_RE = re.compile(MarkdownPatterns.ITALIC)
_LIST_ITEM_RE = re.compile(MarkdownPatterns.LIST_ITEM)

# Lines that are already block-level markup and must not be wrapped in <p>
_BLOCK_LINE_RE = re.compile(r"^<(?:h[1-6]|ul|ol|li|p|div|table)\b", re.IGNORECASE)

_EMPTY_PARAGRAPH_RE = re.compile(MarkdownPatterns.EMPTY_PARAGRAPH)
_WRAPPED_BLOCK_RE = re.compile(MarkdownPatterns.WRAPPED_BLOCK)


def strip_rules_and_blank_runs(text: str) -> str:
    """Remove horizontal rules and collapse runs of blank lines to one."""
    text = _HR_RE.sub("", text)
    text = _EXCESS_BLANK_RE.sub("\n\n", text)
    return text.strip()


def convert_headings(text: str) -> str:
    """Convert '#', '##' and '###' lines to heading tags."""
    for pattern, tag in _HEADING_RULES:
        text = pattern.sub(lambda m, tag=tag: f"<{tag}>{m.group(1).strip()}</{tag}>", text)
    return text


def convert_emphasis(text: str) -> str:
    """Convert **bold** then *italic* spans. Spans never cross lines."""
    text = _BOLD_RE.sub(r"<strong>\1</strong>", text)
    text = _ITALIC_RE.sub(r"<em>\1</em>", text)
    return text


def assemble_blocks(text: str) -> List[str]:
    """
    Group lines into block-level fragments.

    - '* ' / '- ' lines become <li>; a run of them (blank lines allowed in
      between) is wrapped in a single <ul>
    - heading and other block markup lines are emitted as-is
    - remaining lines form paragraphs; blank lines separate paragraphs and
      single newlines inside a paragraph become <br>

    Args:
        text: Text after heading and emphasis conversion

    Returns:
        Ordered list of block fragments
    """
    blocks: List[str] = []
    paragraph: List[str] = []
    items: List[str] = []

    def flush_paragraph() -> None:
        if paragraph:
            blocks.append("<p>" + "<br>".join(paragraph) + "</p>")
            paragraph.clear()

    def flush_list() -> None:
        if items:
            blocks.append("<ul>" + "".join(items) + "</ul>")
            items.clear()

    for line in text.split("\n"):
        stripped = line.strip()

        if not stripped:
            flush_paragraph()
            continue

        item_match = _LIST_ITEM_RE.match(stripped)
        if item_match:
            flush_paragraph()
            items.append(f"<li>{item_match.group(1).strip()}</li>")
            continue

        flush_list()

        if _BLOCK_LINE_RE.match(stripped):
            flush_paragraph()
            blocks.append(stripped)
            continue

        paragraph.append(stripped)

    flush_paragraph()
    flush_list()

    return blocks


def clean_markup(html: str) -> str:
    """Drop empty paragraphs and unwrap paragraphs around headings or lists."""
    html = _EMPTY_PARAGRAPH_RE.sub("", html)
    html = _WRAPPED_BLOCK_RE.sub(r"\1", html)
    return html.strip()


def markdown_to_html(markdown: str) -> str:
    """
    Convert a markdown section body to an HTML fragment.

    Steps (order matters):
    1. Strip horizontal rules, collapse blank-line runs
    2. Headings (h3, h2, h1)
    3. Bold, then italic
    4-6. Lists, paragraphs and line breaks (assemble_blocks)
    7. Clean-up of empty or misplaced paragraph tags

    Args:
        markdown: Raw markdown text

    Returns:
        HTML fragment, or "" for blank input

    Examples:
        >>> markdown_to_html("Je suis développeur.")
        '<p>Je suis développeur.</p>'
        >>> markdown_to_html("- JS\\n- React")
        '<ul><li>JS</li><li>React</li></ul>'
    """
    if not markdown or not markdown.strip():
        return ""

    text = markdown.replace("\r\n", "\n").replace("\r", "\n")
    text = strip_rules_and_blank_runs(text)
    text = convert_headings(text)
    text = convert_emphasis(text)

    html = "\n".join(assemble_blocks(text))
    return clean_markup(html)

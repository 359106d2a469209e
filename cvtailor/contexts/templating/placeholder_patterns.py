"""
Placeholder Pattern Constants

Centralized token and markdown patterns used for parsing and binding.
Organized into frozen dataclasses by category for immutability and clear grouping.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class PlaceholderPatterns:
    """
    Template skeleton token grammar.

    Templates are data files, so the syntax is fixed:
    - Literal: {{key}}
    - Conditional: {{#if key}} ... {{/if}} (non-greedy, may span lines, not nestable)
    """

    LITERAL_TEMPLATE: str = "{{{{{key}}}}}"
    LITERAL: str = r"\{\{\s*([A-Za-z_][\w.-]*)\s*\}\}"
    CONDITIONAL: str = r"\{\{#if\s+(\w+)\s*\}\}(.*?)\{\{/if\}\}"

    CSS_KEY: str = "css"


@dataclass(frozen=True)
class SectionHeaderPatterns:
    """
    Markdown header patterns for section extraction.

    Only second- and third-level headings open a section; '#' and '####'+
    lines stay in the body.
    """

    SECTION_HEADER: str = r"^#{2,3} "
    HEADER_PREFIX: str = r"^#+\s*"


@dataclass(frozen=True)
class MarkdownPatterns:
    """
    Markdown constructs recognized by the converter.

    Applied in declaration order; see markdown_converter.markdown_to_html.
    """

    HORIZONTAL_RULE: str = r"^[ \t]*-{3,}[ \t]*$"
    EXCESS_BLANK_LINES: str = r"\n[ \t]*\n(?:[ \t]*\n)+"

    H3: str = r"^### (.*)$"
    H2: str = r"^## (.*)$"
    H1: str = r"^# (.*)$"

    BOLD: str = r"\*\*(.+?)\*\*"
    ITALIC: str = r"\*(?!\s)(.+?)(?<!\s)\*"

    LIST_ITEM: str = r"^[*-] (.*)$"

    EMPTY_PARAGRAPH: str = r"<p>\s*</p>"
    WRAPPED_BLOCK: str = r"<p>((?:<h[1-3]>|<ul>).*?(?:</h[1-3]>|</ul>))</p>"


def literal_token(key: str) -> str:
    """Return the literal {{key}} token for a placeholder key."""
    return PlaceholderPatterns.LITERAL_TEMPLATE.format(key=key)


LITERAL_RE = re.compile(PlaceholderPatterns.LITERAL)
CONDITIONAL_RE = re.compile(PlaceholderPatterns.CONDITIONAL, re.DOTALL)

"""
Section parsing utilities for AI-generated CV markdown.

Splits a generated CV into canonical sections (summary, skills, ...) and converts
each section body to an HTML fragment. Parsing never raises on malformed input:
text that cannot be placed in a recognized section simply yields fewer sections,
and the fallback layer fills in what is mandatory.

Pattern follows the intake-style extractor: single forward pass, one open
section at a time, preamble before the first header discarded.
"""

import re
from typing import Dict, List, Optional

from cvtailor.contexts.templating.header_classifier import classify_header, normalize_header
from cvtailor.contexts.templating.logger import _log_debug, log_section_map
from cvtailor.contexts.templating.markdown_converter import markdown_to_html
from cvtailor.contexts.templating.placeholder_patterns import SectionHeaderPatterns

_SECTION_HEADER_RE = re.compile(SectionHeaderPatterns.SECTION_HEADER)


def is_section_header(line: str) -> bool:
    """
    Check whether a line opens a new section.

    Only '## ' and '### ' headings qualify; '# Title' and '#### Detail' stay body text.

    Args:
        line: Raw line from the document

    Returns:
        True if the trimmed line is a second- or third-level heading
    """
    return bool(_SECTION_HEADER_RE.match(line.strip()))


def parse_sections(raw_text: str) -> Dict[str, str]:
    """
    Parse AI-generated markdown into a section map.

    When two headers classify to the same key, the later section overwrites the
    earlier one.

    Args:
        raw_text: Generated CV markdown

    Returns:
        Dict mapping canonical section key to HTML fragment (may be empty)
    """
    sections: Dict[str, str] = {}
    current_section: Optional[str] = None
    current_content: List[str] = []
    preamble_lines = 0

    def finalize() -> None:
        if current_section is None:
            return
        if current_section in sections:
            _log_debug(f"Section '{current_section}' seen again, later content wins")
        sections[current_section] = markdown_to_html("\n".join(current_content))

    for line in (raw_text or "").split("\n"):
        if is_section_header(line):
            finalize()
            current_section = classify_header(normalize_header(line))
            current_content = []
        elif current_section is None:
            if line.strip():
                preamble_lines += 1
        else:
            current_content.append(line)

    finalize()

    if preamble_lines:
        _log_debug(f"Discarded {preamble_lines} preamble line(s) before first heading")

    log_section_map(sections)
    return sections

"""
Intake Context

Responsibilities:
- Analyzes scraped job postings before generation and rendering
- Detects the posting language so generated and fallback text match it

Owns: Job posting analysis
Never: Touches templates or rendered markup
"""

from cvtailor.contexts.intake.language_detection import (
    DEFAULT_LANGUAGE,
    SUPPORTED_LANGUAGES,
    detect_language,
    score_languages,
)

__all__ = [
    "DEFAULT_LANGUAGE",
    "SUPPORTED_LANGUAGES",
    "detect_language",
    "score_languages",
]

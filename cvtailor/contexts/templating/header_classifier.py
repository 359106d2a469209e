"""
Header classification for AI-generated CV sections.

Maps free-form (and multilingual) markdown header text onto the closed set of
canonical section keys the templates understand.

The mapping table is an explicit ordered tuple rather than a dict: containment
matches are not mutually exclusive ("expérience" is contained in
"expérience professionnelle"), so the first matching entry wins and the order
of HEADER_MAPPINGS is part of the classifier's behavior.
"""

import re

from cvtailor.contexts.templating.defaults import SectionKey
from cvtailor.contexts.templating.logger import _log_debug
from cvtailor.contexts.templating.placeholder_patterns import SectionHeaderPatterns

# =============================================================================
# HEADER MAPPING TABLE
# =============================================================================

# (phrase, canonical key), most specific phrases first within each section
HEADER_MAPPINGS: tuple = (
    # Summary
    ("résumé professionnel", SectionKey.SUMMARY),
    ("professional summary", SectionKey.SUMMARY),
    ("profil professionnel", SectionKey.SUMMARY),
    ("professional profile", SectionKey.SUMMARY),
    ("résumé", SectionKey.SUMMARY),
    ("profil", SectionKey.SUMMARY),
    ("profile", SectionKey.SUMMARY),
    ("à propos", SectionKey.SUMMARY),
    ("about", SectionKey.SUMMARY),
    ("summary", SectionKey.SUMMARY),
    ("bio", SectionKey.SUMMARY),
    ("biographie", SectionKey.SUMMARY),
    # Skills
    ("compétences", SectionKey.SKILLS),
    ("skills", SectionKey.SKILLS),
    ("compétences techniques", SectionKey.SKILLS),
    ("technical skills", SectionKey.SKILLS),
    ("savoir-faire", SectionKey.SKILLS),
    ("expertise", SectionKey.SKILLS),
    # Experience
    ("expérience professionnelle", SectionKey.EXPERIENCES),
    ("expériences professionnelles", SectionKey.EXPERIENCES),
    ("experience", SectionKey.EXPERIENCES),
    ("expérience", SectionKey.EXPERIENCES),
    ("expériences", SectionKey.EXPERIENCES),
    ("professional experience", SectionKey.EXPERIENCES),
    ("work experience", SectionKey.EXPERIENCES),
    ("emploi", SectionKey.EXPERIENCES),
    ("carrière", SectionKey.EXPERIENCES),
    ("parcours professionnel", SectionKey.EXPERIENCES),
    ("historique professionnel", SectionKey.EXPERIENCES),
    # Education
    ("formation", SectionKey.EDUCATION),
    ("formations", SectionKey.EDUCATION),
    ("education", SectionKey.EDUCATION),
    ("éducation", SectionKey.EDUCATION),
    ("parcours académique", SectionKey.EDUCATION),
    ("diplômes", SectionKey.EDUCATION),
    # Languages
    ("langues", SectionKey.LANGUAGES),
    ("languages", SectionKey.LANGUAGES),
    ("langue", SectionKey.LANGUAGES),
    ("sprachen", SectionKey.LANGUAGES),
    ("idiomas", SectionKey.LANGUAGES),
    # German
    ("berufliches profil", SectionKey.SUMMARY),
    ("fähigkeiten", SectionKey.SKILLS),
    ("berufserfahrung", SectionKey.EXPERIENCES),
    ("ausbildung", SectionKey.EDUCATION),
    # Spanish
    ("resumen profesional", SectionKey.SUMMARY),
    ("habilidades", SectionKey.SKILLS),
    ("experiencia profesional", SectionKey.EXPERIENCES),
    ("formación", SectionKey.EDUCATION),
)

_EXACT_MAPPINGS = {}
for _phrase, _key in HEADER_MAPPINGS:
    # First occurrence of a phrase is authoritative
    _EXACT_MAPPINGS.setdefault(_phrase, _key)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def normalize_header(header_line: str) -> str:
    """
    Normalize a markdown header line for classification.

    Args:
        header_line: Raw header line (e.g., "## Compétences  ")

    Returns:
        Header text without leading '#' marks, trimmed and lower-cased
    """
    return re.sub(SectionHeaderPatterns.HEADER_PREFIX, "", header_line.strip()).strip().lower()


def classify_header(header_text: str) -> str:
    """
    Classify normalized header text into a canonical section key.

    Matching order:
    1. Exact match against HEADER_MAPPINGS
    2. First entry (in table order) whose phrase contains the header or is
       contained in it
    3. SectionKey.OTHER

    Args:
        header_text: Lower-cased, trimmed header text (see normalize_header)

    Returns:
        Canonical section key
    """
    if not header_text:
        return SectionKey.OTHER

    exact = _EXACT_MAPPINGS.get(header_text)
    if exact is not None:
        _log_debug(f"Header '{header_text}' → {exact} (exact)")
        return exact

    for phrase, key in HEADER_MAPPINGS:
        if phrase in header_text or header_text in phrase:
            _log_debug(f"Header '{header_text}' → {key} (fuzzy via '{phrase}')")
            return key

    _log_debug(f"Header '{header_text}' not matched, using '{SectionKey.OTHER}'")
    return SectionKey.OTHER

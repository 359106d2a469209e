"""
Fallback and guarantee layer for mandatory CV sections.

Free-form section extraction is least reliable for the summary, and AI output
occasionally drops or garbles the experience section. This layer makes sure
both are always populated before binding:

Summary (first non-empty wins):
1. Guaranteed summary from the dedicated generation call
2. Summary section parsed from the AI text
3. The profile's own summary, else a sentence synthesized from title and top
   skill, phrased in the job's language

Experiences:
- Parsed section if non-blank, otherwise one block per profile work experience

Skills, education and languages have no fallback.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined
from markupsafe import Markup
from omegaconf import OmegaConf

from cvtailor.contexts.templating.defaults import FALLBACK_LANGUAGE, SectionKey
from cvtailor.contexts.templating.logger import _log_debug, _log_info
from cvtailor.contexts.templating.profile import UserProfile

load_dotenv()

TEMPLATING_ROOT = Path(__file__).parent
SNIPPETS_PATH = TEMPLATING_ROOT / "snippets"
FALLBACK_PHRASES_PATH = Path(
    os.getenv("CV_FALLBACK_PHRASES_PATH", TEMPLATING_ROOT / "config" / "fallback_phrases.yaml")
)

# Summary provenance labels, used in logs and by callers inspecting resolution
SUMMARY_FROM_GUARANTEE = "guaranteed"
SUMMARY_FROM_AI = "ai_section"
SUMMARY_FROM_PROFILE = "profile"
SUMMARY_FROM_TEMPLATE = "synthesized"


@lru_cache(maxsize=None)
def _snippet_environment() -> Environment:
    """Jinja2 environment for synthesized fragments (HTML-escaped)."""
    return Environment(
        loader=FileSystemLoader(str(SNIPPETS_PATH)),
        # Profile fields are user input
        autoescape=True,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
    )


def render_snippet(name: str, **context: Any) -> str:
    """
    Render a fragment snippet from snippets/.

    Args:
        name: Snippet file name (e.g., 'experience_item.html.jinja')
        **context: Template variables

    Returns:
        Rendered HTML fragment
    """
    return _snippet_environment().get_template(name).render(**context)


@lru_cache(maxsize=None)
def load_fallback_phrases(config_path: Path = None) -> Dict[str, Dict[str, str]]:
    """
    Load per-language fallback phrasing.

    Args:
        config_path: Optional YAML path (defaults to FALLBACK_PHRASES_PATH)

    Returns:
        Dict mapping language name to phrase dict
    """
    if config_path is None:
        config_path = FALLBACK_PHRASES_PATH

    return OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)


def get_phrases(language: Optional[str]) -> Dict[str, str]:
    """Phrases for a language, falling back to FALLBACK_LANGUAGE."""
    phrases = load_fallback_phrases()
    if language in phrases:
        return phrases[language]

    _log_debug(f"No fallback phrasing for '{language}', using '{FALLBACK_LANGUAGE}'")
    return phrases[FALLBACK_LANGUAGE]


def build_fallback_summary(profile: UserProfile, language: Optional[str] = None) -> str:
    """
    Synthesize a one-sentence professional summary from profile fields.

    Args:
        profile: User profile
        language: Detected job language

    Returns:
        Plain-text summary, never empty
    """
    phrases = get_phrases(language)
    title = profile.current_title.strip() or phrases["default_title"]
    skill = profile.primary_skill or phrases["default_skill"]
    return phrases["summary"].format(title=title, skill=skill)


def build_fallback_experiences(profile: UserProfile, language: Optional[str] = None) -> str:
    """
    Render one experience block per profile work experience, in profile order.

    Args:
        profile: User profile
        language: Detected job language (for the "present" label)

    Returns:
        Concatenated HTML blocks, or "" when the profile has no work history
    """
    present_label = get_phrases(language)["present"]
    blocks = [
        render_snippet(
            "experience_item.html.jinja",
            experience=experience,
            present_label=present_label,
        )
        for experience in profile.work_experiences
    ]
    return "\n".join(blocks)


def resolve_summary(
    parsed_summary: Optional[str],
    profile: UserProfile,
    guaranteed_summary: Optional[str] = None,
    language: Optional[str] = None,
) -> Tuple[str, str]:
    """
    Pick the summary fragment by priority.

    Args:
        parsed_summary: Summary fragment from the section parser, if any
        profile: User profile
        guaranteed_summary: Output of the dedicated summary generation call
        language: Detected job language

    Returns:
        Tuple of (HTML fragment, provenance label)
    """
    if guaranteed_summary and guaranteed_summary.strip():
        # AI output, trusted like the rest of the generated markdown
        fragment = render_snippet(
            "summary_paragraph.html.jinja", text=Markup(guaranteed_summary.strip())
        )
        return fragment, SUMMARY_FROM_GUARANTEE

    if parsed_summary and parsed_summary.strip():
        return parsed_summary, SUMMARY_FROM_AI

    if profile.summary.strip():
        fragment = render_snippet("summary_paragraph.html.jinja", text=profile.summary.strip())
        return fragment, SUMMARY_FROM_PROFILE

    fragment = render_snippet(
        "summary_paragraph.html.jinja", text=build_fallback_summary(profile, language)
    )
    return fragment, SUMMARY_FROM_TEMPLATE


def resolve_sections(
    parsed: Dict[str, str],
    profile: UserProfile,
    guaranteed_summary: Optional[str] = None,
    language: Optional[str] = None,
) -> Dict[str, str]:
    """
    Overlay fallbacks for mandatory sections onto a parsed section map.

    The map is updated in place and returned.

    Args:
        parsed: Section map from parse_sections()
        profile: User profile
        guaranteed_summary: Optional dedicated summary text
        language: Detected job language

    Returns:
        The same map, with summary always set and experiences set when possible
    """
    summary, source = resolve_summary(
        parsed.get(SectionKey.SUMMARY), profile, guaranteed_summary, language
    )
    parsed[SectionKey.SUMMARY] = summary
    _log_debug(f"Summary resolved from {source} ({len(summary)} chars)")

    experiences = parsed.get(SectionKey.EXPERIENCES, "")
    if not experiences.strip() and profile.work_experiences:
        _log_info(
            f"Experiences section missing from AI content, "
            f"using {len(profile.work_experiences)} profile entries"
        )
        parsed[SectionKey.EXPERIENCES] = build_fallback_experiences(profile, language)

    return parsed

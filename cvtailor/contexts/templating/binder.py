"""
Template binding: AI content + user profile -> final HTML.

The skeleton grammar is deliberately tiny, so it is handled by a bespoke
substitution pass instead of a general template engine:

    {{key}}                      literal substitution (global)
    {{#if key}} ... {{/if}}      kept when key resolves to non-blank text

Binding is pure: it reads the registry, never writes to it, and the same inputs
always produce byte-identical output.
"""

from typing import Any, Dict, Mapping, Optional, Union

from markupsafe import escape

from cvtailor.contexts.templating.defaults import (
    FALLBACK_LANGUAGE,
    RENDERED_SECTION_KEYS,
    SAMPLE_AI_CONTENT,
    SAMPLE_LANGUAGE,
    SAMPLE_PROFILE,
    USER_FIELD_PLACEHOLDERS,
)
from cvtailor.contexts.templating.fallbacks import resolve_sections
from cvtailor.contexts.templating.logger import _log_debug, _log_warning, log_render_result
from cvtailor.contexts.templating.placeholder_patterns import (
    CONDITIONAL_RE,
    LITERAL_RE,
    PlaceholderPatterns,
    literal_token,
)
from cvtailor.contexts.templating.profile import UserProfile
from cvtailor.contexts.templating.registries import TemplateDefinition, TemplateRegistry
from cvtailor.contexts.templating.section_parser import parse_sections

ProfileLike = Union[UserProfile, Mapping[str, Any]]


def coerce_profile(profile: Optional[ProfileLike]) -> UserProfile:
    """Accept a UserProfile or a raw profile mapping."""
    if profile is None:
        return UserProfile()
    if isinstance(profile, UserProfile):
        return profile
    return UserProfile.from_dict(profile)


def substitute_placeholders(html: str, values: Mapping[str, str]) -> str:
    """
    Replace every {{key}} token whose key is in values, in a single pass.

    Replacement text is never rescanned, so tokens inside profile values or
    AI content come out verbatim. Tokens for other keys are left in place.

    Args:
        html: Markup containing placeholder tokens
        values: Placeholder key -> replacement text

    Returns:
        Markup with those tokens replaced
    """

    def resolve(match) -> str:
        return values.get(match.group(1), match.group(0))

    return LITERAL_RE.sub(resolve, html)


def process_conditionals(html: str, variables: Mapping[str, Optional[str]]) -> str:
    """
    Evaluate {{#if key}} ... {{/if}} blocks.

    Blocks whose variable is missing or blank are removed entirely; otherwise
    the enclosed content is kept without the markers.

    Args:
        html: Markup containing conditional blocks
        variables: Variable name -> value

    Returns:
        Markup with all conditional blocks resolved
    """

    def resolve(match) -> str:
        value = variables.get(match.group(1))
        return match.group(2) if value and value.strip() else ""

    return CONDITIONAL_RE.sub(resolve, html)


def unfilled_placeholders(
    template: TemplateDefinition, values: Mapping[str, str]
) -> Dict[str, str]:
    """
    Blank out declared placeholders the binder has no value for.

    Undeclared {{x}} text in the skeleton is left alone.

    Args:
        template: Template being rendered
        values: Values the binder is about to substitute

    Returns:
        Declared key -> "" for every declared key missing from values
    """
    unfilled = {}
    for key in sorted(template.placeholders - set(values)):
        _log_warning(
            f"Template '{template.id}' declares {literal_token(key)} with no value, rendering empty"
        )
        unfilled[key] = ""
    return unfilled


def build_section_map(
    profile: UserProfile,
    ai_text: str,
    guaranteed_summary: Optional[str] = None,
    language: Optional[str] = None,
) -> Dict[str, str]:
    """
    Run parse -> classify -> convert -> fallback for one render.

    Args:
        profile: User profile
        ai_text: Generated CV markdown
        guaranteed_summary: Optional dedicated summary text
        language: Detected job language

    Returns:
        Resolved section map (always has a summary)
    """
    sections = parse_sections(ai_text or "")
    return resolve_sections(sections, profile, guaranteed_summary, language)


class TemplateBinder:
    """
    Renders registered templates with profile data and AI content.

    Holds only a reference to a TemplateRegistry; one binder can serve any
    number of concurrent renders.
    """

    def __init__(self, registry: TemplateRegistry):
        """
        Initialize the binder.

        Args:
            registry: Loaded template registry
        """
        self.registry = registry

    def render(
        self,
        template_id: str,
        profile: ProfileLike,
        ai_text: str,
        guaranteed_summary: Optional[str] = None,
        language: Optional[str] = None,
    ) -> str:
        """
        Render a template.

        Args:
            template_id: Registered template id
            profile: UserProfile or raw profile mapping
            ai_text: Generated CV markdown
            guaranteed_summary: Summary from the dedicated generation call;
                                wins over any parsed summary when non-blank
            language: Detected job language for fallback phrasing
                      (defaults to English)

        Returns:
            Fully bound HTML document

        Raises:
            TemplateNotFound: If template_id is not registered
        """
        template = self.registry.require(template_id)
        profile = coerce_profile(profile)
        language = language or FALLBACK_LANGUAGE

        user_fields = {
            key: str(escape(value))
            for key, value in profile.field_values(USER_FIELD_PLACEHOLDERS).items()
        }
        sections = build_section_map(profile, ai_text, guaranteed_summary, language)
        section_values = {key: sections.get(key, "") for key in RENDERED_SECTION_KEYS}

        values = {
            PlaceholderPatterns.CSS_KEY: template.css_content,
            **user_fields,
            **section_values,
        }
        values.update(unfilled_placeholders(template, values))

        # Conditionals and tokens are resolved against the skeleton only
        html = process_conditionals(template.html_content, {**user_fields, **section_values})
        html = substitute_placeholders(html, values)

        log_render_result(template.id, section_values, html)
        return html

    def render_preview(self, template_id: str) -> str:
        """
        Render a template with built-in sample data.

        Args:
            template_id: Registered template id

        Returns:
            HTML preview document

        Raises:
            TemplateNotFound: If template_id is not registered
        """
        _log_debug(f"Rendering preview for '{template_id}'")
        return self.render(
            template_id,
            UserProfile.from_dict(SAMPLE_PROFILE),
            SAMPLE_AI_CONTENT,
            language=SAMPLE_LANGUAGE,
        )

"""
Templating Context

Responsibilities:
- Splits AI-generated CV markdown into canonical sections
- Classifies multilingual section headers
- Converts section markdown into HTML fragments
- Guarantees mandatory sections through fallbacks
- Binds fragments and profile fields onto registered HTML templates

Owns: Template store, section map, HTML binding
Never: Calls the language model or exports PDF/DOCX
"""

from cvtailor.contexts.templating.binder import TemplateBinder, build_section_map
from cvtailor.contexts.templating.defaults import PlanTier, SectionKey
from cvtailor.contexts.templating.exceptions import (
    TemplateConfigError,
    TemplateLoadIncomplete,
    TemplateNotFound,
)
from cvtailor.contexts.templating.fallbacks import resolve_sections
from cvtailor.contexts.templating.header_classifier import classify_header
from cvtailor.contexts.templating.markdown_converter import markdown_to_html
from cvtailor.contexts.templating.profile import UserProfile, WorkExperience
from cvtailor.contexts.templating.registries import (
    TemplateDefinition,
    TemplatePreview,
    TemplateRegistry,
)
from cvtailor.contexts.templating.section_parser import parse_sections

__all__ = [
    # Pipeline stages
    "parse_sections",
    "classify_header",
    "markdown_to_html",
    "resolve_sections",
    "build_section_map",
    # Binding and registry
    "TemplateBinder",
    "TemplateRegistry",
    "TemplateDefinition",
    "TemplatePreview",
    # Data structures and constants
    "UserProfile",
    "WorkExperience",
    "SectionKey",
    "PlanTier",
    # Errors
    "TemplateNotFound",
    "TemplateLoadIncomplete",
    "TemplateConfigError",
]

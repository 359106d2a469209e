"""
Template Registry

Discovers CV templates in a template store directory, validates them once at
startup and serves them read-only afterwards.

Each template lives in its own directory:

    <templates_path>/<dir>/config.json     id, name, description, category,
                                           isPremium, features[], placeholders[{key}]
    <templates_path>/<dir>/template.html   markup skeleton with {{placeholders}}
    <templates_path>/<dir>/styles.css      stylesheet injected at {{css}}

Entries missing any of the three files, or with an unusable config, are
skipped with a warning. Loading never raises to the caller.
"""

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from dotenv import load_dotenv

from cvtailor.contexts.templating.defaults import (
    PREMIUM_PLANS,
    PREVIEW_URL_FORMAT,
    REQUIRED_TEMPLATE_FILES,
    TEMPLATE_CONFIG_FILE,
    TEMPLATE_CSS_FILE,
    TEMPLATE_HTML_FILE,
    THUMBNAIL_URL_FORMAT,
)
from cvtailor.contexts.templating.exceptions import (
    TemplateConfigError,
    TemplateLoadIncomplete,
    TemplateNotFound,
)
from cvtailor.contexts.templating.logger import (
    _log_debug,
    _log_error,
    _log_warning,
    log_registry_loaded,
)

load_dotenv()
DEFAULT_TEMPLATES_PATH = Path(__file__).parent / "templates"
TEMPLATES_PATH = Path(os.getenv("CV_TEMPLATES_PATH", DEFAULT_TEMPLATES_PATH))


@dataclass(frozen=True)
class TemplateDefinition:
    """
    A fully loaded CV template.

    Attributes:
        id: Template identifier (from config.json, not the directory name)
        name: Display name
        description: Short description shown in template pickers
        category: Free-form category (e.g., "modern", "classic")
        is_premium: Whether the template requires a premium plan
        html_content: Markup skeleton containing {{placeholder}} tokens
        css_content: Stylesheet content
        placeholders: Placeholder keys declared in config.json
        features: Marketing feature list from config.json
    """

    id: str
    name: str
    description: str
    category: str
    is_premium: bool
    html_content: str
    css_content: str
    placeholders: frozenset = field(default_factory=frozenset)
    features: Tuple[str, ...] = ()

    @property
    def preview_url(self) -> str:
        return PREVIEW_URL_FORMAT.format(template_id=self.id)


@dataclass(frozen=True)
class TemplatePreview:
    """Listing entry for a template (no markup or stylesheet)."""

    id: str
    name: str
    description: str
    category: str
    is_premium: bool
    features: Tuple[str, ...]
    preview_url: str
    thumbnail_url: str

    @classmethod
    def from_definition(cls, template: TemplateDefinition) -> "TemplatePreview":
        return cls(
            id=template.id,
            name=template.name,
            description=template.description,
            category=template.category,
            is_premium=template.is_premium,
            features=template.features,
            preview_url=template.preview_url,
            thumbnail_url=THUMBNAIL_URL_FORMAT.format(template_id=template.id),
        )


def read_template_config(config_path: Path) -> Dict[str, Any]:
    """
    Read and minimally validate a template config.json.

    Args:
        config_path: Path to config.json

    Returns:
        Parsed config dict

    Raises:
        TemplateConfigError: If the file is not valid JSON or lacks an 'id'
    """
    try:
        config = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise TemplateConfigError("Invalid JSON in template config", config_path, e) from e

    if not isinstance(config, dict) or not config.get("id"):
        raise TemplateConfigError("Template config must be an object with an 'id'", config_path)

    return config


def load_template_entry(template_dir: Path) -> Tuple[TemplateDefinition, Dict[str, Any]]:
    """
    Load one template store entry.

    Args:
        template_dir: Directory holding config.json, template.html and styles.css

    Returns:
        Tuple of (TemplateDefinition, raw config dict)

    Raises:
        TemplateLoadIncomplete: If any required file is missing
        TemplateConfigError: If config.json is unusable
    """
    missing = [name for name in REQUIRED_TEMPLATE_FILES if not (template_dir / name).is_file()]
    if missing:
        raise TemplateLoadIncomplete(template_dir, missing)

    config = read_template_config(template_dir / TEMPLATE_CONFIG_FILE)
    placeholders = frozenset(
        entry["key"]
        for entry in config.get("placeholders") or []
        if isinstance(entry, dict) and entry.get("key")
    )

    template = TemplateDefinition(
        id=str(config["id"]),
        name=str(config.get("name") or config["id"]),
        description=str(config.get("description") or ""),
        category=str(config.get("category") or ""),
        is_premium=bool(config.get("isPremium", False)),
        html_content=(template_dir / TEMPLATE_HTML_FILE).read_text(encoding="utf-8"),
        css_content=(template_dir / TEMPLATE_CSS_FILE).read_text(encoding="utf-8"),
        placeholders=placeholders,
        features=tuple(config.get("features") or ()),
    )
    return template, config


class TemplateRegistry:
    """
    Read-only registry of CV templates, populated once.

    Construct it with TemplateRegistry.load() at process start and pass the
    instance to request handlers. Nothing mutates it after construction, so it
    is safe to share between concurrent renders.
    """

    def __init__(
        self,
        templates: Mapping[str, TemplateDefinition],
        configs: Optional[Mapping[str, Dict[str, Any]]] = None,
        templates_path: Optional[Path] = None,
    ):
        """
        Initialize the registry from already-loaded templates.

        Args:
            templates: Template id -> TemplateDefinition
            configs: Template id -> raw config.json contents
            templates_path: Store the templates came from, if any
        """
        self.templates_path = templates_path
        self._templates = MappingProxyType(dict(templates))
        self._configs = MappingProxyType(dict(configs or {}))

    @classmethod
    def load(cls, templates_path: Path = None) -> "TemplateRegistry":
        """
        Scan a template store and register every complete entry.

        Args:
            templates_path: Template store directory. Defaults to CV_TEMPLATES_PATH
                            from environment, else the bundled templates

        Returns:
            Populated TemplateRegistry (possibly empty)
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH
        templates_path = Path(templates_path)

        templates: Dict[str, TemplateDefinition] = {}
        configs: Dict[str, Dict[str, Any]] = {}

        if not templates_path.is_dir():
            _log_warning(f"Templates directory does not exist: {templates_path}")
            return cls(templates, configs, templates_path)

        for template_dir in sorted(p for p in templates_path.iterdir() if p.is_dir()):
            try:
                template, config = load_template_entry(template_dir)
            except TemplateLoadIncomplete as e:
                _log_warning(f"Skipping template '{template_dir.name}': missing {', '.join(e.missing)}")
                continue
            except TemplateConfigError as e:
                _log_warning(f"Skipping template '{template_dir.name}': {e}")
                continue
            except (OSError, UnicodeDecodeError) as e:
                _log_error(f"Cannot read template '{template_dir.name}': {e}")
                continue

            if template.id in templates:
                _log_warning(
                    f"Duplicate template id '{template.id}' in '{template_dir.name}', keeping first"
                )
                continue

            templates[template.id] = template
            configs[template.id] = config
            _log_debug(f"  Loaded template: {template.name} ({template.id})")

        log_registry_loaded(templates_path, sorted(templates))
        return cls(templates, configs, templates_path)

    def __contains__(self, template_id: str) -> bool:
        return template_id in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def template_ids(self) -> List[str]:
        """Registered template ids, sorted."""
        return sorted(self._templates)

    def get(self, template_id: str) -> Optional[TemplateDefinition]:
        """
        Get a template by id.

        Args:
            template_id: Template identifier

        Returns:
            TemplateDefinition, or None if not registered
        """
        return self._templates.get(template_id)

    def require(self, template_id: str) -> TemplateDefinition:
        """
        Get a template by id, failing loudly.

        Raises:
            TemplateNotFound: If template_id is not registered
        """
        template = self._templates.get(template_id)
        if template is None:
            raise TemplateNotFound(template_id, self._templates.keys())
        return template

    def get_config(self, template_id: str) -> Optional[Dict[str, Any]]:
        """Raw config.json contents for a template, or None."""
        config = self._configs.get(template_id)
        return dict(config) if config is not None else None

    def list_previews(self) -> List[TemplatePreview]:
        """
        List all templates as previews.

        Returns:
            Previews sorted free-first, then alphabetically by display name
        """
        previews = [TemplatePreview.from_definition(t) for t in self._templates.values()]
        return sorted(previews, key=lambda p: (p.is_premium, p.name.casefold(), p.id))

    def has_access(self, template_id: str, plan: str) -> bool:
        """
        Check whether a plan tier may use a template.

        Args:
            template_id: Template identifier
            plan: Plan tier (FREE, PREMIUM, ENTERPRISE)

        Returns:
            False for unknown templates; True for free templates; for premium
            templates, True only on PREMIUM or ENTERPRISE plans
        """
        template = self._templates.get(template_id)
        if template is None:
            return False
        if not template.is_premium:
            return True
        return plan in PREMIUM_PLANS

    def previews_for_plan(self, plan: str) -> List[TemplatePreview]:
        """
        List previews as seen by a plan tier.

        Premium templates stay listed for every plan; is_premium is left True
        only where the template is locked for this plan (see has_access).

        Args:
            plan: Plan tier

        Returns:
            Previews in list_previews() order
        """
        return [
            replace(preview, is_premium=preview.is_premium and plan not in PREMIUM_PLANS)
            for preview in self.list_previews()
        ]

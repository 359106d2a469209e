"""Custom exceptions for templating context with template references."""

from pathlib import Path
from typing import Iterable, Optional


class TemplateNotFound(LookupError):
    """
    Exception raised when a render or lookup names an unregistered template.

    This is the only hard failure of the render pipeline. The web layer decides
    how to surface it (typically a 404 or a raw-markdown export fallback).

    Attributes:
        template_id: The requested template identifier
        available: Identifiers registered at the time of the request
    """

    def __init__(self, template_id: str, available: Optional[Iterable[str]] = None):
        self.template_id = template_id
        self.available = sorted(available) if available is not None else []

        parts = [f"Template '{template_id}' not found"]
        if self.available:
            parts.append(f"Available templates: {', '.join(self.available)}")

        super().__init__("\n".join(parts))


class TemplateLoadIncomplete(FileNotFoundError):
    """
    Exception raised when a template store entry lacks a required artifact.

    Raised per entry by the loader and caught by TemplateRegistry, which logs it
    and leaves the entry unregistered. It never reaches render callers.

    Attributes:
        template_dir: Directory of the incomplete entry
        missing: File names that were expected but absent
    """

    def __init__(self, template_dir: Path, missing: Iterable[str]):
        self.template_dir = template_dir
        self.missing = list(missing)

        message = (
            f"Incomplete template entry at {template_dir}\n"
            f"Missing: {', '.join(self.missing)}"
        )
        super().__init__(message)


class TemplateConfigError(ValueError):
    """
    Exception raised when a template's config.json cannot be used.

    Covers invalid JSON and configs lacking an 'id'. Like TemplateLoadIncomplete,
    it is absorbed by the registry during loading.

    Attributes:
        config_path: Path to the offending config file
        original_error: The underlying parse error, if any
    """

    def __init__(
        self,
        message: str,
        config_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.config_path = config_path
        self.original_error = original_error

        parts = [message]

        if config_path:
            parts.append(f"\nConfig: {config_path}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))

"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

from cvtailor.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[template]"

# Characters of fragment shown in debug previews
PREVIEW_CHARS = 100


def setup_templating_logger(log_dir: Path, phase: str = "render") -> Path:
    """
    Setup logger for templating context.

    Configures loguru with provenance tracking and templating-specific context.

    Args:
        log_dir: Directory for this templating session
        phase: Phase name for provenance ("render" or "preview")

    Returns:
        Path to log file

    Example:
        from cvtailor.contexts.templating.logger import setup_templating_logger

        log_file = setup_templating_logger(log_dir, phase="render")
    """
    return _setup_logger(
        context_name="template",
        log_dir=log_dir,
        extra_provenance={"Phase": phase},
    )


# Wrapper functions with automatic [template] prefix


def _log_info(message: str) -> None:
    """Log info message with [template] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [template] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [template] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [template] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level templating-specific logging helpers


def log_section_map(sections: dict) -> None:
    """Log which sections were found and how large each fragment is."""
    if not sections:
        _log_debug("No sections recognized in AI content")
        return

    for key, fragment in sections.items():
        state = "HAS CONTENT" if fragment else "EMPTY"
        _log_debug(f"  {key}: {state} ({len(fragment)} chars)")
        if fragment:
            logger.opt(raw=True).debug(f"    Preview: {fragment[:PREVIEW_CHARS]}...\n")


def log_registry_loaded(templates_path: Path, template_ids: list) -> None:
    """Log result of the one-time registry load."""
    if template_ids:
        _log_info(f"Loaded {len(template_ids)} CV template(s) from {templates_path}")
        _log_debug(f"  Available: {', '.join(template_ids)}")
    else:
        _log_warning(f"No CV templates registered from {templates_path}")


def log_render_result(template_id: str, sections: dict, output: str) -> None:
    """Log the fragment sizes bound into a rendered template."""
    _log_success(f"Rendered template '{template_id}' ({len(output)} chars)")
    for key, fragment in sections.items():
        _log_debug(f"  {key}: {len(fragment)} chars")

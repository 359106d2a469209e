"""
Intake context logger.

Provides logging interface for intake context with automatic [intake] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[intake]"


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_language_scores(scores: dict, detected: str) -> None:
    """Log per-language indicator scores and the chosen language."""
    formatted = ", ".join(f"{language}={score}" for language, score in scores.items())
    _log_debug(f"Language scores: {formatted}")
    _log_debug(f"Detected language: {detected}")

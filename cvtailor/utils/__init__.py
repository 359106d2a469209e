"""
Shared utilities for CVTAILOR.

Common functionality used across contexts:
- Logger configuration
"""

from cvtailor.utils.logger import log_provenance, setup_logger

__all__ = ["log_provenance", "setup_logger"]

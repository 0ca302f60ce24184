"""
mkvsubs.exceptions - Custom exception classes.

All mkvsubs-specific exceptions inherit from MkvSubsError.
"""

from __future__ import annotations

from pathlib import Path


class MkvSubsError(Exception):
    """Base exception for all mkvsubs errors."""

    pass


class ConfigError(MkvSubsError):
    """Tool configuration error."""

    pass


class ValidationError(MkvSubsError):
    """Invalid source file or argument."""

    pass


class ProbeError(MkvSubsError):
    """Media inspection failed; nothing can be extracted without metadata."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not probe {path}: {reason}")


class ParseError(MkvSubsError):
    """Probe output was malformed."""

    def __init__(self, context: str):
        self.context = context
        super().__init__(f"Malformed probe output: {context}")


class ExtractionError(MkvSubsError):
    """Extraction of a single track failed."""

    pass


class DependencyError(MkvSubsError):
    """Required external tool missing or misconfigured."""

    def __init__(self, dependency: str, message: str, install_hint: str | None = None):
        self.dependency = dependency
        self.message = message
        self.install_hint = install_hint
        super().__init__(f"{dependency}: {message}")

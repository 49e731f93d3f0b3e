"""Domain-level error types shared by the CLI, the runner and the adapters.

Each type carries a stable ``code`` so the top-level handler in
``spacectl.app.main`` can report failures uniformly and exit non-zero.
"""

from __future__ import annotations

from typing import Optional

from .ports import UseCaseError


class UsageError(UseCaseError):
    """Command line could not be parsed or requested nothing."""

    def __init__(self, message: str, *, hint: Optional[str] = None) -> None:
        super().__init__("USAGE", message, hint=hint)


class CommandValidationError(UseCaseError):
    """A requested command's prerequisite is not met by the resolved selection."""

    def __init__(self, command: str, message: str) -> None:
        super().__init__("VALIDATION_FAILED", f"{command}: {message}")
        self.command = command


class DiscoveryError(UseCaseError):
    """A supplied search path could not be walked."""

    def __init__(self, message: str, *, hint: Optional[str] = None) -> None:
        super().__init__("PATH_NOT_FOUND", message, hint=hint)


class ConfigurationError(UseCaseError):
    """Settings file, environment or configuration text is malformed."""

    def __init__(self, message: str) -> None:
        super().__init__("INVALID_CONFIG", message)


__all__ = [
    "CommandValidationError",
    "ConfigurationError",
    "DiscoveryError",
    "UsageError",
]

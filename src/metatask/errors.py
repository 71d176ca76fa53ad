"""Error taxonomy for meta-task commands."""

from __future__ import annotations

from enum import Enum


class ToolSource(str, Enum):
    """External system an error originated from."""

    MULTIPLEXER = "multiplexer"
    VERSION_CONTROL = "version-control"


# Status reported when the external tool could not be started at all.
NOT_INVOKED_STATUS = -1


class MetaTaskError(RuntimeError):
    """Base class for every error a meta-task command reports to the user."""


class ValidationError(MetaTaskError):
    """Raised before any external call when a command's precondition fails."""


class EnvironmentCorruptError(MetaTaskError):
    """Raised when the session indicator variable does not hold valid text."""

    def __init__(self, variable: str):
        super().__init__(f"Bailing, {variable} env var contains non-Unicode characters")
        self.variable = variable


class RegistryError(MetaTaskError):
    """Raised when the task registry file cannot be read or parsed."""


class ExternalToolError(MetaTaskError):
    """Raised when a tmux or git invocation fails."""

    def __init__(self, *, source: ToolSource, status: int, message: str):
        super().__init__(f"{message} (exit-status: {status}, source: {source.value})")
        self.source = source
        self.status = status
        self.message = message

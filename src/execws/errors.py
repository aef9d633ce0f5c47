"""Application-level exception types for exec-ws."""

from __future__ import annotations


class ExecWsError(Exception):
    """Base exception for exec-ws."""


class ConfigurationError(ExecWsError):
    """Base exception for configuration and startup validation errors."""


class ManifestNotFoundError(ConfigurationError):
    """Raised when no workspace manifest exists in the project root."""


class InvalidManifestError(ConfigurationError):
    """Raised when the manifest cannot be read or has no usable workspaces field."""


class NoCommandError(ConfigurationError):
    """Raised when neither a command nor positional arguments were given."""


class CommandSyntaxError(ConfigurationError):
    """Raised when a --command string cannot be tokenized."""

"""Exceptions raised while loading deployment configuration."""


class DeployKitError(Exception):
    """Base class for deploykit errors."""


class ConfigurationError(DeployKitError, ValueError):
    """Unknown network, malformed secrets structure or missing required field."""


class CredentialError(DeployKitError):
    """Signing key missing, unreadable, empty or malformed."""

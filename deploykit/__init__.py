"""Deployment configuration for the contract toolchain."""

from deploykit.errors import ConfigurationError, CredentialError, DeployKitError
from deploykit.loader import DeploymentConfig, load_config
from deploykit.models import CompilerProfile, CredentialHandle, NetworkName, NetworkProfile

__version__ = "0.1.0"

__all__ = [
    "CompilerProfile",
    "ConfigurationError",
    "CredentialError",
    "CredentialHandle",
    "DeployKitError",
    "DeploymentConfig",
    "NetworkName",
    "NetworkProfile",
    "load_config",
]

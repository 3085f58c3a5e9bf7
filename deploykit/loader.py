"""Construction of the deployment configuration consumed by the driver."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from deploykit import config, resolver
from deploykit.credentials import load_infura_secrets
from deploykit.models import CompilerProfile, InfuraSecrets, NetworkName, NetworkProfile


@dataclass(frozen=True)
class DeploymentConfig:
    """Immutable deployment configuration.

    Network profiles are not stored; ``resolve`` builds a fresh one on each
    call so that networks without a signer work when the key file is absent.
    """
    compiler: CompilerProfile
    secrets: InfuraSecrets
    devkey_path: Path
    env: config.EnvAccessor = field(repr=False, hash=False)
    plugins: Tuple[str, ...] = config.PLUGINS
    api_keys: Mapping[str, Optional[str]] = field(
        default_factory=lambda: MappingProxyType({}), repr=False, hash=False
    )

    def resolve(self, name: Union[str, NetworkName]) -> NetworkProfile:
        """Build the profile for one network."""
        return resolver.resolve(
            name,
            devkey_path=self.devkey_path,
            secrets=self.secrets,
            env=self.env,
        )

    def resolve_all(self) -> Dict[NetworkName, NetworkProfile]:
        """Build every network profile, failing on the first error."""
        return {network: self.resolve(network) for network in NetworkName}

    def to_driver_mapping(self) -> Dict[str, Any]:
        """Return the ``compilers/networks/plugins/api_keys`` mapping."""
        return {
            "compilers": {"solc": self.compiler.to_driver_entry()},
            "networks": {
                network.value: profile.to_driver_entry()
                for network, profile in self.resolve_all().items()
            },
            "plugins": list(self.plugins),
            "api_keys": dict(self.api_keys),
        }


def load_config(
    devkey_path: Union[str, Path] = config.DEFAULT_DEVKEY_PATH,
    secrets_path: Union[str, Path] = config.DEFAULT_SECRETS_PATH,
    env: Optional[config.EnvAccessor] = None,
) -> DeploymentConfig:
    """
    Load the deployment configuration.

    The secrets file is required for every network and is read here. The
    signing key is only read when a network that needs it is resolved.

    Args:
        devkey_path: Path to the signing key file
        secrets_path: Path to the JSON file with Infura credentials
        env: Environment accessor, os.getenv by default

    Returns:
        DeploymentConfig

    Raises:
        ConfigurationError: If the secrets file is missing or malformed
    """
    accessor = env if env is not None else os.getenv
    secrets = load_infura_secrets(secrets_path)

    return DeploymentConfig(
        compiler=config.COMPILER,
        secrets=secrets,
        devkey_path=Path(devkey_path),
        env=accessor,
        plugins=config.PLUGINS,
        api_keys=MappingProxyType(
            {"bscscan": config.get_env(config.BSCSCAN_API_KEY_ENV, None, accessor)}
        ),
    )

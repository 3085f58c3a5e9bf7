"""Resolution of network names into connection profiles."""

from pathlib import Path
from typing import Callable, Dict, Optional, Union

from deploykit import config, evm
from deploykit.credentials import load_signing_key
from deploykit.models import CredentialHandle, InfuraSecrets, NetworkName, NetworkProfile

ProfileBuilder = Callable[..., NetworkProfile]


def _profile_fields(network: NetworkName, rpc_endpoint: str) -> Dict[str, object]:
    settings = config.get_network_settings(network)
    return {
        "name": network,
        "rpc_endpoint": rpc_endpoint,
        "chain_id": settings["chain_id"],
        "required_confirmations": settings["confirmations"],
        "timeout_blocks": settings["timeout_blocks"],
        "skip_dry_run": settings["skip_dry_run"],
        "gas": settings["gas"],
    }


def _build_development(
    signer: Optional[CredentialHandle],
    secrets: InfuraSecrets,
    env: Optional[config.EnvAccessor],
) -> NetworkProfile:
    rpc_endpoint = config.get_rpc_endpoint(NetworkName.DEVELOPMENT, env)
    return NetworkProfile(
        **_profile_fields(NetworkName.DEVELOPMENT, rpc_endpoint),
        provider_factory=lambda: evm.build_provider(rpc_endpoint),
    )


def _build_ropsten(
    signer: Optional[CredentialHandle],
    secrets: InfuraSecrets,
    env: Optional[config.EnvAccessor],
) -> NetworkProfile:
    rpc_endpoint = config.get_rpc_endpoint(NetworkName.ROPSTEN, env, secrets.project_id)
    # Infura takes the project secret as the basic auth password
    request_kwargs = {"auth": ("", secrets.secret)}
    return NetworkProfile(
        **_profile_fields(NetworkName.ROPSTEN, rpc_endpoint),
        signer=signer,
        provider_factory=lambda: evm.build_provider(rpc_endpoint, signer, request_kwargs),
    )


def _build_bsc(
    signer: Optional[CredentialHandle],
    secrets: InfuraSecrets,
    env: Optional[config.EnvAccessor],
) -> NetworkProfile:
    rpc_endpoint = config.get_rpc_endpoint(NetworkName.BSC, env)
    return NetworkProfile(
        **_profile_fields(NetworkName.BSC, rpc_endpoint),
        signer=signer,
        provider=evm.build_provider(rpc_endpoint, signer),
    )


BUILDERS: Dict[NetworkName, ProfileBuilder] = {
    NetworkName.DEVELOPMENT: _build_development,
    NetworkName.ROPSTEN: _build_ropsten,
    NetworkName.BSC: _build_bsc,
}


def resolve(
    name: Union[str, NetworkName],
    *,
    devkey_path: Union[str, Path],
    secrets: InfuraSecrets,
    env: Optional[config.EnvAccessor] = None,
) -> NetworkProfile:
    """
    Build the connection profile for a network.

    Networks that sign transactions load the key from ``devkey_path`` first;
    the file is read again on every call. The bsc provider is built eagerly,
    the others lazily. Resolution never contacts the endpoint.

    Args:
        name: Network name (e.g., "development", "ropsten", "bsc")
        devkey_path: Path to the signing key file
        secrets: Infura gateway credentials
        env: Environment accessor used for endpoint overrides

    Returns:
        NetworkProfile for the network

    Raises:
        ConfigurationError: If the network name is unknown
        CredentialError: If the network needs a signer and the key cannot be loaded
    """
    network = NetworkName.parse(name)
    signer = None
    if config.get_network_settings(network)["signed"]:
        signer = load_signing_key(devkey_path)
    return BUILDERS[network](signer, secrets, env)

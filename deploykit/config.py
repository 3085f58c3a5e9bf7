#!/usr/bin/env python3
"""
Configuration constants for deploykit.
Stores the compiler profile, network parameters and RPC endpoints.
RPC endpoints can be overridden through environment variables.
"""

import os
from typing import Any, Callable, Dict, Optional

from deploykit.models import CompilerProfile, NetworkName

EnvAccessor = Callable[[str], Optional[str]]

DEFAULT_DEVKEY_PATH = ".devkey"
DEFAULT_SECRETS_PATH = ".secrets.json"
BSCSCAN_API_KEY_ENV = "BSCSCAN_API_KEY"

COMPILER = CompilerProfile(
    version="0.7.6",
    optimizer_enabled=True,
    optimizer_runs=9999,
)

PLUGINS = ("truffle-plugin-verify",)


# Network parameters
# Structure: NETWORKS[network][field]
# A chain_id of None accepts any chain id.
NETWORKS: Dict[NetworkName, Dict[str, Any]] = {
    NetworkName.DEVELOPMENT: {
        "rpc_env": "DEVELOPMENT_RPC",
        "rpc_endpoint": "http://127.0.0.1:7545",
        "chain_id": None,
        "confirmations": 0,
        "timeout_blocks": 50,  # driver default
        "skip_dry_run": False,
        "gas": None,
        "signed": False,
    },
    NetworkName.ROPSTEN: {
        "rpc_env": "ROPSTEN_RPC",
        "rpc_endpoint": "https://ropsten.infura.io/v3/{project_id}",
        "chain_id": 3,
        "confirmations": 2,
        "timeout_blocks": 200,
        "skip_dry_run": True,
        "gas": 5500000,  # Ropsten has a lower block limit than mainnet
        "signed": True,
    },
    NetworkName.BSC: {
        "rpc_env": "BSC_RPC",
        "rpc_endpoint": "https://bsc-dataseed1.binance.org",
        "chain_id": 56,
        "confirmations": 10,
        "timeout_blocks": 200,
        "skip_dry_run": True,
        "gas": None,
        "signed": True,
    },
}


def get_env(key: str, default: Optional[str] = None, env: Optional[EnvAccessor] = None) -> Optional[str]:
    """Get environment variable through ``env`` (os.getenv by default) with fallback to default."""
    accessor = env if env is not None else os.getenv
    value = accessor(key)
    return default if value is None else value


def get_network_settings(network: NetworkName) -> Dict[str, Any]:
    """Return a copy of the static parameters for a network."""
    return dict(NETWORKS[NetworkName.parse(network)])


def get_rpc_endpoint(
    network: NetworkName,
    env: Optional[EnvAccessor] = None,
    project_id: str = "",
) -> str:
    """
    Get RPC endpoint for a given network.

    Args:
        network: Network name (e.g., "development", "ropsten", "bsc")
        env: Environment accessor used for endpoint overrides
        project_id: Infura project id substituted into gateway URLs

    Returns:
        RPC endpoint URL as string
    """
    settings = NETWORKS[NetworkName.parse(network)]
    override = get_env(settings["rpc_env"], None, env)
    if override is not None:
        return override
    return settings["rpc_endpoint"].replace("{project_id}", project_id)


def list_networks() -> list[str]:
    """List all available network names."""
    return [network.value for network in NETWORKS]

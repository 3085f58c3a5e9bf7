"""Tests for network profile resolution."""

import pytest
from web3 import Web3

from deploykit.credentials import load_infura_secrets
from deploykit.errors import ConfigurationError, CredentialError
from deploykit.loader import load_config
from deploykit.models import NetworkName, NetworkProfile
from deploykit.resolver import resolve


@pytest.mark.parametrize(
    "name, chain_id, network_id",
    [
        ("development", None, "*"),
        ("ropsten", 3, 3),
        ("bsc", 56, 56),
    ],
)
def test_chain_ids(deployment, name, chain_id, network_id):
    profile = deployment.resolve(name)
    assert profile.name is NetworkName(name)
    assert profile.chain_id == chain_id
    assert profile.network_id == network_id


@pytest.mark.parametrize("name", ["mainnet", "", "bsc-testnet", 56])
def test_unknown_network(deployment, name):
    with pytest.raises(ConfigurationError):
        deployment.resolve(name)


def test_name_is_case_insensitive(deployment):
    assert deployment.resolve("  BSC ").name is NetworkName.BSC


def test_bsc_profile(deployment):
    """bsc waits 10 confirmations and builds its provider eagerly."""
    profile = deployment.resolve(NetworkName.BSC)
    assert profile.rpc_endpoint == "https://bsc-dataseed1.binance.org"
    assert profile.required_confirmations == 10
    assert profile.timeout_blocks == 200
    assert profile.skip_dry_run is True
    assert profile.gas is None
    assert isinstance(profile.provider, Web3)
    assert profile.web3() is profile.provider
    assert profile.provider.eth.default_account == profile.require_signer().address


def test_ropsten_profile(deployment):
    """ropsten embeds the Infura project id and builds its provider lazily."""
    profile = deployment.resolve("ropsten")
    assert profile.rpc_endpoint == "https://ropsten.infura.io/v3/abc123"
    assert profile.required_confirmations == 2
    assert profile.timeout_blocks == 200
    assert profile.skip_dry_run is True
    assert profile.gas == 5500000
    assert profile.provider is None
    w3 = profile.web3()
    assert isinstance(w3, Web3)
    assert w3.provider.endpoint_uri == profile.rpc_endpoint
    assert w3.eth.default_account == profile.signer.address


def test_development_profile(deployment):
    profile = deployment.resolve("development")
    assert profile.rpc_endpoint == "http://127.0.0.1:7545"
    assert profile.signer is None
    assert profile.skip_dry_run is False
    assert not profile.requires_signer
    assert profile.to_driver_entry() == {"host": "127.0.0.1", "port": 7545, "network_id": "*"}
    with pytest.raises(CredentialError):
        profile.require_signer()


def test_missing_devkey(tmp_path, secrets_file, env):
    """Credentialed networks fail without the key; development still resolves."""
    deployment = load_config(tmp_path / "absent", secrets_file, env)
    for name in ("ropsten", "bsc"):
        with pytest.raises(CredentialError):
            deployment.resolve(name)
    assert deployment.resolve("development").name is NetworkName.DEVELOPMENT


def test_resolution_is_repeatable(deployment):
    """Resolving twice yields data-identical profiles with fresh providers."""
    first = deployment.resolve("bsc")
    second = deployment.resolve("bsc")
    assert first == second
    assert first.provider is not second.provider


def test_endpoint_override(devkey_file, secrets_file):
    env = {"BSC_RPC": "http://localhost:8545"}.get
    profile = load_config(devkey_file, secrets_file, env).resolve("bsc")
    assert profile.rpc_endpoint == "http://localhost:8545"
    assert profile.chain_id == 56


def test_endpoint_override_with_braces(devkey_file, secrets_file):
    """Overrides are used verbatim, without template substitution."""
    env = {"ROPSTEN_RPC": "https://gw.example/v3/{key}"}.get
    profile = load_config(devkey_file, secrets_file, env).resolve("ropsten")
    assert profile.rpc_endpoint == "https://gw.example/v3/{key}"
    assert profile.chain_id == 3


def test_module_level_resolve(devkey_file, secrets_file):
    secrets = load_infura_secrets(secrets_file)
    profile = resolve("ropsten", devkey_path=devkey_file, secrets=secrets)
    assert profile.chain_id == 3
    assert profile.signer is not None


def test_driver_entry(deployment):
    entry = deployment.resolve("ropsten").to_driver_entry()
    assert entry["network_id"] == 3
    assert entry["gas"] == 5500000
    assert entry["confirmations"] == 2
    assert entry["timeoutBlocks"] == 200
    assert entry["skipDryRun"] is True
    assert callable(entry["provider"])


def test_describe_has_no_key(deployment):
    from conftest import DEVKEY
    summary = deployment.resolve("bsc").describe()
    assert summary["network_id"] == 56
    assert DEVKEY not in repr(summary)


def test_profile_without_provider():
    profile = NetworkProfile(
        name=NetworkName.DEVELOPMENT,
        rpc_endpoint="http://127.0.0.1:7545",
        chain_id=None,
        required_confirmations=0,
        timeout_blocks=50,
        skip_dry_run=False,
    )
    with pytest.raises(ConfigurationError):
        profile.web3()

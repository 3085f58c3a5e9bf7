"""EVM provider construction and connectivity checks."""

from typing import Any, Dict, Optional

from web3 import Web3
from web3.middleware import SignAndSendRawMiddlewareBuilder

from deploykit.errors import ConfigurationError, CredentialError
from deploykit.models import CredentialHandle, NetworkProfile


def build_provider(
    rpc_endpoint: str,
    signer: Optional[CredentialHandle] = None,
    request_kwargs: Optional[Dict[str, Any]] = None,
) -> Web3:
    """
    Build a Web3 instance over HTTP, optionally backed by a signing key.

    No request is sent; connectivity is only checked by ``check_provider``.

    Args:
        rpc_endpoint: HTTP(S) RPC URL
        signer: Key used to sign outgoing transactions
        request_kwargs: Extra keyword arguments for the HTTP session

    Returns:
        Web3 instance
    """
    w3 = Web3(Web3.HTTPProvider(rpc_endpoint, request_kwargs=request_kwargs or {}))

    if signer is not None:
        account = signer.account()
        w3.middleware_onion.inject(SignAndSendRawMiddlewareBuilder.build(account), layer=0)
        w3.eth.default_account = account.address

    return w3


def _get_native_token_symbol(chain_id: int) -> str:
    """Get native token symbol based on chain ID."""
    chain_symbol_map = {
        1: "ETH",      # Ethereum Mainnet
        3: "ETH",      # Ropsten
        56: "BNB",     # BNB Smart Chain (BSC) Mainnet
        97: "BNB",     # BNB Smart Chain (BSC) Testnet
        1337: "ETH",   # Ganache
        5777: "ETH",   # Ganache UI
    }
    return chain_symbol_map.get(chain_id, "ETH")


def check_provider(
    w3: Web3,
    expected_chain_id: Optional[int] = None,
    address: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Check that a provider is reachable and serves the expected chain.

    Args:
        w3: Web3 instance to check
        expected_chain_id: Chain id the endpoint must report, None accepts any
        address: Optional account whose native balance is reported

    Returns:
        Dictionary with chain_id, block_number and, with an address,
        balance and symbol

    Raises:
        ConnectionError: If unable to connect to RPC endpoint
        ConfigurationError: If the endpoint serves a different chain
    """
    endpoint = getattr(w3.provider, "endpoint_uri", None)
    if not w3.is_connected():
        raise ConnectionError(f"Failed to connect to RPC endpoint: {endpoint}")

    chain_id = int(w3.eth.chain_id)
    if expected_chain_id is not None and chain_id != expected_chain_id:
        raise ConfigurationError(
            f"RPC endpoint {endpoint} serves chain {chain_id}, expected {expected_chain_id}"
        )

    info: Dict[str, Any] = {
        "endpoint": endpoint,
        "chain_id": chain_id,
        "block_number": int(w3.eth.block_number),
    }

    if address:
        checksum_address = Web3.to_checksum_address(address)
        balance = w3.eth.get_balance(checksum_address)
        info["address"] = checksum_address
        info["balance"] = Web3.from_wei(balance, "ether")
        info["symbol"] = _get_native_token_symbol(chain_id)

    return info


def check_network(profile: NetworkProfile) -> Dict[str, Any]:
    """Run ``check_provider`` against a resolved network profile."""
    address = profile.signer.address if profile.signer is not None else None
    return check_provider(profile.web3(), profile.chain_id, address)


def derive_address_from_private_key(privkey_str: str) -> Dict[str, str]:
    """
    Derive public key and address from an EVM private key.

    Args:
        privkey_str: Hex private key, with or without 0x

    Returns:
        Dictionary with public_key and checksummed address

    Raises:
        CredentialError: If the key is not 32 bytes of valid hex
    """
    privkey_str = privkey_str.strip()
    # Remove 0x prefix if present
    if privkey_str.lower().startswith("0x"):
        privkey_str = privkey_str[2:]

    try:
        private_key_bytes = bytes.fromhex(privkey_str)
    except ValueError as e:
        raise CredentialError("Private key must be hex encoded.") from e

    handle = CredentialHandle(private_key_bytes)
    return {
        "public_key": handle.public_key,
        "address": handle.address,
    }

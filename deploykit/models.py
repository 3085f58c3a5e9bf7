"""Data models for deploykit."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlparse

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_keys import keys
from web3 import Web3

from deploykit.errors import ConfigurationError, CredentialError

WILDCARD_NETWORK_ID = "*"


class NetworkName(str, Enum):
    """Networks the deployment driver can target."""

    DEVELOPMENT = "development"
    ROPSTEN = "ropsten"
    BSC = "bsc"

    @classmethod
    def parse(cls, name: "str | NetworkName") -> "NetworkName":
        """Return the member for ``name`` or raise ConfigurationError."""
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            raise ConfigurationError(f"Network name must be a string, got {type(name).__name__}")
        try:
            return cls(name.strip().lower())
        except ValueError:
            known = ", ".join(member.value for member in cls)
            raise ConfigurationError(f"Unknown network {name!r} (known networks: {known})") from None


class CredentialHandle:
    """Opaque reference to a signing key.

    Only the derived address and the file the key came from are visible. The
    key itself never appears in ``repr`` and the handle cannot be pickled.
    """

    __slots__ = ("_key", "_address", "source")

    def __init__(self, private_key: bytes, source: str = "") -> None:
        if len(private_key) != 32:
            raise CredentialError("Private key must be 32 bytes (64 hex characters).")
        try:
            account = Account.from_key(private_key)
        except ValueError as e:
            raise CredentialError(f"Invalid private key: {e}") from e
        self._key = private_key
        self._address = account.address
        self.source = source

    @property
    def address(self) -> str:
        """Checksummed address controlled by this key."""
        return self._address

    @property
    def public_key(self) -> str:
        """Uncompressed secp256k1 public key as hex."""
        return keys.PrivateKey(self._key).public_key.to_hex()

    def account(self) -> LocalAccount:
        """Return an eth-account LocalAccount for signing."""
        return Account.from_key(self._key)

    def __repr__(self) -> str:
        return f"CredentialHandle(address={self._address!r}, source={self.source!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CredentialHandle):
            return NotImplemented
        return self._address == other._address

    def __hash__(self) -> int:
        return hash(self._address)

    def __reduce__(self):
        raise TypeError("CredentialHandle cannot be serialized")


@dataclass(frozen=True)
class CompilerProfile:
    """Solidity compiler settings."""
    version: str
    optimizer_enabled: bool
    optimizer_runs: int

    def to_driver_entry(self) -> Dict[str, Any]:
        """Return the ``solc`` entry of the driver's ``compilers`` mapping."""
        return {
            "version": self.version,
            "settings": {
                "optimizer": {
                    "enabled": self.optimizer_enabled,
                    "runs": self.optimizer_runs,
                },
            },
        }


@dataclass(frozen=True)
class InfuraSecrets:
    """Credentials for the Infura RPC gateway."""
    project_id: str
    secret: str = field(repr=False)


@dataclass(frozen=True)
class NetworkProfile:
    """
    Everything needed to connect to and deploy on one network.

    ``chain_id`` is None for networks that accept any chain id. Equality only
    looks at the data fields; the signer and provider objects are ignored.
    """
    name: NetworkName
    rpc_endpoint: str
    chain_id: Optional[int]
    required_confirmations: int
    timeout_blocks: int
    skip_dry_run: bool
    gas: Optional[int] = None
    signer: Optional[CredentialHandle] = field(default=None, compare=False)
    provider: Optional[Web3] = field(default=None, compare=False, repr=False)
    provider_factory: Optional[Callable[[], Web3]] = field(default=None, compare=False, repr=False)

    @property
    def network_id(self) -> "int | str":
        return WILDCARD_NETWORK_ID if self.chain_id is None else self.chain_id

    @property
    def requires_signer(self) -> bool:
        return self.name is not NetworkName.DEVELOPMENT

    def require_signer(self) -> CredentialHandle:
        """Return the signer, failing before anything is signed without one."""
        if self.signer is None:
            raise CredentialError(f"Network {self.name.value!r} has no signing credential")
        return self.signer

    def web3(self) -> Web3:
        """Return the eager provider, or build one from the factory."""
        if self.provider is not None:
            return self.provider
        if self.provider_factory is None:
            raise ConfigurationError(f"Network {self.name.value!r} has no provider")
        return self.provider_factory()

    def to_driver_entry(self) -> Dict[str, Any]:
        """Return this network's entry in the driver's ``networks`` mapping."""
        if self.name is NetworkName.DEVELOPMENT:
            parsed = urlparse(self.rpc_endpoint)
            return {
                "host": parsed.hostname,
                "port": parsed.port,
                "network_id": self.network_id,
            }

        entry: Dict[str, Any] = {
            "provider": self.provider if self.provider is not None else self.provider_factory,
            "network_id": self.network_id,
        }
        if self.gas is not None:
            entry["gas"] = self.gas
        entry["confirmations"] = self.required_confirmations
        entry["timeoutBlocks"] = self.timeout_blocks
        entry["skipDryRun"] = self.skip_dry_run
        return entry

    def describe(self) -> Dict[str, Any]:
        """Display-safe summary of the profile."""
        return {
            "name": self.name.value,
            "rpc_endpoint": self.rpc_endpoint,
            "network_id": self.network_id,
            "confirmations": self.required_confirmations,
            "timeout_blocks": self.timeout_blocks,
            "skip_dry_run": self.skip_dry_run,
            "gas": self.gas,
            "signer": self.signer.address if self.signer is not None else None,
        }

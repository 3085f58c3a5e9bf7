"""Tests for provider construction and connectivity checks."""

from decimal import Decimal
from unittest import mock

import pytest
from web3 import Web3

from deploykit import evm
from deploykit.credentials import load_signing_key
from deploykit.errors import ConfigurationError, CredentialError


def _fake_web3(connected=True, chain_id=56, block_number=1234, balance=0):
    w3 = mock.MagicMock()
    w3.provider.endpoint_uri = "https://rpc.example"
    w3.is_connected.return_value = connected
    w3.eth.chain_id = chain_id
    w3.eth.block_number = block_number
    w3.eth.get_balance.return_value = balance
    return w3


def test_build_provider_without_signer():
    w3 = evm.build_provider("http://127.0.0.1:7545")
    assert isinstance(w3, Web3)
    assert w3.provider.endpoint_uri == "http://127.0.0.1:7545"


def test_build_provider_with_signer(devkey_file):
    signer = load_signing_key(devkey_file)
    w3 = evm.build_provider("https://rpc.example", signer)
    assert w3.eth.default_account == signer.address


def test_check_provider():
    status = evm.check_provider(_fake_web3(), expected_chain_id=56)
    assert status == {"endpoint": "https://rpc.example", "chain_id": 56, "block_number": 1234}


def test_check_provider_with_address(devkey_file):
    signer = load_signing_key(devkey_file)
    w3 = _fake_web3(balance=2 * 10**18)
    status = evm.check_provider(w3, address=signer.address)
    assert status["address"] == signer.address
    assert status["balance"] == Decimal(2)
    assert status["symbol"] == "BNB"
    w3.eth.get_balance.assert_called_once_with(signer.address)


def test_check_provider_unreachable():
    with pytest.raises(ConnectionError, match="rpc.example"):
        evm.check_provider(_fake_web3(connected=False))


def test_check_provider_wrong_chain():
    with pytest.raises(ConfigurationError, match="expected 56"):
        evm.check_provider(_fake_web3(chain_id=97), expected_chain_id=56)


def test_check_network_is_explicit(deployment):
    """Resolution does not contact the endpoint; check_network does."""
    profile = deployment.resolve("development")
    fake = _fake_web3(chain_id=1337)
    with mock.patch.object(evm, "build_provider", return_value=fake) as build:
        status = evm.check_network(profile)
    build.assert_called_once_with("http://127.0.0.1:7545")
    assert status["chain_id"] == 1337
    assert "address" not in status


def test_derive_address_from_private_key(devkey_file):
    """The derived address matches the one the key file resolves to."""
    from conftest import DEVKEY
    signer = load_signing_key(devkey_file)
    info = evm.derive_address_from_private_key("0x" + DEVKEY)
    assert info == {"public_key": signer.public_key, "address": signer.address}
    assert evm.derive_address_from_private_key(DEVKEY) == info


@pytest.mark.parametrize("privkey_str", ["not-hex", "deadbeef", ""])
def test_derive_address_rejects_bad_keys(privkey_str):
    with pytest.raises(CredentialError):
        evm.derive_address_from_private_key(privkey_str)

"""
Tests for network version bytes and the default network
"""
import pytest

from hdkeys.core import XKEYS, InvalidNetworkPrefixes, NetworkMagicMismatch
from hdkeys.data import (BITCOIN, BITCOIN_SEGWIT, BITCOIN_SEGWIT_P2SH, TESTNET, NetworkPrefixes, get_default_network,
                         get_network, register_network, resolve_network, set_default_network)


@pytest.mark.parametrize("private_version, public_version", [
    (b"\x04\x88\xad", XKEYS.BIP44_XPUB),
    (XKEYS.BIP44_XPRV, b"\x04\x88\xb2\x1e\x00"),
    ("0488ade4", XKEYS.BIP44_XPUB),
    (XKEYS.BIP44_XPRV, XKEYS.BIP44_XPRV),
])
def test_invalid_prefixes(private_version, public_version):
    with pytest.raises(InvalidNetworkPrefixes):
        NetworkPrefixes("broken", private_version, public_version)


def test_known_networks():
    assert BITCOIN.hd_private_version.hex() == "0488ade4"
    assert BITCOIN.hd_public_version.hex() == "0488b21e"
    assert TESTNET.hd_private_version.hex() == "04358394"
    assert TESTNET.hd_public_version.hex() == "043587cf"
    assert BITCOIN_SEGWIT_P2SH.version(private=True).hex() == "049d7878"
    assert BITCOIN_SEGWIT.version(private=False).hex() == "04b24746"

    assert get_network("bitcoin") is BITCOIN
    assert get_network("testnet") is TESTNET
    with pytest.raises(InvalidNetworkPrefixes):
        get_network("dogecoin")


def test_is_private_version():
    assert TESTNET.is_private_version(XKEYS.TESTNET_PRIVATE)
    assert not TESTNET.is_private_version(XKEYS.TESTNET_PUBLIC)
    with pytest.raises(NetworkMagicMismatch):
        TESTNET.is_private_version(XKEYS.BIP44_XPRV)


def test_register_network():
    custom = register_network(NetworkPrefixes("regtest_custom", b"\x01\x02\x03\x04", b"\x01\x02\x03\x05"))
    assert get_network("regtest_custom") is custom
    with pytest.raises(InvalidNetworkPrefixes):
        register_network("regtest_custom")


def test_default_network():
    assert get_default_network() is BITCOIN
    assert resolve_network() is BITCOIN

    assert set_default_network("testnet") is TESTNET
    assert get_default_network() is TESTNET
    assert resolve_network(None) is TESTNET
    assert resolve_network(BITCOIN) is BITCOIN
    assert resolve_network("bitcoin_segwit") is BITCOIN_SEGWIT

    with pytest.raises(InvalidNetworkPrefixes):
        resolve_network(b"\x04\x88\xad\xe4")

"""
HD version bytes per network, and the process-wide default network.

Every serialization call takes an explicit network. The default exists for convenience only: set it once during
start-up with set_default_network() and pass a network explicitly wherever a different one is wanted.
"""
from dataclasses import dataclass

from hdkeys.core import InvalidNetworkPrefixes, NetworkMagicMismatch, XKEYS, get_logger

logger = get_logger(__name__)

__all__ = ["NetworkPrefixes", "BITCOIN", "TESTNET", "BITCOIN_SEGWIT_P2SH", "BITCOIN_SEGWIT", "get_network",
           "register_network", "get_default_network", "set_default_network", "resolve_network"]


@dataclass(frozen=True, slots=True)
class NetworkPrefixes:
    """Immutable extended key version bytes for one network."""
    name: str
    hd_private_version: bytes
    hd_public_version: bytes

    def __post_init__(self):
        for label, version in (("private", self.hd_private_version), ("public", self.hd_public_version)):
            if not isinstance(version, bytes) or len(version) != XKEYS.VERSION_BYTES:
                raise InvalidNetworkPrefixes(
                    f"Network {self.name!r} must define a {XKEYS.VERSION_BYTES}-byte HD {label} version"
                )
        if self.hd_private_version == self.hd_public_version:
            raise InvalidNetworkPrefixes(f"Network {self.name!r} uses the same HD private and public version")

    def version(self, private: bool) -> bytes:
        return self.hd_private_version if private else self.hd_public_version

    def is_private_version(self, version: bytes) -> bool:
        """
        Returns True for the private version and False for the public version. Any other version raises
        NetworkMagicMismatch.
        """
        if version == self.hd_private_version:
            return True
        if version == self.hd_public_version:
            return False
        raise NetworkMagicMismatch(
            f"HD key magic bytes {version.hex()} do not match {self.name} network magic bytes"
        )


BITCOIN = NetworkPrefixes("bitcoin", XKEYS.BIP44_XPRV, XKEYS.BIP44_XPUB)
TESTNET = NetworkPrefixes("testnet", XKEYS.TESTNET_PRIVATE, XKEYS.TESTNET_PUBLIC)
BITCOIN_SEGWIT_P2SH = NetworkPrefixes("bitcoin_segwit_p2sh", XKEYS.BIP49_XPRV, XKEYS.BIP49_XPUB)
BITCOIN_SEGWIT = NetworkPrefixes("bitcoin_segwit", XKEYS.BIP84_XPRV, XKEYS.BIP84_XPUB)

_NETWORKS = {network.name: network for network in (BITCOIN, TESTNET, BITCOIN_SEGWIT_P2SH, BITCOIN_SEGWIT)}
_default_network = BITCOIN


def register_network(network: NetworkPrefixes) -> NetworkPrefixes:
    """Add a custom network to the registry"""
    if not isinstance(network, NetworkPrefixes):
        raise InvalidNetworkPrefixes(f"Expected NetworkPrefixes but received: {type(network)}")
    _NETWORKS[network.name] = network
    logger.debug(f"Registered network {network.name}")
    return network


def get_network(name: str) -> NetworkPrefixes:
    if name not in _NETWORKS:
        raise InvalidNetworkPrefixes(f"Unknown network: {name}")
    return _NETWORKS[name]


def get_default_network() -> NetworkPrefixes:
    return _default_network


def set_default_network(network: NetworkPrefixes | str) -> NetworkPrefixes:
    """
    One-time initialization of the process default network. Accepts a NetworkPrefixes or a registered name.
    """
    global _default_network
    _default_network = resolve_network(network)
    logger.debug(f"Default network set to {_default_network.name}")
    return _default_network


def resolve_network(network: NetworkPrefixes | str | None = None) -> NetworkPrefixes:
    """Map an explicit network, a registered network name or None (the default network) to NetworkPrefixes"""
    if network is None:
        return _default_network
    if isinstance(network, str):
        return get_network(network)
    if isinstance(network, NetworkPrefixes):
        return network
    raise InvalidNetworkPrefixes(f"Expected NetworkPrefixes or network name but received: {type(network)}")

"""
The BIP32 standard formats
"""
from typing import Final

__all__ = ["ECC", "XKEYS"]


class ECC:
    COORD_BYTES: Final[int] = 32
    COMPRESSED_BYTES: Final[int] = 33
    UNCOMPRESSED_BYTES: Final[int] = 65


class XKEYS:
    """
    Constants related to the extended public and private keys
    """
    SEED_KEY: Final[bytes] = b'Bitcoin seed'
    MASTER_SEED_BYTES: Final[int] = 64
    CHAIN_LENGTH: Final[int] = 32
    FINGERPRINT_BYTES: Final[int] = 4
    MAX_DEPTH: Final[int] = 255

    # Serialized payload: version(4) || depth(1) || fingerprint(4) || index(4) || chain code(32) || key data(33)
    VERSION_BYTES: Final[int] = 4
    DEPTH_BYTES: Final[int] = 1
    INDEX_BYTES: Final[int] = 4
    KEY_DATA_BYTES: Final[int] = 33
    SERIALIZED_BYTES: Final[int] = 78
    CHECKSUM_BYTES: Final[int] = 4
    PRIVATE_PREFIX: Final[bytes] = b'\x00'

    # Version bytes for different key types
    TESTNET_PRIVATE: Final[bytes] = bytes.fromhex("04358394")
    TESTNET_PUBLIC: Final[bytes] = bytes.fromhex("043587cf")
    BIP44_XPRV: Final[bytes] = bytes.fromhex("0488ade4")
    BIP44_XPUB: Final[bytes] = bytes.fromhex("0488b21e")
    BIP49_XPRV: Final[bytes] = bytes.fromhex("049d7878")
    BIP49_XPUB: Final[bytes] = bytes.fromhex("049d7cb2")
    BIP84_XPRV: Final[bytes] = bytes.fromhex("04b2430c")
    BIP84_XPUB: Final[bytes] = bytes.fromhex("04b24746")

    # Hardened derivation threshold
    HARDENED_OFFSET: Final[int] = 0x80000000
    MAX_INDEX: Final[int] = 0xffffffff

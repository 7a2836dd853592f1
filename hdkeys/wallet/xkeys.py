"""
Extended Keys (xpub/xprv) Implementation
Implements BIP32 Hierarchical Deterministic Wallet key derivation

An ExtendedKey is one node of the key tree. Nodes are immutable: derivation always returns a new node, and a child
only records its parent's fingerprint, never a reference to the parent itself.
"""
import json
from dataclasses import dataclass, field
from functools import cached_property
from io import BytesIO
from secrets import token_bytes

from hdkeys.core import (ExtendedKeyError, HardenedDerivationRequiresPrivateKey, IndexOverflow, InvalidScalarOrPoint,
                         InvalidSerializedLength, MissingPrivateMaterial, ReadError, UnsupportedUncompressedKey, ECC,
                         XKEYS, get_logger, get_stream, read_big_int, read_stream)
from hdkeys.cryptography import DEFAULT_CURVE, CurveAdapter, Scalar, hash160, hmac_sha512
from hdkeys.data import NetworkPrefixes, PrivateKey, PubKey, decode_base58check, encode_base58check, resolve_network
from hdkeys.wallet.derivation import decode_path, is_hardened_index

__all__ = ["ExtendedKey"]

logger = get_logger(__name__)

SEED_KEY = XKEYS.SEED_KEY
NETWORK = NetworkPrefixes | str | None


@dataclass(frozen=True, repr=False)
class ExtendedKey:
    """
    A node of the BIP32 key tree.

    Args:
        curve: Curve backend used for point arithmetic (None selects the default backend)
        depth: Depth in the derivation path, 0 for a master key
        parent_fingerprint: Fingerprint of the parent key as a 32-bit integer, 0 for a master key
        child_number: Child index this key was derived at, high bit set for hardened children
        chain_code: Chain code for key derivation (32 bytes)
        key_data: A 32-byte private scalar, a 33-byte compressed public key, or a compressed PrivateKey/PubKey
    """
    curve: CurveAdapter = field(compare=False)
    depth: int
    parent_fingerprint: int
    child_number: int
    chain_code: bytes
    key_data: bytes

    def __post_init__(self):
        if self.curve is None:
            object.__setattr__(self, "curve", DEFAULT_CURVE)

        # --- Validation --- #
        if not isinstance(self.depth, int) or not 0 <= self.depth <= XKEYS.MAX_DEPTH:
            raise ExtendedKeyError(f"Depth must be between 0 and {XKEYS.MAX_DEPTH}")
        if not isinstance(self.parent_fingerprint, int) or not 0 <= self.parent_fingerprint <= XKEYS.MAX_INDEX:
            raise ExtendedKeyError("Parent fingerprint must be a 32-bit integer")
        if not isinstance(self.child_number, int) or not 0 <= self.child_number <= XKEYS.MAX_INDEX:
            raise ExtendedKeyError("Child number must be a 32-bit integer")
        if not isinstance(self.chain_code, bytes) or len(self.chain_code) != XKEYS.CHAIN_LENGTH:
            raise ExtendedKeyError(f"Chain code must be {XKEYS.CHAIN_LENGTH} bytes")
        if self.depth == 0 and (self.parent_fingerprint != 0 or self.child_number != 0):
            raise ExtendedKeyError("Master key must have zero parent fingerprint and child number")

        object.__setattr__(self, "key_data", self._normalize_key_data(self.key_data))

    def _normalize_key_data(self, key_data) -> bytes:
        """
        Reduce key material to a 32-byte scalar or a 33-byte compressed point, rejecting uncompressed keys
        """
        if isinstance(key_data, PrivateKey):
            if not key_data.compressed:
                raise UnsupportedUncompressedKey("An ExtendedKey must always be compressed")
            key_data = key_data.to_bytes()
        elif isinstance(key_data, PubKey):
            if not key_data.is_compressed:
                raise UnsupportedUncompressedKey("An ExtendedKey must always be compressed")
            key_data = key_data.compressed()

        if not isinstance(key_data, bytes):
            raise InvalidScalarOrPoint(f"Unsupported key data type: {type(key_data)}")

        if len(key_data) == ECC.COORD_BYTES:
            if not Scalar.from_bytes(key_data, self.curve.order).is_valid:
                raise InvalidScalarOrPoint("Private key out of range for curve order")
        elif len(key_data) == ECC.UNCOMPRESSED_BYTES:
            raise UnsupportedUncompressedKey("An ExtendedKey must always be compressed")
        elif len(key_data) == ECC.COMPRESSED_BYTES:
            if key_data[0] not in (0x02, 0x03) or not self.curve.is_valid_point(key_data):
                raise InvalidScalarOrPoint("Public key is not a valid compressed curve point")
        else:
            raise InvalidScalarOrPoint(f"Key data of {len(key_data)} bytes is neither a private nor a public key")

        return key_data

    # --- OVERRIDES --- #
    def __repr__(self):
        key_type = "private" if self.is_private else "public"
        return (f"ExtendedKey({key_type}, depth={self.depth}, child_number={self.child_number}, "
                f"parent_fingerprint={self.parent_fingerprint:08x})")

    # --- PROPERTIES --- #
    @property
    def is_private(self) -> bool:
        return len(self.key_data) == ECC.COORD_BYTES

    @property
    def is_public(self) -> bool:
        return not self.is_private

    @property
    def is_hardened(self) -> bool:
        return is_hardened_index(self.child_number)

    @property
    def _scalar(self) -> Scalar:
        return Scalar.from_bytes(self.private_key(), self.curve.order)

    @cached_property
    def _public_key(self) -> bytes:
        if self.is_private:
            return self.curve.scalar_multiply_base(self._scalar.value)
        return self.key_data

    # --- KEYS --- #
    def private_key(self) -> bytes:
        """
        Returns the 32-byte private scalar
        """
        if not self.is_private:
            raise MissingPrivateMaterial("Public extended key has no private key")
        return self.key_data

    def public_key(self) -> bytes:
        """
        Returns the 33-byte compressed public key
        """
        return self._public_key

    def fingerprint_bytes(self) -> bytes:
        return hash160(self.public_key())[:XKEYS.FINGERPRINT_BYTES]

    def fingerprint(self) -> int:
        """
        The first 4 bytes of HASH160(compressed public key), used as the parent fingerprint of every child
        """
        return int.from_bytes(self.fingerprint_bytes(), "big")

    def to_public(self) -> "ExtendedKey":
        """
        Return the corresponding public ExtendedKey
        """
        if self.is_public:
            return self
        return ExtendedKey(self.curve, self.depth, self.parent_fingerprint, self.child_number, self.chain_code,
                           self.public_key())

    # --- DERIVATION --- #
    def derive_child(self, index: int) -> "ExtendedKey":
        """
        Derive the child at the given index. Indices >= 2^31 are hardened and need the private key.

        An invalid child (IL >= n, a zero private key or the point at infinity) raises InvalidScalarOrPoint. Moving
        on to index + 1 is left to the caller.
        """
        # --- Validate --- #
        if not isinstance(index, int) or not 0 <= index <= XKEYS.MAX_INDEX:
            raise IndexOverflow(f"Child index {index} does not fit in 32 bits")
        if self.depth >= XKEYS.MAX_DEPTH:
            raise ExtendedKeyError(f"Cannot derive beyond depth {XKEYS.MAX_DEPTH}")

        # --- Prepare data for HMAC --- #
        index_bytes = index.to_bytes(XKEYS.INDEX_BYTES, "big")
        if is_hardened_index(index):
            if self.is_public:
                raise HardenedDerivationRequiresPrivateKey("Cannot derive hardened child from public key")
            data = XKEYS.PRIVATE_PREFIX + self.key_data + index_bytes
        else:
            data = self.public_key() + index_bytes

        # --- HMAC SHA512 --- #
        key_hash = hmac_sha512(key=self.chain_code, message=data)
        tweak = Scalar.from_bytes(key_hash[:32], self.curve.order)
        child_chain_code = key_hash[32:]

        if tweak.value >= self.curve.order:
            raise InvalidScalarOrPoint(f"Derived tweak for index {index} is not less than the curve order")

        # --- Child key --- #
        if self.is_private:
            child_scalar = tweak.add_mod(self._scalar)
            if child_scalar.value == 0:
                raise InvalidScalarOrPoint(f"Derived private key for index {index} is zero")
            child_key_data = child_scalar.to_bytes()
        elif tweak.value == 0:
            child_key_data = self.public_key()
        else:
            child_key_data = self.curve.point_add(self.curve.scalar_multiply_base(tweak.value), self.public_key())

        logger.debug(f"Derived child {index} at depth {self.depth + 1}")
        return ExtendedKey(
            self.curve,
            depth=self.depth + 1,
            parent_fingerprint=self.fingerprint(),
            child_number=index,
            chain_code=child_chain_code,
            key_data=child_key_data
        )

    def derive_path(self, path: str) -> "ExtendedKey":
        """
        Derive along a path such as "m/44'/0'/0'/0/0", relative to this key
        """
        key = self
        for index in decode_path(path):
            key = key.derive_child(index)
        return key

    # --- SERIALIZATION --- #
    def to_bytes(self, network: NETWORK = None, private: bool | None = None) -> bytes:
        """
        returns the 78-byte serialized key
        version || depth || parent fingerprint || index || chain code || key data
        """
        private = self.is_private if private is None else private
        if private and not self.is_private:
            raise MissingPrivateMaterial("Cannot serialize a public extended key as private")

        network = resolve_network(network)
        key_data = XKEYS.PRIVATE_PREFIX + self.key_data if private else self.public_key()
        parts = [
            network.version(private),
            self.depth.to_bytes(XKEYS.DEPTH_BYTES, "big"),
            self.parent_fingerprint.to_bytes(XKEYS.FINGERPRINT_BYTES, "big"),
            self.child_number.to_bytes(XKEYS.INDEX_BYTES, "big"),
            self.chain_code,
            key_data
        ]
        return b''.join(parts)

    def serialize(self, network: NETWORK = None) -> str:
        """
        The base58check extended key, private if this key holds a private key
        """
        return encode_base58check(self.to_bytes(network))

    def serialize_private(self, network: NETWORK = None) -> str:
        return encode_base58check(self.to_bytes(network, private=True))

    def serialize_public(self, network: NETWORK = None) -> str:
        return encode_base58check(self.to_bytes(network, private=False))

    # --- CONSTRUCTION --- #
    @classmethod
    def generate_master(cls, curve: CurveAdapter | None = None) -> "ExtendedKey":
        """
        Create a master key from 64 bytes of fresh randomness
        """
        return cls.from_seed(token_bytes(XKEYS.MASTER_SEED_BYTES), curve)

    @classmethod
    def from_seed(cls, seed: bytes, curve: CurveAdapter | None = None) -> "ExtendedKey":
        # 1. Run the HMAC-512
        seed_hash = hmac_sha512(key=SEED_KEY, message=seed)

        # 2. Get private key and chain code
        privkey, chain_code = seed_hash[:32], seed_hash[32:]

        # 3. Use 0 values for remaining params. An out of range private key raises InvalidScalarOrPoint
        master = cls(curve, depth=0, parent_fingerprint=0, child_number=0, chain_code=chain_code, key_data=privkey)
        logger.debug(f"Created master key from {len(seed)}-byte seed")
        return master

    @classmethod
    def from_serialized(cls, extended_key: str, network: NETWORK = None,
                        curve: CurveAdapter | None = None) -> "ExtendedKey":
        """
        Given a base58check xprv/xpub string, we verify the checksum and decode it
        """
        return cls.from_bytes(decode_base58check(extended_key), network, curve)

    @classmethod
    def from_bytes(cls, byte_stream: bytes | bytearray | BytesIO, network: NETWORK = None,
                   curve: CurveAdapter | None = None) -> "ExtendedKey":
        """
        We read in the 78-byte serialized extended key and check its version against the network
        """
        if isinstance(byte_stream, bytearray):
            byte_stream = bytes(byte_stream)
        if isinstance(byte_stream, bytes) and len(byte_stream) != XKEYS.SERIALIZED_BYTES:
            raise InvalidSerializedLength(
                f"Serialized extended key must be {XKEYS.SERIALIZED_BYTES} bytes, got {len(byte_stream)}"
            )
        stream = get_stream(byte_stream)
        network = resolve_network(network)

        # Get parts
        try:
            version = read_stream(stream, XKEYS.VERSION_BYTES, "version")
            is_private = network.is_private_version(version)
            depth = read_big_int(stream, XKEYS.DEPTH_BYTES, "depth")
            parent_fingerprint = read_big_int(stream, XKEYS.FINGERPRINT_BYTES, "parent_fingerprint")
            child_number = read_big_int(stream, XKEYS.INDEX_BYTES, "index")
            chain_code = read_stream(stream, XKEYS.CHAIN_LENGTH, "chain_code")
            key_data = read_stream(stream, XKEYS.KEY_DATA_BYTES, "key_data")
        except ReadError as e:
            raise InvalidSerializedLength(
                f"Serialized extended key is shorter than {XKEYS.SERIALIZED_BYTES} bytes"
            ) from e

        if stream.read(1):
            raise InvalidSerializedLength(f"Serialized extended key is longer than {XKEYS.SERIALIZED_BYTES} bytes")

        # A 0x00 lead byte marks a private key
        if key_data[:1] == XKEYS.PRIVATE_PREFIX:
            if not is_private:
                raise InvalidScalarOrPoint("Public version bytes with private key data")
            key_data = key_data[1:]
        elif is_private:
            raise InvalidScalarOrPoint("Private version bytes with public key data")

        logger.debug(f"Decoded {network.name} extended key at depth {depth}")
        return cls(curve, depth, parent_fingerprint, child_number, chain_code, key_data)

    # --- DISPLAY --- #
    def to_dict(self, network: NETWORK = None):
        first_key = "prvkey" if self.is_private else "pubkey"
        return {
            first_key: self.key_data.hex(),
            "chain_code": self.chain_code.hex(),
            "depth": self.depth,
            "parent_fingerprint": f"{self.parent_fingerprint:08x}",
            "child_number": self.child_number,
            "fingerprint": self.fingerprint_bytes().hex(),
            "serialized": self.serialize(network)
        }

    def to_json(self, network: NETWORK = None):
        return json.dumps(self.to_dict(network), indent=2)

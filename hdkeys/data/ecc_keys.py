"""
Private and public key values carrying their SEC1 compression flag
"""
import json

from hdkeys.core import ECC, InvalidScalarOrPoint
from hdkeys.cryptography import SECP256K1, Point, PythonCurve, encode_point

__all__ = ["PrivateKey", "PubKey"]

_CURVE = PythonCurve(SECP256K1)


class PrivateKey:
    """
    A secp256k1 private scalar. The compressed flag records which public key encoding the key is used with.
    """
    __slots__ = ("secret", "compressed")

    def __init__(self, secret: int | bytes, compressed: bool = True):
        if isinstance(secret, bytes):
            if len(secret) != ECC.COORD_BYTES:
                raise InvalidScalarOrPoint(f"Private key must be {ECC.COORD_BYTES} bytes")
            secret = int.from_bytes(secret, "big")
        if not _CURVE.is_valid_scalar(secret):
            raise InvalidScalarOrPoint("Private key out of range for curve order")

        self.secret = secret
        self.compressed = compressed

    def __eq__(self, other) -> bool:
        if not isinstance(other, PrivateKey):
            return NotImplemented
        return self.secret == other.secret and self.compressed == other.compressed

    def __hash__(self) -> int:
        return hash((self.secret, self.compressed))

    def __repr__(self):
        return f"PrivateKey(compressed={self.compressed})"

    def to_bytes(self) -> bytes:
        return self.secret.to_bytes(ECC.COORD_BYTES, "big")

    def pubkey(self) -> "PubKey":
        return PubKey(self.secret, compressed=self.compressed)


class PubKey:
    """
    Used for serializing a public key
    """
    __slots__ = ("x", "y", "is_compressed")

    def __init__(self, private_key: int | bytes, compressed: bool = True):
        private_key = int.from_bytes(private_key, "big") if isinstance(private_key, bytes) else private_key
        if not _CURVE.is_valid_scalar(private_key):
            raise InvalidScalarOrPoint("Private key out of range for curve order")
        self.x, self.y = SECP256K1.multiply_generator(private_key)
        self.is_compressed = compressed

    # --- OVERRIDES --- #
    def __eq__(self, other) -> bool:
        if not isinstance(other, PubKey):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __repr__(self):
        return f"PubKey({self.compressed().hex()}, is_compressed={self.is_compressed})"

    # --- CLASS METHODS --- #
    @classmethod
    def from_point(cls, point: Point, compressed: bool = True):
        if not point or not SECP256K1.is_point_on_curve(point):
            raise InvalidScalarOrPoint("Given point not on SECP256K1 curve")

        obj = object.__new__(cls)  # bypass __init__
        obj.x, obj.y = point
        obj.is_compressed = compressed
        return obj

    @classmethod
    def from_bytes(cls, pubkey_bytes: bytes):
        """
        Parse a SEC1 public key. The encoding used is remembered in is_compressed.
        """
        point = _CURVE.decode_point(pubkey_bytes)
        return cls.from_point(point, compressed=len(pubkey_bytes) == ECC.COMPRESSED_BYTES)

    # --- FORMATTING --- #
    def compressed(self) -> bytes:
        return encode_point(self.to_point())

    def uncompressed(self) -> bytes:
        return b'\x04' + self.x.to_bytes(ECC.COORD_BYTES, "big") + self.y.to_bytes(ECC.COORD_BYTES, "big")

    def to_bytes(self) -> bytes:
        """The public key in the encoding it was created with"""
        return self.compressed() if self.is_compressed else self.uncompressed()

    def to_point(self) -> Point:
        return Point(self.x, self.y)

    # --- DISPLAY --- #
    def to_dict(self):
        return {
            "x": hex(self.x),
            "y": hex(self.y),
            "compressed": self.compressed().hex(),
            "uncompressed": self.uncompressed().hex(),
            "is_compressed": self.is_compressed
        }

    def to_json(self):
        return json.dumps(self.to_dict(), indent=2)

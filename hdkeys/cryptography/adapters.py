"""
Interchangeable secp256k1 backends for key derivation.

Keys cross the backend boundary as SEC1 encoded bytes (33-byte compressed or 65-byte uncompressed points) and as
integer scalars, so an ExtendedKey never depends on a particular point type. A backend is injected into each key at
construction time:

    PythonCurve  -- the pure-Python affine curve in ecc.py
    OpenSSLCurve -- OpenSSL through the `cryptography` package for generator multiplication and point decoding
"""
from typing import Protocol, runtime_checkable

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from hdkeys.core import ECC, InvalidScalarOrPoint, UnknownCurveBackend, get_logger
from hdkeys.cryptography.ecc import SECP256K1, EllipticCurve, Point

__all__ = ["CurveAdapter", "PythonCurve", "OpenSSLCurve", "DEFAULT_CURVE", "get_curve", "encode_point"]

logger = get_logger(__name__)


@runtime_checkable
class CurveAdapter(Protocol):
    """The curve capability consumed by ExtendedKey"""
    name: str
    order: int

    def is_valid_scalar(self, scalar: int) -> bool: ...

    def is_valid_point(self, point: bytes) -> bool: ...

    def scalar_multiply_base(self, scalar: int) -> bytes: ...

    def point_add(self, point1: bytes, point2: bytes) -> bytes: ...

    def compress(self, point: bytes) -> bytes: ...


def encode_point(point: Point) -> bytes:
    """Compressed SEC1 encoding of an affine point"""
    if not point:
        raise InvalidScalarOrPoint("Cannot encode the point at infinity")
    prefix = b'\x03' if point.y & 1 else b'\x02'
    return prefix + point.x.to_bytes(ECC.COORD_BYTES, "big")


class PythonCurve:
    """
    Pure-Python backend over an EllipticCurve instance
    """
    name = "python"

    def __init__(self, curve: EllipticCurve = SECP256K1):
        self.curve = curve
        self.order = curve.order

    def __repr__(self):
        return f"PythonCurve({self.curve.curve})"

    def decode_point(self, point: bytes) -> Point:
        """Parse a compressed or uncompressed SEC1 point and check it lies on the curve"""
        if len(point) == ECC.COMPRESSED_BYTES and point[0] in (0x02, 0x03):
            x = int.from_bytes(point[1:], "big")
            if not 0 < x < self.curve.p or not self.curve.is_x_on_curve(x):
                raise InvalidScalarOrPoint("Compressed point x coordinate not on curve")
            return Point(x, self.curve.find_y_from_x(x, odd=point[0] == 0x03))

        if len(point) == ECC.UNCOMPRESSED_BYTES and point[0] == 0x04:
            decoded = Point(int.from_bytes(point[1:33], "big"), int.from_bytes(point[33:], "big"))
            if not self.curve.is_point_on_curve(decoded):
                raise InvalidScalarOrPoint("Uncompressed point not on curve")
            return decoded

        raise InvalidScalarOrPoint("Unrecognized point encoding")

    def is_valid_scalar(self, scalar: int) -> bool:
        return 0 < scalar < self.order

    def is_valid_point(self, point: bytes) -> bool:
        try:
            self.decode_point(point)
        except InvalidScalarOrPoint:
            return False
        return True

    def scalar_multiply_base(self, scalar: int) -> bytes:
        if not self.is_valid_scalar(scalar):
            raise InvalidScalarOrPoint("Scalar out of range for curve order")
        return encode_point(self.curve.multiply_generator(scalar))

    def point_add(self, point1: bytes, point2: bytes) -> bytes:
        total = self.curve.add_points(self.decode_point(point1), self.decode_point(point2))
        if not total:
            raise InvalidScalarOrPoint("Point addition resulted in the point at infinity")
        return encode_point(total)

    def compress(self, point: bytes) -> bytes:
        return encode_point(self.decode_point(point))


class OpenSSLCurve:
    """
    OpenSSL backend. OpenSSL has no public point addition, so addition decodes both points through OpenSSL and adds
    the affine coordinates on the pure curve.
    """
    name = "openssl"

    def __init__(self):
        self._ec_curve = ec.SECP256K1()
        self.order = SECP256K1.order

    def __repr__(self):
        return "OpenSSLCurve(secp256k1)"

    def _load(self, point: bytes) -> ec.EllipticCurvePublicKey:
        if len(point) not in (ECC.COMPRESSED_BYTES, ECC.UNCOMPRESSED_BYTES):
            raise InvalidScalarOrPoint("Unrecognized point encoding")
        try:
            return ec.EllipticCurvePublicKey.from_encoded_point(self._ec_curve, point)
        except ValueError as e:
            raise InvalidScalarOrPoint(f"Invalid curve point: {e}") from e

    @staticmethod
    def _to_compressed(public_key: ec.EllipticCurvePublicKey) -> bytes:
        return public_key.public_bytes(
            encoding=serialization.Encoding.X962,
            format=serialization.PublicFormat.CompressedPoint
        )

    def is_valid_scalar(self, scalar: int) -> bool:
        return 0 < scalar < self.order

    def is_valid_point(self, point: bytes) -> bool:
        try:
            self._load(point)
        except InvalidScalarOrPoint:
            return False
        return True

    def scalar_multiply_base(self, scalar: int) -> bytes:
        if not self.is_valid_scalar(scalar):
            raise InvalidScalarOrPoint("Scalar out of range for curve order")
        private_key = ec.derive_private_key(scalar, self._ec_curve)
        return self._to_compressed(private_key.public_key())

    def point_add(self, point1: bytes, point2: bytes) -> bytes:
        numbers1 = self._load(point1).public_numbers()
        numbers2 = self._load(point2).public_numbers()
        total = SECP256K1.add_points(Point(numbers1.x, numbers1.y), Point(numbers2.x, numbers2.y))
        if not total:
            raise InvalidScalarOrPoint("Point addition resulted in the point at infinity")
        return encode_point(total)

    def compress(self, point: bytes) -> bytes:
        return self._to_compressed(self._load(point))


# --- BACKEND REGISTRY --- #
_CURVES = {
    PythonCurve.name: PythonCurve(),
    OpenSSLCurve.name: OpenSSLCurve(),
}

DEFAULT_CURVE = _CURVES[PythonCurve.name]


def get_curve(name: str | None = None) -> CurveAdapter:
    """Return the named backend, or the default backend for None"""
    if name is None:
        return DEFAULT_CURVE
    if name not in _CURVES:
        logger.error(f"Unknown curve backend requested: {name}")
        raise UnknownCurveBackend(f"Unknown curve backend: {name}. Available: {sorted(_CURVES)}")
    return _CURVES[name]

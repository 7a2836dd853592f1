"""
Fixed-width 256-bit scalars reduced modulo a curve order
"""
from dataclasses import dataclass

from hdkeys.core import ECC, InvalidScalarOrPoint

__all__ = ["Scalar"]

_MAX_SCALAR = 1 << (8 * ECC.COORD_BYTES)


@dataclass(frozen=True)
class Scalar:
    """
    An unsigned 256-bit value tied to the order of the group it lives in. Arithmetic is always reduced
    explicitly modulo the order; the value itself never exceeds 256 bits.
    """
    value: int
    order: int

    def __post_init__(self):
        if not 0 <= self.value < _MAX_SCALAR:
            raise InvalidScalarOrPoint("Scalar does not fit in 256 bits")

    def __int__(self) -> int:
        return self.value

    @classmethod
    def from_bytes(cls, data: bytes, order: int) -> "Scalar":
        if len(data) != ECC.COORD_BYTES:
            raise InvalidScalarOrPoint(f"Scalar must be {ECC.COORD_BYTES} bytes")
        return cls(int.from_bytes(data, "big"), order)

    def to_bytes(self) -> bytes:
        return self.value.to_bytes(ECC.COORD_BYTES, "big")

    @property
    def is_valid(self) -> bool:
        """A usable private key satisfies 0 < value < order"""
        return 0 < self.value < self.order

    def add_mod(self, other: "Scalar") -> "Scalar":
        """(self + other) mod order"""
        if other.order != self.order:
            raise ValueError("Cannot add scalars from groups of different order")
        return Scalar((self.value + other.value) % self.order, self.order)

"""
Derivation path grammar for the key tree, and the standard BIP43 purpose paths

    m/44'/0'/0'/0/0  <->  [0x8000002c, 0x80000000, 0x80000000, 0, 0]
"""
import re
from enum import Enum
from typing import Iterable

from hdkeys.core import IndexOverflow, InvalidPathSyntax, XKEYS

__all__ = ["DerivationPath", "decode_path", "encode_path", "harden", "is_hardened_index"]

HARDENED_MARKERS = "'hH"
_SEGMENT = re.compile(r"([0-9]+)([" + HARDENED_MARKERS + r"]?)")


def is_hardened_index(index: int) -> bool:
    return index >= XKEYS.HARDENED_OFFSET


def harden(index: int) -> int:
    """
    Returns the hardened form of a non-hardened index. Hardening an index that is already hardened would overflow
    32 bits, so it raises IndexOverflow.
    """
    if not 0 <= index < XKEYS.HARDENED_OFFSET:
        raise IndexOverflow(f"Index {index} cannot be hardened. Must be less than {XKEYS.HARDENED_OFFSET}")
    return index + XKEYS.HARDENED_OFFSET


def decode_path(path: str) -> list[int]:
    """
    Parse a derivation path into its child indices.

    Segments are separated by '/'. A leading 'm' is optional and ignored. Each remaining segment is a decimal index
    below 2^31, followed by an optional hardened marker (' or h or H).
    """
    if not isinstance(path, str) or path == "":
        raise InvalidPathSyntax("Derivation path must be a non-empty string")

    segments = path.split("/")
    if segments[0] in ("m", "M"):
        segments = segments[1:]

    indices = []
    for segment in segments:
        match = _SEGMENT.fullmatch(segment)
        if match is None:
            raise InvalidPathSyntax(f"Invalid path segment {segment!r} in {path!r}")

        number, marker = match.groups()
        index = int(number)
        if index >= XKEYS.HARDENED_OFFSET:
            raise InvalidPathSyntax(f"Path segment {segment!r} must be less than {XKEYS.HARDENED_OFFSET}")

        indices.append(harden(index) if marker else index)

    return indices


def encode_path(indices: Iterable[int]) -> str:
    """
    Render child indices as a path string, marking hardened indices with an apostrophe
    """
    segments = ["m"]
    for index in indices:
        if not 0 <= index <= XKEYS.MAX_INDEX:
            raise IndexOverflow(f"Index {index} does not fit in 32 bits")
        if is_hardened_index(index):
            segments.append(f"{index - XKEYS.HARDENED_OFFSET}'")
        else:
            segments.append(str(index))
    return "/".join(segments)


class DerivationPath(Enum):
    BIP44 = (44, "P2PKH")
    BIP49 = (49, "P2SH_P2WPKH")
    BIP84 = (84, "P2WPKH")
    BIP86 = (86, "P2TR")

    def __init__(self, purpose: int, script_type: str):
        self.purpose = purpose
        self.script_type = script_type

    def path(self, account: int = 0, change: int = 0, index: int = 0, coin_type: int = 0) -> str:
        return f"m/{self.purpose}'/{coin_type}'/{account}'/{change}/{index}"

    def account_path(self, account: int = 0, coin_type: int = 0) -> str:
        return f"m/{self.purpose}'/{coin_type}'/{account}'"

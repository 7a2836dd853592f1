"""
Methods for base58 and base58check encoding
"""
from hdkeys.core import ChecksumMismatch, DataEncodingError, XKEYS, get_logger
from hdkeys.cryptography import hash256

logger = get_logger(__name__)

__all__ = ["encode_base58", "decode_base58", "encode_base58check", "decode_base58check"]

# --- BASE58 ENCODING --- #
BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_BASE58_INDEX = {char: i for i, char in enumerate(BASE58_ALPHABET)}


def encode_base58(data: bytes) -> str:
    """
    We return the base58 encoding of the given bytes data
    """
    base = len(BASE58_ALPHABET)
    n = int.from_bytes(data, byteorder="big")
    encoded_chars = []

    while n > 0:
        n, remainder = divmod(n, base)
        encoded_chars.append(BASE58_ALPHABET[remainder])

    # Each leading zero byte is encoded as a leading '1'
    leading_zeros = len(data) - len(data.lstrip(b'\x00'))
    return "1" * leading_zeros + "".join(reversed(encoded_chars))


def decode_base58(data: str) -> bytes:
    """
    Given a base58 encoded string, return the bytes of the underlying integer, restoring leading zero bytes.
    """
    total = 0
    for char in data:
        if char not in _BASE58_INDEX:
            raise DataEncodingError(f"Invalid base58 character: {char!r}")
        total = total * 58 + _BASE58_INDEX[char]

    decoded_bytes = total.to_bytes((total.bit_length() + 7) // 8, "big")

    # Each leading '1' represents a leading zero byte
    leading_zeros = len(data) - len(data.lstrip("1"))
    return b'\x00' * leading_zeros + decoded_bytes


def encode_base58check(data: bytes) -> str:
    """
    Given bytes data, we return the base58 encoding along with checksum
    """
    checksum = hash256(data)[:XKEYS.CHECKSUM_BYTES]
    return encode_base58(data + checksum)


def decode_base58check(data: str) -> bytes:
    """
    Given a string of base58check chars, we decode it and return the payload without its checksum.
    Raise ChecksumMismatch if checksum fails
    """
    decoded = decode_base58(data)
    if len(decoded) < XKEYS.CHECKSUM_BYTES:
        raise ChecksumMismatch("Base58check data too short to contain a checksum")

    payload, checksum = decoded[:-XKEYS.CHECKSUM_BYTES], decoded[-XKEYS.CHECKSUM_BYTES:]
    if hash256(payload)[:XKEYS.CHECKSUM_BYTES] != checksum:
        logger.debug(f"Base58check checksum mismatch for {len(payload)}-byte payload")
        raise ChecksumMismatch("Decoded checksum does not equal given checksum")
    return payload

"""
The custom exceptions used throughout hdkeys
"""
__all__ = ["ExtendedKeyError", "ReadError", "InvalidPathSyntax", "IndexOverflow", "UnsupportedUncompressedKey",
           "HardenedDerivationRequiresPrivateKey", "MissingPrivateMaterial", "NetworkMagicMismatch",
           "InvalidSerializedLength", "DataEncodingError", "ChecksumMismatch", "InvalidScalarOrPoint",
           "InvalidNetworkPrefixes", "UnknownCurveBackend"]


class ExtendedKeyError(Exception):
    """Custom exception for extended key operations"""
    pass


class ReadError(ExtendedKeyError):
    """
    For when trying to read data of length n from the stream and receiving data of length < n
    """
    pass


class InvalidPathSyntax(ExtendedKeyError):
    """
    Raised when a derivation path string can't be parsed
    """
    pass


class IndexOverflow(ExtendedKeyError):
    """
    Raised when a child index doesn't fit in 32 bits, e.g. hardening an already hardened index
    """
    pass


class UnsupportedUncompressedKey(ExtendedKeyError):
    """
    An extended key must always be compressed
    """
    pass


class HardenedDerivationRequiresPrivateKey(ExtendedKeyError):
    """
    Raised when deriving a hardened child from a public-only key
    """
    pass


class MissingPrivateMaterial(ExtendedKeyError):
    """
    Raised when private key data is requested from a public-only key
    """
    pass


class NetworkMagicMismatch(ExtendedKeyError):
    """
    Raised when the version bytes of a serialized key don't belong to the given network
    """
    pass


class InvalidSerializedLength(ExtendedKeyError):
    """
    Raised when a decoded extended key payload is not 78 bytes
    """
    pass


class DataEncodingError(ExtendedKeyError):
    """
    For use in encoding/decoding algorithms
    """
    pass


class ChecksumMismatch(DataEncodingError):
    """
    Raised when a base58check checksum doesn't match its payload
    """
    pass


class InvalidScalarOrPoint(ExtendedKeyError):
    """
    For if the private key is out of bounds or the public key is not a valid curve point
    """
    pass


class InvalidNetworkPrefixes(ExtendedKeyError):
    """
    Raised when a network doesn't define valid HD version bytes
    """
    pass


class UnknownCurveBackend(ExtendedKeyError):
    """
    Raised when a curve backend is requested by a name that isn't registered
    """
    pass

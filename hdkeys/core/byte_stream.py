"""
Reading fixed-width fields from serialized extended keys
"""
from io import BytesIO
from typing import Optional, Union

from .exceptions import ReadError

__all__ = ["get_stream", "read_stream", "read_big_int"]

SERIALIZED = Union[bytes, bytearray, BytesIO]


def get_stream(byte_stream: SERIALIZED) -> BytesIO:
    """Wrap bytes in a BytesIO stream; a stream is returned as is"""
    if isinstance(byte_stream, (bytes, bytearray)):
        return BytesIO(byte_stream)
    if isinstance(byte_stream, BytesIO):
        return byte_stream
    raise TypeError(f"Expected bytes or BytesIO but received: {type(byte_stream)}")


def read_stream(stream: BytesIO, length: int, data_type: Optional[str] = None) -> bytes:
    """Read exactly length bytes, raising ReadError on a short read"""
    data = stream.read(length)
    if len(data) != length:
        field = f" while reading {data_type}" if data_type else ""
        raise ReadError(f"Insufficient data{field}: expected {length} bytes, got {len(data)}")
    return data


def read_big_int(stream: BytesIO, length: int, data_type: Optional[str] = None) -> int:
    return int.from_bytes(read_stream(stream, length, data_type), "big")

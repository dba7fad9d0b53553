"""Binary encoding helpers used when serializing records."""

from __future__ import annotations

import struct

BOOLEAN_SIZE_BYTES = 1
UINT32_SIZE_BYTES = 4
INT64_SIZE_BYTES = 8
FLOAT64_SIZE_BYTES = 8

SIZE_OF_INT = 8
SIZE_OF_UINT16 = 2
SIZE_OF_UINT32 = 4
MAX_SLICE_SIZE = SIZE_OF_UINT32

_UINT64_MASK = (1 << 64) - 1


def _buffer(buf) -> bytearray:
    """Return ``buf`` itself when it is a bytearray, else a new bytearray holding it."""
    if isinstance(buf, bytearray):
        return buf
    return bytearray(buf or b"")


def _to_int64(value: int) -> int:
    value &= _UINT64_MASK
    return value - (1 << 64) if value >= 1 << 63 else value


def bytes_to_str(data) -> str:
    """Decode raw bytes as UTF-8, keeping undecodable bytes intact."""
    return bytes(data).decode("utf-8", errors="surrogateescape")


def append_uint16(buf, value: int) -> bytearray:
    """Append ``value`` as a big-endian uint16."""
    out = _buffer(buf)
    out.extend(struct.pack(">H", value & 0xFFFF))
    return out


def append_uint32(buf, value: int) -> bytearray:
    """Append ``value`` as a big-endian uint32."""
    out = _buffer(buf)
    out.extend(struct.pack(">I", value & 0xFFFFFFFF))
    return out


def append_int64(buf, value: int) -> bytearray:
    """Append ``value`` zig-zag encoded as a big-endian uint64."""
    signed = _to_int64(value)
    encoded = ((signed << 1) ^ (signed >> 63)) & _UINT64_MASK
    out = _buffer(buf)
    out.extend(struct.pack(">Q", encoded))
    return out


def append_int(buf, value: int) -> bytearray:
    """Append a platform int, encoded like an int64."""
    return append_int64(buf, value)


def append_string(buf, s: str) -> bytearray:
    """Append a string prefixed with its byte length as uint16."""
    encoded = s.encode("utf-8", errors="surrogateescape")
    out = append_uint16(buf, len(encoded))
    out.extend(encoded)
    return out


def append_bytes(buf, data) -> bytearray:
    """Append a byte string prefixed with its length as uint32."""
    out = append_uint32(buf, len(data))
    out.extend(data)
    return out


def uint32_slice_to_bytes(values) -> bytes:
    """Return the in-memory (little-endian) bytes of a sequence of uint32."""
    return struct.pack(f"<{len(values)}I", *(v & 0xFFFFFFFF for v in values))


def append_uint32_slice(buf, values) -> bytearray:
    """Append a uint32 sequence prefixed with its element count."""
    out = append_uint32(buf, len(values))
    if values:
        out.extend(uint32_slice_to_bytes(values))
    return out


def size_of_string(s: str) -> int:
    """Encoded size of a string written by :func:`append_string`."""
    return len(s.encode("utf-8", errors="surrogateescape")) + SIZE_OF_UINT16


def size_of_uint32() -> int:
    return SIZE_OF_UINT32


def size_of_int() -> int:
    return SIZE_OF_INT


def size_of_uint32_slice(values) -> int:
    """Encoded size of a sequence written by :func:`append_uint32_slice`."""
    return len(values) * size_of_uint32() + MAX_SLICE_SIZE


def size_of_byte_slice(data) -> int:
    """Encoded size of bytes written by :func:`append_bytes`."""
    return len(data) + size_of_uint32()
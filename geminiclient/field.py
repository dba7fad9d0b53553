"""Field descriptions and schemas of a columnar record."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from types import MappingProxyType

from .encoding import (
    BOOLEAN_SIZE_BYTES,
    FLOAT64_SIZE_BYTES,
    INT64_SIZE_BYTES,
    append_int,
    append_string,
    size_of_int,
    size_of_string,
)


class FieldType(enum.IntEnum):
    UNKNOWN = 0
    INT = 1
    UINT = 2
    FLOAT = 3
    STRING = 4
    BOOLEAN = 5
    TAG = 6
    LAST = 7


FIELD_TYPE_NAME = MappingProxyType(
    {
        FieldType.UNKNOWN: "Unknown",
        FieldType.INT: "Integer",
        FieldType.UINT: "Unsigned",
        FieldType.FLOAT: "Float",
        FieldType.STRING: "String",
        FieldType.BOOLEAN: "Boolean",
        FieldType.TAG: "Tag",
        FieldType.LAST: "Unknown",
    }
)

# Byte width of each fixed-size value type; other types have no fixed width.
TYPE_SIZE = MappingProxyType(
    {
        FieldType.INT: INT64_SIZE_BYTES,
        FieldType.FLOAT: FLOAT64_SIZE_BYTES,
        FieldType.BOOLEAN: BOOLEAN_SIZE_BYTES,
    }
)


def field_type_name(field_type: int) -> str:
    """Name of a field type, or an empty string for an unknown code."""
    return FIELD_TYPE_NAME.get(field_type, "")


@dataclass
class Field:
    name: str
    type: int = FieldType.UNKNOWN

    def __str__(self) -> str:
        return self.name + field_type_name(self.type)

    def marshal(self, buf) -> bytearray:
        """Append the encoded field to ``buf`` and return the buffer."""
        buf = append_string(buf, self.name)
        return append_int(buf, self.type)

    def size(self) -> int:
        return size_of_string(self.name) + size_of_int()


class Schemas(list):
    """Ordered list of :class:`Field`."""

    def __str__(self) -> str:
        return "".join(f"{f}\n" for f in self)
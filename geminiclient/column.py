"""Column values of a record: packed data, string offsets and a null bitmap."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from dataclasses import field as dc_field

from .encoding import (
    append_bytes,
    append_int,
    append_uint32_slice,
    bytes_to_str,
    size_of_byte_slice,
    size_of_int,
    size_of_uint32_slice,
)
from .field import TYPE_SIZE, FieldType

BIT_MASK = (1, 2, 4, 8, 16, 32, 64, 128)
FLIPPED_BIT_MASK = (254, 253, 251, 247, 239, 223, 191, 127)

_INT64 = "<q"
_FLOAT64 = "<d"
_BOOL = "<?"


def _sub_bitmap(bitmap, bitmap_offset: int, length: int) -> tuple[bytes, int]:
    """Bytes of ``bitmap`` covering ``length`` rows from ``bitmap_offset``."""
    start = bitmap_offset >> 3
    stop = (bitmap_offset + length) >> 3
    if (bitmap_offset + length) & 0x7:
        stop += 1
    return bytes(bitmap[start:stop]), bitmap_offset & 0x7


@dataclass
class NilCount:
    """Prefix counts of nulls: ``value[j]`` is the number of nulls before row ``j``."""

    value: list[int] = dc_field(default_factory=list)
    total: int = 0

    def reset(self, total: int, size: int) -> None:
        self.total = total
        if total == 0:
            return
        if len(self.value) < size:
            self.value = [0] * size
        else:
            del self.value[size:]
        self.value[0] = 0


@dataclass
class ColVal:
    val: bytearray = dc_field(default_factory=bytearray)
    offset: list[int] = dc_field(default_factory=list)
    bitmap: bytearray = dc_field(default_factory=bytearray)
    bitmap_offset: int = 0
    length: int = 0
    nil_count: int = 0

    def __post_init__(self) -> None:
        self.val = bytearray(self.val)
        self.offset = list(self.offset)
        self.bitmap = bytearray(self.bitmap)

    def init(self) -> None:
        """Empty the column, keeping nothing."""
        self.val.clear()
        self.offset.clear()
        self.bitmap.clear()
        self.length = 0
        self.nil_count = 0
        self.bitmap_offset = 0

    def reserve_offset(self, size: int) -> None:
        self.offset.extend([0] * size)

    def _bitmap_full(self) -> bool:
        return (self.length + self.bitmap_offset) >> 3 >= len(self.bitmap)

    def set_bitmap(self, index: int) -> None:
        if self._bitmap_full():
            self.bitmap.append(1)
            return
        index += self.bitmap_offset
        self.bitmap[index >> 3] |= BIT_MASK[index & 0x07]

    def reset_bitmap(self, index: int) -> None:
        if self._bitmap_full():
            self.bitmap.append(0)
            return
        index += self.bitmap_offset
        self.bitmap[index >> 3] &= FLIPPED_BIT_MASK[index & 0x07]

    def append_null(self) -> None:
        self.reset_bitmap(self.length)
        self.length += 1
        self.nil_count += 1

    def append_nulls(self, count: int) -> None:
        for _ in range(count):
            self.append_null()

    def _append_packed(self, fmt: str, values) -> None:
        for value in values:
            self.val.extend(struct.pack(fmt, value))
            self.set_bitmap(self.length)
            self.length += 1

    def append_integer(self, value: int) -> None:
        self._append_packed(_INT64, (value,))

    def append_integers(self, *args: int) -> None:
        self._append_packed(_INT64, args)

    def append_float(self, value: float) -> None:
        self._append_packed(_FLOAT64, (value,))

    def append_floats(self, *args: float) -> None:
        self._append_packed(_FLOAT64, args)

    def append_boolean(self, value: bool) -> None:
        self._append_packed(_BOOL, (value,))

    def append_booleans(self, *args: bool) -> None:
        self._append_packed(_BOOL, args)

    def append_string(self, value: str) -> None:
        self.offset.append(len(self.val))
        self.val.extend(value.encode("utf-8", errors="surrogateescape"))
        self.set_bitmap(self.length)
        self.length += 1

    def _unpack(self, fmt: str) -> list:
        width = struct.calcsize(fmt)
        count = len(self.val) // width
        return list(struct.unpack(f"<{count}{fmt[1:]}", bytes(self.val[: count * width])))

    def integer_values(self) -> list[int]:
        """Non-null integer values in row order."""
        return self._unpack(_INT64)

    def float_values(self) -> list[float]:
        """Non-null float values in row order."""
        return self._unpack(_FLOAT64)

    def boolean_values(self) -> list[bool]:
        """Non-null boolean values in row order."""
        return self._unpack(_BOOL)

    def string_values(self) -> list[str]:
        """Non-null string values in row order."""
        ends = self.offset[1:] + [len(self.val)]
        return [
            bytes_to_str(self.val[start:end])
            for i, (start, end) in enumerate(zip(self.offset, ends))
            if not self.is_nil(i)
        ]

    def is_nil(self, i: int) -> bool:
        if i >= self.length or not self.bitmap:
            return True
        if self.nil_count == 0:
            return False
        idx = self.bitmap_offset + i
        return not self.bitmap[idx >> 3] & BIT_MASK[idx & 0x07]

    def size(self) -> int:
        """Size in bytes of the marshalled column."""
        return (
            3 * size_of_int()
            + size_of_byte_slice(self.val)
            + size_of_byte_slice(self.bitmap)
            + size_of_uint32_slice(self.offset)
        )

    def marshal(self, buf) -> bytearray:
        """Append the encoded column to ``buf`` and return the buffer."""
        buf = append_int(buf, self.length)
        buf = append_int(buf, self.nil_count)
        buf = append_int(buf, self.bitmap_offset)
        buf = append_bytes(buf, self.val)
        buf = append_bytes(buf, self.bitmap)
        return append_uint32_slice(buf, self.offset)

    def append_all(self, src: ColVal) -> None:
        """Append all of ``src``, taking over its length and null count."""
        self.val.extend(src.val)
        self.offset.extend(src.offset)
        bitmap, bitmap_offset = _sub_bitmap(src.bitmap, src.bitmap_offset, src.length)
        self.bitmap.extend(bitmap)
        self.bitmap_offset = bitmap_offset
        self.length = src.length
        self.nil_count = src.nil_count

    def append_string_range(self, src: ColVal, start: int, end: int) -> None:
        """Append string data and offsets of rows ``start``..``end`` of ``src``."""
        base_dst = len(self.val)
        base_src = src.offset[start]
        self.offset.extend(base_dst + off - base_src for off in src.offset[start:end])
        stop = len(src.val) if end == src.length else src.offset[end]
        self.val.extend(src.val[base_src:stop])

    def delete_last(self, field_type: int) -> None:
        """Remove the last row."""
        if self.length == 0:
            return
        was_nil = self.is_nil(self.length - 1)
        self.length -= 1
        if self.length % 8 == 0:
            self.bitmap.pop()

        if was_nil:
            self.nil_count -= 1
        else:
            size = TYPE_SIZE.get(field_type, 0)
            if field_type == FieldType.STRING:
                size = len(self.val) - self.offset[self.length]
            if size:
                del self.val[-size:]

        if field_type == FieldType.STRING:
            del self.offset[self.length:]

    def append_with_nil_count(
        self, src: ColVal, col_type: int, start: int, end: int, nil_count: NilCount
    ) -> None:
        """Append rows ``start``..``end`` of ``src`` using precomputed null counts."""
        if end <= start or src.length == 0:
            return
        if end - start == src.length and self.length == 0:
            self.append_all(src)
            return

        start_offset, end_offset = start, end
        if nil_count.total > 0:
            start_offset = start - nil_count.value[start]
            end_offset = end - nil_count.value[end]

        if col_type in (FieldType.STRING, FieldType.TAG):
            self.append_string_range(src, start, end)
        elif col_type in (FieldType.INT, FieldType.FLOAT, FieldType.BOOLEAN):
            size = TYPE_SIZE[col_type]
            self.val.extend(src.val[start_offset * size : end_offset * size])
        else:
            raise ValueError(f"error type: {col_type}")

        self._append_bitmap(src.bitmap, src.bitmap_offset, src.length, start, end)
        self.length += end - start
        self.nil_count += end - start - (end_offset - start_offset)

    def _append_bitmap(self, bm, bit_offset: int, rows: int, start: int, end: int) -> None:
        bitmap, bitmap_offset = _sub_bitmap(bm, bit_offset, rows)
        if (self.bitmap_offset + self.length) % 8 == 0 and (start + bitmap_offset) % 8 == 0:
            lo = (start + bitmap_offset) // 8
            hi = (end + bitmap_offset) // 8
            if (end + bitmap_offset) % 8:
                hi += 1
            self.bitmap.extend(bitmap[lo:hi])
            return

        dst_row = self.bitmap_offset + self.length
        add_size = (dst_row + end - start + 7) // 8 - (dst_row + 7) // 8
        if add_size > 0:
            self.bitmap.extend(bytes(add_size))

        for i in range(end - start):
            dst_index = dst_row + i
            src_index = bitmap_offset + start + i
            if bitmap[src_index >> 3] & BIT_MASK[src_index & 0x07]:
                self.bitmap[dst_index >> 3] |= BIT_MASK[dst_index & 0x07]
            else:
                self.bitmap[dst_index >> 3] &= FLIPPED_BIT_MASK[dst_index & 0x07]
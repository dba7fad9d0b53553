"""Columnar record: a schema plus one column of values per field."""

from __future__ import annotations

import logging

from .column import ColVal
from .encoding import append_uint32
from .field import TYPE_SIZE, Field, FieldType, Schemas

TIME_FIELD = "time"

_log = logging.getLogger(__name__)

_STRING_TYPES = (FieldType.STRING, FieldType.TAG)


class Record:
    """Rows stored column by column; the last column holds the timestamps."""

    def __init__(self, schema: list[Field] | None = None) -> None:
        self.schema = Schemas(schema or [])
        self.col_vals: list[ColVal] = [ColVal() for _ in self.schema]

    def __len__(self) -> int:
        return len(self.schema)

    def less(self, i: int, j: int) -> bool:
        """Order fields by name, with the time field always last."""
        if self.schema[i].name == TIME_FIELD:
            return False
        if self.schema[j].name == TIME_FIELD:
            return True
        return self.schema[i].name < self.schema[j].name

    def swap(self, i: int, j: int) -> None:
        self.schema[i], self.schema[j] = self.schema[j], self.schema[i]
        self.col_vals[i], self.col_vals[j] = self.col_vals[j], self.col_vals[i]

    def column(self, i: int) -> ColVal:
        return self.col_vals[i]

    def __str__(self) -> str:
        lines = []
        for f, col in zip(self.schema, self.col_vals):
            if f.type == FieldType.FLOAT:
                values = col.float_values()
            elif f.type in _STRING_TYPES:
                values = col.string_values()
            elif f.type == FieldType.BOOLEAN:
                values = col.boolean_values()
            elif f.type == FieldType.INT:
                values = col.integer_values()
            else:
                continue
            lines.append(f"field({f.name}):{values!r}\n")
        return "".join(lines)

    def reset(self) -> None:
        """Drop all fields and columns."""
        self.schema.clear()
        self.col_vals.clear()

    def reset_with_schema(self, schema) -> None:
        """Replace the schema and give every field an empty column."""
        self.reset()
        self.schema = Schemas(schema)
        self.reserve_col_val(len(self.schema))

    def reserve_col_val(self, size: int) -> None:
        """Add ``size`` empty columns."""
        start = len(self.col_vals)
        self.col_vals.extend(ColVal() for _ in range(size))
        self.init_col_val(start, start + size)

    def init_col_val(self, start: int, end: int) -> None:
        for col in self.col_vals[start:end]:
            col.init()

    def row_nums(self) -> int:
        if not self.col_vals:
            return 0
        return self.col_vals[-1].length

    def times(self) -> list[int]:
        if not self.col_vals:
            return []
        return self.col_vals[-1].integer_values()

    def append_time(self, *args: int) -> None:
        time_col = self.col_vals[-1]
        for t in args:
            time_col.append_integer(t)

    def marshal(self, buf) -> bytearray:
        """Append the encoded record to ``buf`` and return the buffer."""
        buf = append_uint32(buf, len(self.schema))
        for f in self.schema:
            buf = append_uint32(buf, f.size())
            buf = f.marshal(buf)
        buf = append_uint32(buf, len(self.col_vals))
        for col in self.col_vals:
            buf = append_uint32(buf, col.size())
            buf = col.marshal(buf)
        return buf


def _sort_fields(rec: Record) -> None:
    order = sorted(
        range(len(rec.schema)),
        key=lambda k: (rec.schema[k].name == TIME_FIELD, rec.schema[k].name),
    )
    rec.schema[:] = [rec.schema[k] for k in order]
    rec.col_vals[:] = [rec.col_vals[k] for k in order]


def check_schema(i: int, rec: Record, is_order_schema: bool) -> bool:
    """Return False once field ``i`` is found out of name order."""
    if is_order_schema and i > 0 and rec.schema[i - 1].name >= rec.schema[i].name:
        _log.warning(
            "record schema is invalid; idx i-1: %d, name: %s, idx i: %d, name: %s",
            i - 1,
            rec.schema[i - 1].name,
            i,
            rec.schema[i].name,
        )
        return False
    return is_order_schema


def check_record(rec: Record) -> None:
    """Validate a record, raising ValueError; reorder its fields if unsorted."""
    col_n = len(rec.schema)
    if col_n <= 1 or rec.schema[col_n - 1].name != TIME_FIELD:
        raise ValueError(f"invalid schema: {list(rec.schema)}")

    if rec.col_vals[col_n - 1].nil_count != 0:
        raise ValueError(f"invalid colvals: {rec}")

    for i in range(1, col_n):
        if rec.schema[i].name == rec.schema[i - 1].name:
            raise ValueError(f"same schema; idx: {i}, name: {rec.schema[i].name}")

    is_order_schema = True
    for i in range(col_n - 1):
        f = rec.schema[i]
        col1, col2 = rec.col_vals[i], rec.col_vals[i + 1]
        if col1.length != col2.length:
            raise ValueError(f"invalid colvals length: {rec}")
        is_order_schema = check_schema(i, rec, is_order_schema)

        if f.type in _STRING_TYPES:
            continue

        expected = TYPE_SIZE.get(f.type, 0) * (col1.length - col1.nil_count)
        if expected != len(col1.val):
            raise ValueError(
                f"the length of rec.ColVals[{i}].val is incorrect. "
                f"exp: {expected}, got: {len(col1.val)}\n{rec}"
            )

    if not is_order_schema:
        _sort_fields(rec)
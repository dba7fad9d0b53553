"""Sorting a record by time, keeping the last value written for repeated times."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field as dc_field

from .column import ColVal, NilCount
from .record import Record


@dataclass
class SortAux:
    """Row ids and times being sorted, plus the record that receives the result."""

    row_ids: list[int] = dc_field(default_factory=list)
    times: list[int] = dc_field(default_factory=list)
    sections: list[int] = dc_field(default_factory=list)
    sort_rec: Record | None = None

    def __len__(self) -> int:
        return len(self.row_ids)

    def less(self, i: int, j: int) -> bool:
        return self.times[i] < self.times[j]

    def swap(self, i: int, j: int) -> None:
        self.times[i], self.times[j] = self.times[j], self.times[i]
        self.row_ids[i], self.row_ids[j] = self.row_ids[j], self.row_ids[i]

    def init(self, times) -> None:
        self.times = list(times)
        self.row_ids = list(range(len(self.times)))

    def init_record(self, schemas) -> None:
        if self.sort_rec is None:
            self.sort_rec = Record(schemas)
        else:
            self.sort_rec.reset_with_schema(schemas)

    def stable_sort(self) -> None:
        """Sort rows by time, keeping the original order of equal times."""
        order = sorted(range(len(self.times)), key=self.times.__getitem__)
        self.times = [self.times[k] for k in order]
        self.row_ids = [self.row_ids[k] for k in order]

    def init_sections(self) -> None:
        """Split sorted rows into runs of consecutive rows with distinct times."""
        times, rows = self.times, self.row_ids
        sections: list[int] = []
        start = 0
        for i in range(len(times) - 1):
            if rows[i + 1] - rows[i] != 1 or times[i] == times[i + 1]:
                sections.extend((start, i))
                start = i + 1
        sections.extend((start, len(rows) - 1))
        self.sections = sections

    def row_index(self, i: int) -> tuple[int, int, int]:
        """Start position of section ``i`` and its source row range."""
        start, end = self.sections[i], self.sections[i + 1]
        return start, self.row_ids[start], self.row_ids[end] + 1

    def section_len(self) -> int:
        return len(self.sections)


class ColumnSortHelper:
    """Sorts records by time; rows with an equal time collapse into one."""

    def __init__(self) -> None:
        self.aux = SortAux()
        self.nil_count = NilCount()
        self.times: list[int] = []

    def sort(self, rec: Record) -> Record:
        """Return the record sorted by time; may return a different object."""
        if rec.row_nums() == 0:
            return rec
        aux = self.aux
        aux.init_record(rec.schema)
        aux.init(rec.times())
        aux.stable_sort()
        self.times = []
        return self._sort(rec, aux)

    def _sort(self, rec: Record, aux: SortAux) -> Record:
        aux.init_sections()
        times = aux.times

        for i in range(len(rec) - 1):
            col = rec.column(i)
            self._init_nil_count(col, len(times) + 1)
            self._sort_column(col, aux, i)

        out = aux.sort_rec
        out.append_time(times[0])
        for prev, cur in zip(times, times[1:]):
            if cur != prev:
                out.append_time(cur)

        aux.sort_rec = rec
        return out

    def _init_nil_count(self, col: ColVal, size: int) -> None:
        nc = self.nil_count
        nc.reset(col.nil_count, size)
        if col.nil_count == 0:
            return
        for j in range(1, size):
            nc.value[j] = nc.value[j - 1] + (1 if col.is_nil(j - 1) else 0)

    def _sort_column(self, col: ColVal, aux: SortAux, n: int) -> None:
        times = aux.times
        dst = aux.sort_rec.column(n)
        typ = aux.sort_rec.schema[n].type

        for i in range(0, aux.section_len(), 2):
            idx, row_start, row_end = aux.row_index(i)
            if idx > 0 and times[idx] == times[idx - 1]:
                self._replace(col, dst, typ, row_start)
                row_start += 1
            if row_start >= row_end:
                continue
            dst.append_with_nil_count(col, typ, row_start, row_end, self.nil_count)

    def _replace(self, col: ColVal, dst: ColVal, typ: int, idx: int) -> None:
        if col.is_nil(idx):
            return
        dst.delete_last(typ)
        dst.append_with_nil_count(col, typ, idx, idx + 1, self.nil_count)
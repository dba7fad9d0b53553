from geminiclient.field import Field, FieldType
from geminiclient.record import TIME_FIELD, Record
from geminiclient.sort import ColumnSortHelper, SortAux


def test_sort_aux_init():
    aux = SortAux()
    times = [100, 200, 150]
    aux.init(times)
    assert aux.row_ids == [0, 1, 2]
    assert aux.times == times
    assert len(aux) == 3


def test_sort_aux_less_swap():
    aux = SortAux(row_ids=[0, 1, 2], times=[300, 100, 200])
    assert aux.less(0, 1) is False
    assert aux.less(1, 2) is True
    assert len(aux) == 3
    aux.swap(0, 1)
    assert aux.times[:2] == [100, 300]
    assert aux.row_ids[:2] == [1, 0]


def test_sort_aux_init_sections():
    aux = SortAux(row_ids=[0, 1, 2, 3, 4], times=[100, 100, 200, 300, 300])
    aux.init_sections()
    assert aux.sections == [0, 0, 1, 3, 4, 4]
    assert aux.section_len() == 6
    assert aux.row_index(2) == (1, 1, 4)


def test_sort_aux_init_record():
    aux = SortAux()
    aux.init_record([Field("a", FieldType.INT), Field(TIME_FIELD, FieldType.INT)])
    assert [f.name for f in aux.sort_rec.schema] == ["a", TIME_FIELD]
    aux.init_record([Field(TIME_FIELD, FieldType.INT)])
    assert len(aux.sort_rec.col_vals) == 1


def test_sort_empty_record():
    rec = Record()
    assert ColumnSortHelper().sort(rec) is rec


def test_sort_record_with_data():
    rec = Record([Field("field1", FieldType.INT), Field("field2", FieldType.FLOAT)])
    rec.append_time(200)
    rec.append_time(100)
    rec.append_time(300)
    result = ColumnSortHelper().sort(rec)
    assert result.times() == [100, 200, 300]


def test_sort_duplicate_times_keeps_last():
    rec = Record([Field("field1", FieldType.INT), Field(TIME_FIELD, FieldType.INT)])
    rec.col_vals[0].append_integers(1, 2, 3)
    rec.append_time(200, 100, 200)
    result = ColumnSortHelper().sort(rec)
    assert result.times() == [100, 200]
    assert result.column(0).integer_values() == [2, 3]
    assert result.row_nums() == 2


def test_sort_with_nulls():
    rec = Record([Field("field1", FieldType.INT), Field(TIME_FIELD, FieldType.INT)])
    col = rec.col_vals[0]
    col.append_integer(10)
    col.append_null()
    col.append_integer(30)
    rec.append_time(300, 200, 100)
    result = ColumnSortHelper().sort(rec)
    assert result.times() == [100, 200, 300]
    sorted_col = result.column(0)
    assert sorted_col.integer_values() == [30, 10]
    assert sorted_col.nil_count == 1
    assert sorted_col.length == 3
    assert [sorted_col.is_nil(i) for i in range(3)] == [False, True, False]


def test_sort_strings():
    rec = Record([Field("s", FieldType.STRING), Field(TIME_FIELD, FieldType.INT)])
    for value in ("c", "a", "b"):
        rec.col_vals[0].append_string(value)
    rec.append_time(3, 1, 2)
    result = ColumnSortHelper().sort(rec)
    assert result.times() == [1, 2, 3]
    assert result.column(0).string_values() == ["a", "b", "c"]


def test_helper_reused():
    helper = ColumnSortHelper()
    first = Record([Field("v", FieldType.INT), Field(TIME_FIELD, FieldType.INT)])
    first.col_vals[0].append_integers(5, 6)
    first.append_time(20, 10)
    assert helper.sort(first).column(0).integer_values() == [6, 5]

    second = Record([Field("v", FieldType.INT), Field(TIME_FIELD, FieldType.INT)])
    second.col_vals[0].append_integers(7, 8)
    second.append_time(2, 1)
    out = helper.sort(second)
    assert out.column(0).integer_values() == [8, 7]
    assert out.times() == [1, 2]
import pytest

from geminiclient.encoding import (
    MAX_SLICE_SIZE,
    SIZE_OF_UINT16,
    append_bytes,
    append_int,
    append_int64,
    append_string,
    append_uint16,
    append_uint32,
    append_uint32_slice,
    bytes_to_str,
    size_of_byte_slice,
    size_of_int,
    size_of_string,
    size_of_uint32,
    size_of_uint32_slice,
    uint32_slice_to_bytes,
)


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"", ""),
        (b"hello world", "hello world"),
        (b"hello\nworld\t!", "hello\nworld\t!"),
    ],
)
def test_bytes_to_str(data, expected):
    assert bytes_to_str(data) == expected


@pytest.mark.parametrize(
    "initial, text, expected",
    [
        (b"", "", bytes([0, 0])),
        (bytes([1, 2, 3]), "hello", bytes([1, 2, 3, 0, 5]) + b"hello"),
    ],
)
def test_append_string(initial, text, expected):
    assert append_string(initial, text) == expected


def test_append_extends_bytearray_in_place():
    buf = bytearray(b"\x09")
    result = append_uint16(buf, 1)
    assert result is buf
    assert buf == bytearray([9, 0, 1])


@pytest.mark.parametrize(
    "values, expected_len",
    [([], 0), ([123], 4), ([123, 456, 789], 12)],
)
def test_uint32_slice_to_bytes_length(values, expected_len):
    assert len(uint32_slice_to_bytes(values)) == expected_len


def test_uint32_slice_to_bytes_empty_is_empty():
    assert uint32_slice_to_bytes([]) == b""


def test_uint32_slice_to_bytes_little_endian():
    assert uint32_slice_to_bytes([1]) == b"\x01\x00\x00\x00"


@pytest.mark.parametrize(
    "values, growth",
    [([], 4), ([123, 456], 12)],
)
def test_append_uint32_slice(values, growth):
    initial = bytes([1, 2, 3])
    assert len(append_uint32_slice(initial, values)) == len(initial) + growth


def test_size_of_string():
    assert size_of_string("hello") == len("hello") + SIZE_OF_UINT16


def test_size_of_uint32():
    assert size_of_uint32() == 4


def test_size_of_int():
    assert size_of_int() == 8


def test_size_of_uint32_slice():
    values = [1, 2, 3]
    assert size_of_uint32_slice(values) == len(values) * 4 + MAX_SLICE_SIZE


def test_size_of_byte_slice():
    data = bytes([1, 2, 3])
    assert size_of_byte_slice(data) == len(data) + size_of_uint32()


def test_append_uint16():
    assert append_uint16(bytes([1, 2, 3]), 258) == bytes([1, 2, 3, 1, 2])


def test_append_uint32():
    assert append_uint32(bytes([1, 2, 3]), 16909060) == bytes([1, 2, 3, 1, 2, 3, 4])


def test_append_int64_length():
    initial = bytes([1, 2, 3])
    assert len(append_int64(initial, 123)) == len(initial) + 8


def test_append_int_length():
    initial = bytes([1, 2, 3])
    assert len(append_int(initial, 123)) == len(initial) + 8


@pytest.mark.parametrize(
    "value, last",
    [(0, 0), (-1, 1), (1, 2), (123, 246)],
)
def test_append_int64_zigzag(value, last):
    assert append_int64(b"", value) == bytes(7) + bytes([last])


@pytest.mark.parametrize(
    "data, growth",
    [(b"", 4), (bytes([4, 5, 6]), 7)],
)
def test_append_bytes(data, growth):
    initial = bytes([1, 2, 3])
    assert len(append_bytes(initial, data)) == len(initial) + growth


def test_append_bytes_layout():
    assert append_bytes(b"", b"ab") == b"\x00\x00\x00\x02ab"
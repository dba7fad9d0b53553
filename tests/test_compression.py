import gzip

import pytest
import zstandard

from geminiclient.compression import (
    get_gzip_reader,
    get_zstd_decoder,
    put_gzip_reader,
    put_zstd_decoder,
)

DATA = b"test data"


def test_gzip_reader_pool():
    compressed = gzip.compress(DATA)
    reader = get_gzip_reader(compressed)
    assert reader.read() == DATA
    put_gzip_reader(reader)


def test_gzip_reader_is_reused_after_put():
    reader = get_gzip_reader(gzip.compress(b"first"))
    assert reader.read() == b"first"
    put_gzip_reader(reader)
    again = get_gzip_reader(gzip.compress(b"second"))
    assert again.read() == b"second"
    put_gzip_reader(again)


def test_gzip_reader_rejects_invalid_body():
    with pytest.raises(ValueError):
        get_gzip_reader(b"definitely not gzip")


def test_gzip_reader_rejects_empty_body():
    with pytest.raises(ValueError):
        get_gzip_reader(b"")


def test_gzip_reader_without_input_raises_after_put():
    reader = get_gzip_reader(gzip.compress(DATA))
    put_gzip_reader(reader)
    with pytest.raises(ValueError):
        reader.read()


def test_zstd_decoder_pool():
    compressed = zstandard.ZstdCompressor().compress(DATA)
    decoder = get_zstd_decoder(compressed)
    assert decoder.decode_all(compressed) == DATA
    put_zstd_decoder(decoder)


def test_zstd_decoder_streams_body():
    payload = DATA * 100
    compressed = zstandard.ZstdCompressor().compress(payload)
    decoder = get_zstd_decoder(compressed)
    assert decoder.read() == payload
    put_zstd_decoder(decoder)


def test_zstd_decoder_rejects_garbage():
    decoder = get_zstd_decoder(b"garbage")
    with pytest.raises(ValueError):
        decoder.decode_all(b"garbage")
    put_zstd_decoder(decoder)


def test_zstd_decoder_without_input_raises_after_put():
    decoder = get_zstd_decoder(zstandard.ZstdCompressor().compress(DATA))
    put_zstd_decoder(decoder)
    with pytest.raises(ValueError):
        decoder.read()
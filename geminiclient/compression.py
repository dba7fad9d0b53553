"""Pooled decompression readers for gzip and zstd response bodies."""

from __future__ import annotations

import gzip
import io
import os
import zlib

import zstandard

from .pool import CachePool

_POOL_SIZE = 2 * (os.cpu_count() or 1)


class _GzipReader:
    """Reusable reader that decompresses a gzip body."""

    def __init__(self) -> None:
        self._file: gzip.GzipFile | None = None

    def reset(self, body: bytes | None) -> None:
        """Point the reader at a new body; ``None`` releases the current one."""
        self.close()
        if body is None:
            return
        if not body:
            raise ValueError("gzip: unexpected end of input")
        reader = gzip.GzipFile(fileobj=io.BytesIO(body), mode="rb")
        try:
            reader.peek(1)
        except (OSError, EOFError, zlib.error) as exc:
            reader.close()
            raise ValueError(f"gzip: invalid header: {exc}") from exc
        self._file = reader

    def read(self, size: int = -1) -> bytes:
        if self._file is None:
            raise ValueError("gzip reader has no input")
        return self._file.read(size)

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None


class _ZstdDecoder:
    """Reusable zstd decoder holding one decompression context."""

    def __init__(self) -> None:
        self._dctx = zstandard.ZstdDecompressor()
        self._body: bytes | None = None
        self._stream = None

    def reset(self, body: bytes | None) -> None:
        """Point the decoder at a new body; ``None`` releases the current one."""
        self._close_stream()
        self._body = None if body is None else bytes(body)

    def read(self, size: int = -1) -> bytes:
        if self._body is None:
            raise ValueError("zstd decoder has no input")
        if self._stream is None:
            self._stream = self._dctx.stream_reader(io.BytesIO(self._body))
        try:
            return self._stream.read(size)
        except zstandard.ZstdError as exc:
            raise ValueError(f"zstd: {exc}") from exc

    def decode_all(self, data: bytes) -> bytes:
        """Decompress a complete zstd payload in one call."""
        self._close_stream()
        try:
            return self._dctx.decompressobj().decompress(data)
        except zstandard.ZstdError as exc:
            raise ValueError(f"zstd: {exc}") from exc

    def _close_stream(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None


_gzip_reader_pool: CachePool[_GzipReader] = CachePool(_GzipReader, _POOL_SIZE)
_zstd_decoder_pool: CachePool[_ZstdDecoder] = CachePool(_ZstdDecoder, _POOL_SIZE)


def get_gzip_reader(body: bytes) -> _GzipReader:
    """Take a gzip reader from the pool, set to read ``body``."""
    reader = _gzip_reader_pool.get()
    try:
        reader.reset(body)
    except ValueError:
        _gzip_reader_pool.put(reader)
        raise
    return reader


def put_gzip_reader(reader: _GzipReader) -> None:
    """Return a gzip reader to the pool."""
    reader.reset(None)
    _gzip_reader_pool.put(reader)


def get_zstd_decoder(body: bytes) -> _ZstdDecoder:
    """Take a zstd decoder from the pool, set to read ``body``."""
    decoder = _zstd_decoder_pool.get()
    decoder.reset(body)
    return decoder


def put_zstd_decoder(decoder: _ZstdDecoder) -> None:
    """Return a zstd decoder to the pool."""
    decoder.reset(None)
    _zstd_decoder_pool.put(decoder)
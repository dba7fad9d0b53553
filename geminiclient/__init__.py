"""Columnar records, time sorting, encoding helpers, decompression pools and client configuration for openGemini."""

__version__ = "0.1.0"

__all__ = [
    "column",
    "compression",
    "config",
    "encoding",
    "field",
    "pool",
    "record",
    "sort",
]
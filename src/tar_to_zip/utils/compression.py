"""Gzip detection and decompression."""

import gzip
import zlib
from typing import Union

from ..exceptions import DecompressionError
from ..tar.constants import GZIP_MAGIC


def is_gzipped(data: Union[bytes, bytearray, memoryview]) -> bool:
    """Check if data starts with the gzip magic bytes."""
    return bytes(data[: len(GZIP_MAGIC)]) == GZIP_MAGIC


def inflate(data: bytes) -> bytes:
    """Decompress a gzip stream.

    Args:
        data: Gzip-wrapped bytes

    Returns:
        Decompressed bytes

    Raises:
        DecompressionError: If the stream is malformed or truncated
    """
    try:
        return gzip.decompress(data)
    except (OSError, EOFError, zlib.error) as e:
        raise DecompressionError(
            "Failed to decompress gzip file. The file might be corrupted."
        ) from e

"""tar-to-zip - Async Python converter from USTAR tar archives to ZIP."""

__version__ = "0.1.0"

from .convert import convert_tar_bytes, convert_tar_file, list_tar_entries
from .core.pipeline import ConversionPipeline
from .core.types import ConversionConfig
from .exceptions import (
    ArchiveReadError,
    ConversionError,
    CorruptArchiveError,
    DecompressionError,
    EmptyArchiveError,
    TruncatedArchiveError,
)
from .tar.models import ConversionResult, TarEntry, TarEntryType
from .utils.filename import zip_filename_for
from .zip.sink import ZipArchiveSink

__all__ = [
    "ConversionPipeline",
    "ConversionConfig",
    "ConversionResult",
    "TarEntry",
    "TarEntryType",
    "ZipArchiveSink",
    "convert_tar_bytes",
    "convert_tar_file",
    "list_tar_entries",
    "zip_filename_for",
    "ConversionError",
    "ArchiveReadError",
    "DecompressionError",
    "TruncatedArchiveError",
    "CorruptArchiveError",
    "EmptyArchiveError",
]

"""Custom exceptions for the tar to zip converter."""


class ConversionError(Exception):
    """Base exception for all conversion errors."""

    pass


class ArchiveReadError(ConversionError):
    """Raised when the input archive cannot be read from disk."""

    pass


class DecompressionError(ConversionError):
    """Raised when gzip magic was detected but the stream cannot be inflated."""

    pass


class TruncatedArchiveError(ConversionError):
    """Raised when the archive ends in the middle of a header or payload."""

    pass


class CorruptArchiveError(ConversionError):
    """Raised when too many consecutive tar headers fail validation."""

    pass


class EmptyArchiveError(CorruptArchiveError):
    """Raised when the end of the archive is reached without any usable entry."""

    pass


class HeaderDecodeError(ValueError):
    """Raised when a header field cannot be decoded.

    This is recoverable: the walker treats it like a header that failed
    validation.
    """

    pass

"""USTAR header block validation and decoding."""

import re
from typing import Union

from ..exceptions import HeaderDecodeError
from .constants import (
    BLOCK_SIZE,
    CHECKSUM_FIELD,
    CHECKSUM_PLACEHOLDER,
    DIRECTORY_CODE,
    LINK_NAME_FIELD,
    MAGIC_FIELD,
    NAME_FIELD,
    PAX_MARKER,
    REGULAR_FILE_CODES,
    SIZE_FIELD,
    SYMLINK_CODE,
    TYPE_FLAG_OFFSET,
    USTAR_MAGIC,
)
from .models import TarEntry, TarEntryType

# Regex pattern for a non-empty octal number
OCTAL_PATTERN = re.compile(r"^[0-7]+$")

BytesLike = Union[bytes, bytearray, memoryview]


def decode_text(field: BytesLike) -> str:
    """Decode a NUL-terminated text field, trimming surrounding whitespace."""
    return bytes(field).split(b"\0", 1)[0].decode("utf-8", errors="replace").strip()


def parse_octal(field: BytesLike) -> int:
    """Parse a NUL-terminated, space-padded octal number field.

    Args:
        field: Raw field bytes

    Returns:
        Decoded non-negative integer

    Raises:
        HeaderDecodeError: If the field does not hold an octal number
    """
    raw = bytes(field).split(b"\0", 1)[0]
    try:
        text = raw.decode("ascii").strip()
    except UnicodeDecodeError as e:
        raise HeaderDecodeError(f"Non-ASCII numeric field: {raw!r}") from e

    if not OCTAL_PATTERN.match(text):
        raise HeaderDecodeError(f"Invalid octal field: {raw!r}")

    return int(text, 8)


def padded_size(size: int) -> int:
    """Round a payload length up to the next full block."""
    return -(-size // BLOCK_SIZE) * BLOCK_SIZE


def calculate_checksum(block: BytesLike) -> int:
    """Sum all header bytes, counting the checksum field as spaces."""
    data = bytes(block)
    return sum(data) - sum(data[CHECKSUM_FIELD]) + CHECKSUM_PLACEHOLDER


def is_zero_block(block: BytesLike) -> bool:
    """Check if a block is an end-of-archive marker."""
    return not any(block)


def has_ustar_magic(block: BytesLike) -> bool:
    """Check if the block carries the ustar magic."""
    return bytes(block[MAGIC_FIELD]) == USTAR_MAGIC


def has_valid_checksum(block: BytesLike) -> bool:
    """Check if the stored checksum matches the computed one."""
    try:
        stored = parse_octal(block[CHECKSUM_FIELD])
    except HeaderDecodeError:
        return False
    return stored == calculate_checksum(block)


def validate_header(block: BytesLike) -> bool:
    """Check whether a block is a well-formed USTAR header.

    Never raises; any malformed input simply fails validation.

    Args:
        block: Candidate header block

    Returns:
        True if the block has the ustar magic and a matching checksum
    """
    if len(block) != BLOCK_SIZE:
        return False

    if not has_ustar_magic(block):
        return False

    return has_valid_checksum(block)


def entry_type_for(type_code: str) -> TarEntryType:
    """Map a tar type flag character to an entry type."""
    if type_code in REGULAR_FILE_CODES:
        return TarEntryType.REGULAR_FILE
    if type_code == SYMLINK_CODE:
        return TarEntryType.SYMBOLIC_LINK
    if type_code == DIRECTORY_CODE:
        return TarEntryType.DIRECTORY
    return TarEntryType.OTHER


def decode_header(block: BytesLike, pax_marker: str = PAX_MARKER) -> TarEntry:
    """Decode a header block into a TarEntry.

    The block is expected to have passed validate_header; decoding an
    unvalidated block is best effort.

    Args:
        block: 512-byte header block
        pax_marker: Substring identifying PAX extended header entries

    Returns:
        Decoded entry

    Raises:
        HeaderDecodeError: If the block is the wrong size or its size field
            is not a valid octal number
    """
    if len(block) != BLOCK_SIZE:
        raise HeaderDecodeError(f"Header block must be {BLOCK_SIZE} bytes")

    name = decode_text(block[NAME_FIELD])
    type_code = chr(block[TYPE_FLAG_OFFSET])
    entry_type = entry_type_for(type_code)
    size = parse_octal(block[SIZE_FIELD])

    link_target = ""
    if entry_type is TarEntryType.SYMBOLIC_LINK:
        link_target = decode_text(block[LINK_NAME_FIELD])

    return TarEntry(
        name=name,
        type=entry_type,
        type_code=type_code,
        size=size,
        link_target=link_target,
        is_pax_header=pax_marker in name,
    )

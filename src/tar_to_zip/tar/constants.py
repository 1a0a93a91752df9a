"""USTAR header layout."""

BLOCK_SIZE = 512

NAME_FIELD = slice(0, 100)
SIZE_FIELD = slice(124, 136)
CHECKSUM_FIELD = slice(148, 156)
TYPE_FLAG_OFFSET = 156
LINK_NAME_FIELD = slice(157, 257)
MAGIC_FIELD = slice(257, 262)

USTAR_MAGIC = b"ustar"

# Checksum field is summed as if it held eight ASCII spaces
CHECKSUM_PLACEHOLDER = 8 * ord(" ")

REGULAR_FILE_CODES = ("0", "\0")
SYMLINK_CODE = "2"
DIRECTORY_CODE = "5"

PAX_MARKER = "PaxHeader"
SYMLINK_COMMENT = "Symbolic Link"

GZIP_MAGIC = b"\x1f\x8b"

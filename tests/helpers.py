"""Test helpers for building tar archives and recording sink calls."""

import io
import tarfile

BLOCK = 512


def build_header(
    name: str,
    size: int = 0,
    type_flag: bytes = b"0",
    linkname: str = "",
    magic: bytes = b"ustar\x0000",
    size_field: bytes | None = None,
    checksum_field: bytes | None = None,
) -> bytes:
    """Build a USTAR header block by hand, with a correct checksum by default."""
    block = bytearray(BLOCK)
    block[0:100] = name.encode("utf-8").ljust(100, b"\0")
    block[100:108] = b"0000644\0"
    block[108:116] = b"0001750\0"
    block[116:124] = b"0001750\0"
    if size_field is None:
        size_field = f"{size:011o}\0".encode("ascii")
    block[124:136] = size_field.ljust(12, b"\0")
    block[136:148] = b"14712345670\0"
    block[156:157] = type_flag
    block[157:257] = linkname.encode("utf-8").ljust(100, b"\0")
    block[257:265] = magic.ljust(8, b"\0")

    if checksum_field is None:
        block[148:156] = b" " * 8
        checksum_field = f"{sum(block):06o}\0 ".encode("ascii")
    block[148:156] = checksum_field

    assert len(block) == BLOCK
    return bytes(block)


def pad(data: bytes) -> bytes:
    """Pad data to a whole number of blocks."""
    remainder = len(data) % BLOCK
    if remainder:
        data += b"\0" * (BLOCK - remainder)
    return data


def build_member(
    name: str, content: bytes = b"", type_flag: bytes = b"0", linkname: str = ""
) -> bytes:
    """Build a header followed by its padded payload."""
    header = build_header(name, len(content), type_flag=type_flag, linkname=linkname)
    return header + pad(content)


def build_archive(*members: bytes, end_marker: bool = True) -> bytes:
    """Concatenate members, followed by the two zero end-of-archive blocks."""
    data = b"".join(members)
    if end_marker:
        data += b"\0" * (2 * BLOCK)
    return data


def garbage_block(fill: bytes = b"\xa5") -> bytes:
    """A block that fails header validation."""
    return fill * BLOCK


def create_tar_bytes(
    files: dict[str, bytes] | None = None,
    directories: list[str] | None = None,
    symlinks: dict[str, str] | None = None,
    pax_headers: dict[str, str] | None = None,
) -> bytes:
    """Create a tar archive in memory with the stdlib tarfile module."""
    buffer = io.BytesIO()

    with tarfile.open(fileobj=buffer, mode="w", format=tarfile.PAX_FORMAT) as tar:
        for directory in directories or []:
            dir_info = tarfile.TarInfo(directory)
            dir_info.type = tarfile.DIRTYPE
            dir_info.mode = 0o755
            tar.addfile(dir_info)

        for name, content in (files or {}).items():
            file_info = tarfile.TarInfo(name)
            file_info.size = len(content)
            if pax_headers:
                file_info.pax_headers = dict(pax_headers)
            tar.addfile(file_info, fileobj=io.BytesIO(content))

        for name, target in (symlinks or {}).items():
            link_info = tarfile.TarInfo(name)
            link_info.type = tarfile.SYMTYPE
            link_info.linkname = target
            tar.addfile(link_info)

    return buffer.getvalue()


class RecordingSink:
    """Archive sink that records every call it receives."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.finalized_with: int | None = None

    def add_file(self, path: str, data: bytes, comment: str | None = None) -> None:
        self.calls.append(("file", path, bytes(data), comment))

    def add_folder(self, path: str) -> None:
        self.calls.append(("folder", path))

    async def finalize(self, compression_level, progress_callback=None) -> bytes:
        self.finalized_with = compression_level
        if progress_callback:
            await progress_callback(100.0)
        return b"recorded"

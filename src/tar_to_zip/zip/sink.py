"""In-memory ZIP archive builder."""

import asyncio
import io
import time
import zipfile
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional

FILE_MODE = 0o644
FOLDER_MODE = 0o40775
MSDOS_DIRECTORY_FLAG = 0x10


@dataclass
class PendingEntry:
    """An entry queued for serialization."""

    path: str
    data: bytes
    comment: Optional[str]
    is_folder: bool


class ZipArchiveSink:
    """Collects files and folders, then serializes them as a ZIP archive.

    Adding the same path twice keeps the position of the first write and the
    content of the last one.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, PendingEntry] = {}
        self._date_time = time.localtime()[:6]

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def paths(self) -> List[str]:
        """Queued entry paths in insertion order."""
        return list(self._entries)

    def add_file(self, path: str, data: bytes, comment: Optional[str] = None) -> None:
        """Queue a file entry.

        Args:
            path: Path inside the archive
            data: File content
            comment: Optional per-entry ZIP comment
        """
        self._entries[path] = PendingEntry(path, bytes(data), comment, False)

    def add_folder(self, path: str) -> None:
        """Queue a folder entry; a trailing slash is added when missing."""
        folder = path.rstrip("/") + "/"
        self._entries[folder] = PendingEntry(folder, b"", None, True)

    async def finalize(
        self,
        compression_level: int = 6,
        progress_callback: Optional[Callable[[float], Awaitable[None]]] = None,
    ) -> bytes:
        """Serialize all queued entries.

        Each entry is compressed in the default executor so the event loop
        stays responsive on large archives.

        Args:
            compression_level: DEFLATE level, 0-9
            progress_callback: Awaited with a 0-100 percentage after each entry

        Returns:
            ZIP archive bytes
        """
        loop = asyncio.get_event_loop()
        buffer = io.BytesIO()
        entries = list(self._entries.values())
        total = len(entries)

        with zipfile.ZipFile(
            buffer, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=compression_level
        ) as archive:
            for index, entry in enumerate(entries, start=1):
                await loop.run_in_executor(
                    None, self._write_entry, archive, entry, compression_level
                )
                if progress_callback:
                    await progress_callback(index * 100 / total)

        if progress_callback and total == 0:
            await progress_callback(100.0)

        return buffer.getvalue()

    def _write_entry(
        self, archive: zipfile.ZipFile, entry: PendingEntry, compression_level: int
    ) -> None:
        """Write one entry to an open archive (sync helper)."""
        info = zipfile.ZipInfo(entry.path, date_time=self._date_time)

        if entry.is_folder:
            info.compress_type = zipfile.ZIP_STORED
            info.external_attr = (FOLDER_MODE << 16) | MSDOS_DIRECTORY_FLAG
            archive.writestr(info, b"")
            return

        info.compress_type = zipfile.ZIP_DEFLATED
        info.external_attr = FILE_MODE << 16
        if entry.comment:
            info.comment = entry.comment.encode("utf-8")
        archive.writestr(info, entry.data, compresslevel=compression_level)

"""Async functional conversion API."""

import asyncio
from pathlib import Path

import aiofiles

from .core.pipeline import ConversionPipeline
from .core.types import ConversionConfig, ProgressCallback
from .exceptions import ArchiveReadError
from .tar.models import ConversionResult, TarEntry
from .tar.walker import iter_entries
from .utils.compression import inflate, is_gzipped
from .utils.filename import zip_filename_for


async def convert_tar_bytes(
    raw: bytes,
    config: ConversionConfig | None = None,
    progress_callback: ProgressCallback | None = None,
) -> ConversionResult:
    """Convert an in-memory tar or tar.gz archive to ZIP.

    Args:
        raw: Archive bytes, optionally gzip-wrapped
        config: Conversion policy (default: ConversionConfig())
        progress_callback: Optional callback receiving (percent, stage)

    Returns:
        ConversionResult: ZIP bytes plus entry count

    Raises:
        ConversionError: If the archive cannot be converted

    Examples:
        result = await convert_tar_bytes(Path("backup.tar").read_bytes())
        Path("backup.zip").write_bytes(result.data)
    """
    pipeline = ConversionPipeline(config=config, progress_callback=progress_callback)
    return await pipeline.convert(raw)


async def convert_tar_file(
    input_path: str | Path,
    output_path: str | Path | None = None,
    config: ConversionConfig | None = None,
    progress_callback: ProgressCallback | None = None,
) -> Path:
    """Convert a .tar, .tar.gz or .tgz file on disk to a .zip file.

    Args:
        input_path: Archive to convert
        output_path: Destination path (default: input name with a .zip
            extension, next to the input)
        config: Conversion policy (default: ConversionConfig())
        progress_callback: Optional callback receiving (percent, stage)

    Returns:
        Path: Written ZIP file

    Raises:
        ArchiveReadError: If the input cannot be read
        ConversionError: If the archive cannot be converted

    Examples:
        # Writes ./exports/site.zip
        await convert_tar_file("./exports/site.tar.gz")

        # Explicit destination
        await convert_tar_file("logs.tgz", "/tmp/logs-2024.zip")
    """
    source = Path(input_path)
    if not source.is_file():
        raise ArchiveReadError(f"Tar file not found: {input_path}")

    try:
        async with aiofiles.open(source, "rb") as f:
            raw = await f.read()
    except OSError as e:
        raise ArchiveReadError(f"Failed to read {source}: {e}") from e

    result = await convert_tar_bytes(raw, config, progress_callback)

    if output_path is None:
        target = source.with_name(zip_filename_for(source.name))
    else:
        target = Path(output_path)

    async with aiofiles.open(target, "wb") as f:
        await f.write(result.data)

    return target


async def list_tar_entries(
    raw: bytes, config: ConversionConfig | None = None
) -> list[TarEntry]:
    """List the entries of a tar or tar.gz archive without converting it.

    PAX headers and unreadable blocks are skipped with the same recovery
    policy the converter applies.

    Args:
        raw: Archive bytes, optionally gzip-wrapped
        config: Conversion policy (default: ConversionConfig())

    Returns:
        list[TarEntry]: Entries in archive order
    """
    data = raw
    if is_gzipped(raw):
        data = await asyncio.get_event_loop().run_in_executor(None, inflate, raw)

    return [entry for entry, _ in iter_entries(data, config)]

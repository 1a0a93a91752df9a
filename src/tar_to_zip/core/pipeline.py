"""Tar to zip conversion pipeline."""

import asyncio
import inspect
import logging
from typing import Callable, Optional, Union

from ..exceptions import DecompressionError
from ..tar.dispatcher import dispatch_entry
from ..tar.models import ConversionResult
from ..tar.walker import ArchiveWalker
from ..utils.compression import inflate, is_gzipped
from ..zip.sink import ZipArchiveSink
from .types import ArchiveSink, ConversionConfig, Decompressor, ProgressCallback

logger = logging.getLogger(__name__)

DECOMPRESS_PROGRESS = 0
PROCESS_PROGRESS = 30
SERIALIZE_PROGRESS = 60
COMPLETE_PROGRESS = 100


class ConversionPipeline:
    """Decompress, walk, dispatch and serialize one archive."""

    def __init__(
        self,
        config: Optional[ConversionConfig] = None,
        progress_callback: Optional[ProgressCallback] = None,
        decompressor: Decompressor = inflate,
        sink_factory: Callable[[], ArchiveSink] = ZipArchiveSink,
    ) -> None:
        """Initialize the pipeline.

        Args:
            config: Conversion policy, defaults to ConversionConfig()
            progress_callback: Optional callback receiving (percent, stage);
                may be a plain function or a coroutine function
            decompressor: Gzip inflater, run in the default executor
            sink_factory: Builds a fresh archive sink per conversion
        """
        self.config = config or ConversionConfig()
        self.progress_callback = progress_callback
        self._decompressor = decompressor
        self._sink_factory = sink_factory

    async def convert(self, raw: Union[bytes, bytearray]) -> ConversionResult:
        """Convert a tar or tar.gz buffer to a ZIP archive.

        Args:
            raw: Archive bytes, optionally gzip-wrapped

        Returns:
            ConversionResult with the ZIP bytes

        Raises:
            DecompressionError: If gzip input cannot be inflated
            TruncatedArchiveError: If the tar stream ends early
            CorruptArchiveError: If the tar stream is unusable
        """
        data = raw
        was_gzipped = is_gzipped(raw)

        if was_gzipped:
            await self._report(DECOMPRESS_PROGRESS, "Decompressing gzip...")
            data = await self._decompress(bytes(raw))
            logger.info("Inflated %d bytes to %d bytes", len(raw), len(data))

        await self._report(PROCESS_PROGRESS, "Processing tar contents...")
        sink = self._sink_factory()
        entry_count = await self._process(data, sink)
        logger.info("Accepted %d tar entries", entry_count)

        await self._report(SERIALIZE_PROGRESS, "Creating zip file...")
        archive = await sink.finalize(
            self.config.compression_level, self._report_serialization
        )

        await self._report(COMPLETE_PROGRESS, "Conversion complete!")
        logger.info("Created zip archive of %d bytes", len(archive))

        return ConversionResult(
            data=archive, entry_count=entry_count, was_gzipped=was_gzipped
        )

    async def _decompress(self, raw: bytes) -> bytes:
        loop = asyncio.get_event_loop()
        try:
            return await loop.run_in_executor(None, self._decompressor, raw)
        except DecompressionError:
            raise
        except Exception as e:
            raise DecompressionError(
                "Failed to decompress gzip file. The file might be corrupted."
            ) from e

    async def _process(
        self, data: Union[bytes, bytearray], sink: ArchiveSink
    ) -> int:
        walker = ArchiveWalker(data, self.config)

        for index, (entry, payload) in enumerate(walker, start=1):
            if dispatch_entry(entry, payload, sink, self.config):
                walker.mark_accepted()

            # Give cancellation a chance between walker steps
            if index % self.config.yield_every == 0:
                await asyncio.sleep(0)

        return walker.state.accepted_entries

    async def _report_serialization(self, percent: float) -> None:
        span = COMPLETE_PROGRESS - SERIALIZE_PROGRESS
        await self._report(SERIALIZE_PROGRESS + percent * span / 100, None)

    async def _report(self, percent: float, stage: Optional[str]) -> None:
        if stage:
            logger.info(stage)

        if not self.progress_callback:
            return

        if inspect.iscoroutinefunction(self.progress_callback):
            await self.progress_callback(percent, stage)
        else:
            self.progress_callback(percent, stage)

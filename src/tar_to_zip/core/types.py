"""Shared configuration and interface types."""

from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Protocol, Union

from ..tar.constants import PAX_MARKER

# Receives (percent, stage label); stage is None for fractional updates
ProgressCallback = Callable[[float, Optional[str]], Union[None, Awaitable[None]]]

Decompressor = Callable[[bytes], bytes]


@dataclass(frozen=True)
class ConversionConfig:
    """Policy knobs for a tar to zip conversion."""

    max_consecutive_invalid_headers: int = 3
    skip_empty_files: bool = True
    compression_level: int = 6
    pax_marker: str = PAX_MARKER
    yield_every: int = 64

    def __post_init__(self) -> None:
        if self.max_consecutive_invalid_headers < 1:
            raise ValueError("max_consecutive_invalid_headers must be at least 1")
        if not 0 <= self.compression_level <= 9:
            raise ValueError(
                f"compression_level must be between 0 and 9: {self.compression_level}"
            )
        if not self.pax_marker:
            raise ValueError("pax_marker must not be empty")
        if self.yield_every < 1:
            raise ValueError("yield_every must be at least 1")


class ArchiveSink(Protocol):
    """Destination archive builder fed by the entry dispatcher."""

    def add_file(
        self, path: str, data: bytes, comment: Optional[str] = None
    ) -> None: ...

    def add_folder(self, path: str) -> None: ...

    async def finalize(
        self,
        compression_level: int,
        progress_callback: Optional[Callable[[float], Awaitable[None]]] = None,
    ) -> bytes: ...

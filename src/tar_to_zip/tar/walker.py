"""Sequential traversal of a USTAR byte buffer with corruption recovery."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple, Union

from ..core.types import ConversionConfig
from ..exceptions import (
    CorruptArchiveError,
    EmptyArchiveError,
    HeaderDecodeError,
    TruncatedArchiveError,
)
from .constants import BLOCK_SIZE, PAX_MARKER
from .header import decode_header, is_zero_block, padded_size, validate_header
from .models import TarEntry, WalkState

logger = logging.getLogger(__name__)

TarMember = Tuple[TarEntry, memoryview]


class StepKind(Enum):
    """Outcome of scanning the block under the cursor."""

    END = "end"
    SKIP = "skip"
    PAX = "pax"
    ENTRY = "entry"


@dataclass(frozen=True)
class WalkStep:
    """A single scan result: what was found and how far to advance."""

    kind: StepKind
    advance: int = 0
    entry: Optional[TarEntry] = None
    payload: Optional[memoryview] = None


def scan_step(
    buffer: memoryview, offset: int, pax_marker: str = PAX_MARKER
) -> WalkStep:
    """Inspect the header block at ``offset``.

    Recoverable problems come back as SKIP steps. Truncation is fatal and
    raised immediately.

    Args:
        buffer: Whole archive
        offset: Block-aligned cursor
        pax_marker: Substring identifying PAX extended header entries

    Returns:
        The step to apply to the walk state

    Raises:
        TruncatedArchiveError: If the header or the payload runs past the buffer
    """
    remaining = len(buffer) - offset

    # Archives that stop without an end-of-archive marker
    if remaining == 0 and offset > 0:
        return WalkStep(StepKind.END)

    if remaining < BLOCK_SIZE:
        raise TruncatedArchiveError("Unexpected end of tar file")

    block = buffer[offset : offset + BLOCK_SIZE]
    if is_zero_block(block):
        return WalkStep(StepKind.END)

    if not validate_header(block):
        return WalkStep(StepKind.SKIP, advance=BLOCK_SIZE)

    try:
        entry = decode_header(block, pax_marker)
    except HeaderDecodeError as e:
        logger.debug("Undecodable header at offset %d: %s", offset, e)
        return WalkStep(StepKind.SKIP, advance=BLOCK_SIZE)

    advance = BLOCK_SIZE + padded_size(entry.size)
    if entry.is_pax_header:
        return WalkStep(StepKind.PAX, advance=advance, entry=entry)

    start = offset + BLOCK_SIZE
    end = start + entry.size
    if end > len(buffer):
        raise TruncatedArchiveError(
            f"Unexpected end of file while reading {entry.name}"
        )

    return WalkStep(
        StepKind.ENTRY, advance=advance, entry=entry, payload=buffer[start:end]
    )


class ArchiveWalker:
    """Lazy, single-pass iterator over the members of a tar buffer.

    Yields ``(entry, payload)`` pairs in archive order. The consumer reports
    each entry it actually used with mark_accepted(); an archive that ends
    with no accepted entries is rejected.
    """

    def __init__(
        self,
        buffer: Union[bytes, bytearray, memoryview],
        config: Optional[ConversionConfig] = None,
    ) -> None:
        """Initialize the walker.

        Args:
            buffer: Uncompressed tar data
            config: Conversion policy, defaults to ConversionConfig()
        """
        self._buffer = memoryview(buffer)
        self.config = config or ConversionConfig()
        self.state = WalkState()
        self._members = self._walk()

    def __iter__(self) -> "ArchiveWalker":
        return self

    def __next__(self) -> TarMember:
        return next(self._members)

    def mark_accepted(self) -> None:
        """Record that the last yielded entry reached the sink."""
        self.state.accepted_entries += 1

    def _walk(self) -> Iterator[TarMember]:
        state = self.state
        threshold = self.config.max_consecutive_invalid_headers

        while True:
            step = scan_step(self._buffer, state.offset, self.config.pax_marker)

            if step.kind is StepKind.END:
                if state.accepted_entries == 0:
                    raise EmptyArchiveError("No valid files found in the archive")
                logger.debug(
                    "End of archive at offset %d (%d entries accepted)",
                    state.offset,
                    state.accepted_entries,
                )
                return

            if step.kind is StepKind.SKIP:
                state.consecutive_invalid_headers += 1
                logger.debug(
                    "Invalid header at offset %d (%d consecutive)",
                    state.offset,
                    state.consecutive_invalid_headers,
                )
                if state.consecutive_invalid_headers >= threshold:
                    raise CorruptArchiveError(
                        "Multiple invalid headers found - file might be corrupted"
                    )
                state.offset += step.advance
                continue

            state.consecutive_invalid_headers = 0

            if step.kind is StepKind.PAX:
                logger.debug("Skipping PAX header %s", step.entry.name)
                state.offset += step.advance
                continue

            yield step.entry, step.payload
            state.offset += step.advance


def iter_entries(
    buffer: Union[bytes, bytearray, memoryview],
    config: Optional[ConversionConfig] = None,
) -> Iterator[TarMember]:
    """Iterate over all members, counting every one of them as accepted.

    Useful for listing an archive without feeding a sink.
    """
    walker = ArchiveWalker(buffer, config)
    for entry, payload in walker:
        walker.mark_accepted()
        yield entry, payload

"""Routing of decoded tar entries into an archive sink."""

import logging
from typing import Optional, Union

from ..core.types import ArchiveSink, ConversionConfig
from .constants import SYMLINK_COMMENT
from .models import TarEntry, TarEntryType

logger = logging.getLogger(__name__)


def dispatch_entry(
    entry: TarEntry,
    payload: Union[bytes, memoryview],
    sink: ArchiveSink,
    config: Optional[ConversionConfig] = None,
) -> bool:
    """Write one entry to the sink according to its type.

    Symbolic links become small text files holding the link target, since
    ZIP has no portable symlink representation.

    Args:
        entry: Decoded tar entry
        payload: Entry content
        sink: Destination archive
        config: Conversion policy, defaults to ConversionConfig()

    Returns:
        True if the sink received the entry
    """
    config = config or ConversionConfig()

    if entry.type is TarEntryType.REGULAR_FILE:
        if entry.size == 0 and config.skip_empty_files:
            logger.debug("Skipping empty file %s", entry.name)
            return False
        sink.add_file(entry.name, bytes(payload))
        return True

    if entry.type is TarEntryType.SYMBOLIC_LINK:
        sink.add_file(
            entry.name, entry.link_target.encode("utf-8"), comment=SYMLINK_COMMENT
        )
        return True

    if entry.type is TarEntryType.DIRECTORY:
        sink.add_folder(entry.name)
        return True

    logger.debug("Ignoring %s with type flag %r", entry.name, entry.type_code)
    return False

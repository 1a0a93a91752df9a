"""Example usage of the async tar to zip converter."""

import asyncio
import logging
import sys

from tar_to_zip import ConversionError, convert_tar_file, list_tar_entries

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def show_progress(percent, stage):
    """Log stage changes; fractional updates are ignored."""
    if stage:
        logger.info(f"[{percent:5.1f}%] {stage}")


async def main(tar_path: str) -> int:
    """List an archive, then convert it next to the input."""
    try:
        with open(tar_path, "rb") as f:
            entries = await list_tar_entries(f.read())
        logger.info(f"Found {len(entries)} entries")
        for entry in entries[:10]:
            logger.info(f"  {entry.type.value:<14} {entry.size:>10}  {entry.name}")

        target = await convert_tar_file(tar_path, progress_callback=show_progress)
        logger.info(f"✓ Wrote {target}")
        return 0

    except ConversionError as e:
        logger.error(f"Conversion failed: {e}")
        return 1


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("usage: python examples/convert_example.py ARCHIVE.tar[.gz]")
        sys.exit(2)

    sys.exit(asyncio.run(main(sys.argv[1])))

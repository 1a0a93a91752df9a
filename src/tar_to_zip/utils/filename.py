"""Output file naming."""

import re

# Matches the tar extensions the converter accepts
TAR_SUFFIX_PATTERN = re.compile(r"\.(tar|tar\.gz|tgz)$", re.IGNORECASE)


def zip_filename_for(name: str) -> str:
    """Derive the ZIP file name for a tar archive name.

    Examples:
        zip_filename_for("backup.tar.gz")  # "backup.zip"
        zip_filename_for("logs.tgz")       # "logs.zip"
        zip_filename_for("data.bin")       # "data.bin.zip"
    """
    converted, count = TAR_SUFFIX_PATTERN.subn(".zip", name)
    if count:
        return converted
    return f"{name}.zip"

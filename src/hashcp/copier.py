"""Byte-for-byte file copying."""

import logging
import os
import shutil
from pathlib import Path

import aiofiles

from .config import BUFFER_SIZE

logger = logging.getLogger(__name__)


def destination_for(source: Path, destination: Path, to_dir: bool) -> Path:
    """
    Compute where a source file is copied to.

    Parameters
    ----------
    source : Path
        Resolved source file
    destination : Path
        Destination given on the command line
    to_dir : bool
        Whether the destination was an existing directory at start

    Returns
    -------
    Path
        ``destination / source.name`` for a directory, else ``destination``
    """
    if to_dir:
        return destination / source.name
    return destination


async def copy_file(source: Path, destination: Path, buffer_size: int = BUFFER_SIZE) -> int:
    """
    Stream one file to one destination.

    The destination is created or truncated; its parent directory must exist.
    Data goes through plain buffered reads and writes rather than
    ``shutil.copyfile``, which may take platform copy shortcuts.

    Parameters
    ----------
    source : Path
        Existing file to read
    destination : Path
        File to create or truncate
    buffer_size : int
        Read/write chunk size in bytes

    Returns
    -------
    int
        Number of bytes copied

    Raises
    ------
    shutil.SameFileError
        If source and destination are the same file
    OSError
        If opening, reading or writing fails
    """
    if destination.exists() and os.path.samefile(source, destination):
        raise shutil.SameFileError(f"'{source}' and '{destination}' are the same file")

    logger.debug(f"copying {source} -> {destination}")

    bytes_copied = 0
    async with aiofiles.open(source, "rb") as src, aiofiles.open(
        destination, "wb", buffering=buffer_size
    ) as dst:
        while chunk := await src.read(buffer_size):
            await dst.write(chunk)
            bytes_copied += len(chunk)

    logger.debug(f"copied {bytes_copied:,} bytes to {destination}")
    return bytes_copied

"""Content hashing for integrity verification."""

import hashlib
import logging
import os
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import xxhash

from .config import BUFFER_SIZE, DEFAULT_HASH_ALGORITHM, HASH_ALGORITHMS

logger = logging.getLogger(__name__)


class HashCalculator:
    """
    Calculate file hashes for integrity verification.

    Parameters
    ----------
    algorithm : str, default="blake2b"
        Hash algorithm to use. Supported: blake2b (256-bit digest), sha256,
        sha3_256, xxh128

    Raises
    ------
    ValueError
        If unsupported hash algorithm is specified
    """

    def __init__(self, algorithm: str = DEFAULT_HASH_ALGORITHM) -> None:
        self.algorithm = algorithm.lower()
        if self.algorithm not in HASH_ALGORITHMS:
            raise ValueError(f"Unsupported hash algorithm: {algorithm}")

    def new(self):
        """Return a fresh hasher object for the configured algorithm."""
        if self.algorithm == "xxh128":
            return xxhash.xxh128()
        if self.algorithm == "blake2b":
            return hashlib.blake2b(digest_size=32)
        return hashlib.new(self.algorithm)

    def calculate(self, file_path: Path, buffer_size: int = BUFFER_SIZE) -> str:
        """
        Calculate hash of file.

        Parameters
        ----------
        file_path : Path
            Path to file to hash
        buffer_size : int
            Buffer size for reading file

        Returns
        -------
        str
            Hexadecimal hash digest

        Raises
        ------
        OSError
            If the file cannot be opened or read
        """
        hasher = self.new()
        with open(file_path, "rb") as f:
            while chunk := f.read(buffer_size):
                hasher.update(chunk)

        digest = hasher.hexdigest()
        logger.debug(f"hash {self.algorithm.upper()}:{digest} {file_path}")
        return digest


def hash_files(
    paths: Iterable[Path],
    algorithm: str = DEFAULT_HASH_ALGORITHM,
    buffer_size: int = BUFFER_SIZE,
    max_workers: int | None = None,
) -> dict[str, str]:
    """
    Hash files in parallel, keyed by basename.

    Parameters
    ----------
    paths : Iterable[Path]
        Files to hash
    algorithm : str, default="blake2b"
        Hash algorithm to use
    buffer_size : int
        Buffer size for reading files
    max_workers : int | None, default=None
        Thread pool size; defaults to the CPU count

    Returns
    -------
    dict[str, str]
        Basename to hex digest. Files sharing a basename overwrite each
        other; the last one in ``paths`` wins.

    Raises
    ------
    OSError
        If any file cannot be read. Hashes already computed are discarded.
    """
    paths = list(paths)
    if not paths:
        return {}

    calculator = HashCalculator(algorithm)
    workers = min(max_workers or os.cpu_count() or 1, len(paths))

    with ThreadPoolExecutor(max_workers=workers) as executor:
        digests = list(
            executor.map(lambda path: calculator.calculate(path, buffer_size), paths)
        )

    return {path.name: digest for path, digest in zip(paths, digests)}

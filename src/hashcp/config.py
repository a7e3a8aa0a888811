"""Run configuration for hashcp."""

import argparse
from dataclasses import dataclass

BUFFER_SIZE = 8 * 1024 * 1024  # 8MB
HASH_ALGORITHMS = ["blake2b", "sha256", "sha3_256", "xxh128"]
DEFAULT_HASH_ALGORITHM = "blake2b"


@dataclass
class CopyConfig:
    """
    Configuration for a copy-and-verify run.

    Attributes
    ----------
    buffer_size : int, default=8388608
        Read/write chunk size in bytes for copying and hashing
    hash_algorithm : str, default="blake2b"
        Content hash algorithm, one of HASH_ALGORITHMS
    verbose : bool, default=False
        Emit elapsed-time checkpoints
    max_workers : int | None, default=None
        Hashing thread pool size (None uses the CPU count)
    """

    buffer_size: int = BUFFER_SIZE
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    verbose: bool = False
    max_workers: int | None = None

    def __post_init__(self):
        """Validate configuration."""
        if self.buffer_size <= 0:
            raise ValueError(f"Buffer size must be positive, got {self.buffer_size}")

        if self.hash_algorithm.lower() not in HASH_ALGORITHMS:
            raise ValueError(f"Invalid hash algorithm: {self.hash_algorithm}")
        self.hash_algorithm = self.hash_algorithm.lower()

        if self.max_workers is not None and self.max_workers <= 0:
            raise ValueError(f"Worker count must be positive, got {self.max_workers}")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "CopyConfig":
        """Create config from command-line arguments."""
        return cls(
            buffer_size=args.buffer_size,
            hash_algorithm=args.hash if args.hash else DEFAULT_HASH_ALGORITHM,
            verbose=args.verbose,
            max_workers=args.workers,
        )

"""
Copy-and-verify orchestration.

Sources may be files, directories (immediate files only) or glob patterns.
Source files are hashed on a background thread while they are copied, the
destinations are hashed afterwards, and every file whose hashes differ is
listed in the resulting VerificationReport.

Architecture:
- Core logic (CopyVerifier) returns a VerificationReport and never prints
- Source hashing and copying run as a fork-join: the background task is
  always joined, and its failure re-raised, before run() returns
"""

import asyncio
import errno
import logging
import os
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .config import CopyConfig
from .copier import copy_file, destination_for
from .errors import AmbiguousDestinationError, ThreadJoinError
from .hasher import hash_files
from .resolver import duplicate_names, resolve_paths

logger = logging.getLogger(__name__)


# ============================================================================
# Data Models
# ============================================================================


@dataclass
class VerificationReport:
    """
    Outcome of a copy-and-verify run.

    Attributes
    ----------
    sources : list[Path], default=[]
        Resolved source files, in copy order
    destinations : list[Path], default=[]
        Destination files written, parallel to ``sources``
    source_hashes : dict[str, str], default={}
        Source basename to digest
    destination_hashes : dict[str, str], default={}
        Destination basename to digest
    mismatches : list[str], default=[]
        Source basenames whose destination digest differs
    duration : float, default=0.0
        Total run time in seconds
    """

    sources: list[Path] = field(default_factory=list)
    destinations: list[Path] = field(default_factory=list)
    source_hashes: dict[str, str] = field(default_factory=dict)
    destination_hashes: dict[str, str] = field(default_factory=dict)
    mismatches: list[str] = field(default_factory=list)
    duration: float = 0.0

    @property
    def verified(self) -> bool:
        """True when every destination matched its source."""
        return not self.mismatches


class Stopwatch:
    """Log elapsed-time checkpoints when enabled."""

    def __init__(self, enabled: bool) -> None:
        self.enabled = enabled
        self.start_time = time.perf_counter()

    def elapsed(self) -> float:
        """
        Seconds since the stopwatch was created.

        Returns
        -------
        float
            Elapsed wall-clock time in seconds
        """
        return time.perf_counter() - self.start_time

    def checkpoint(self, label: str) -> None:
        """
        Log the elapsed time with a label, if enabled.

        Parameters
        ----------
        label : str
            Name of the point reached in the run
        """
        if self.enabled:
            logger.info(f"[{self.elapsed():.6f}s] {label}")


# ============================================================================
# Orchestrator (UI-agnostic)
# ============================================================================


class CopyVerifier:
    """
    Copy resolved sources to a destination and verify them by hash.

    Parameters
    ----------
    sources : Sequence[str]
        Source specifications (files, directories or glob patterns)
    destination : str | Path
        Existing directory, or a file path when exactly one source resolves.
        A trailing path separator requires an existing directory.
    config : CopyConfig | None, default=None
        Run configuration (defaults apply when None)
    """

    def __init__(
        self,
        sources: Sequence[str],
        destination: str | Path,
        config: CopyConfig | None = None,
    ):
        self.sources = list(sources)
        # Path() drops a trailing separator, so keep the original spelling
        self.destination_spec = str(destination)
        self.destination = Path(destination)
        self.config = config if config else CopyConfig()

    async def run(self) -> VerificationReport:
        """
        Execute the copy and verification.

        Returns
        -------
        VerificationReport
            Hashes and mismatching names

        Raises
        ------
        AmbiguousDestinationError
            If several sources resolve and the destination is not a directory
        NotADirectoryError
            If the destination ends with a separator but is not a directory
        OSError
            If any file cannot be read or written
        ThreadJoinError
            If background hashing failed for a reason other than I/O
        """
        stopwatch = Stopwatch(self.config.verbose)
        stopwatch.checkpoint("start")

        report = VerificationReport()
        sources = list(resolve_paths(self.sources))
        to_dir = self.destination.is_dir()

        if self._names_directory() and not to_dir:
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), self.destination_spec)

        if len(sources) > 1 and not to_dir:
            raise AmbiguousDestinationError()

        if not sources:
            logger.warning("No source files resolved, nothing to copy")
            stopwatch.checkpoint("done")
            report.duration = stopwatch.elapsed()
            return report

        # Duplicate basenames share one entry in the name-keyed hash mappings
        for name in duplicate_names(sources):
            logger.warning(f"multiple sources named {name}; only one is verified")

        stopwatch.checkpoint("hash/copy phase start")
        hash_task = asyncio.ensure_future(
            asyncio.to_thread(self._hash_sources, list(sources), stopwatch)
        )

        destinations: list[Path] = []
        try:
            for source in sources:
                target = destination_for(source, self.destination, to_dir)
                await copy_file(source, target, self.config.buffer_size)
                destinations.append(target)
        except BaseException:
            # The copy error wins, but background hashing is joined first
            await asyncio.gather(hash_task, return_exceptions=True)
            raise
        stopwatch.checkpoint("copying complete")

        source_hashes = await self._join(hash_task)

        stopwatch.checkpoint("destination hashing start")
        destination_hashes = hash_files(
            destinations,
            self.config.hash_algorithm,
            self.config.buffer_size,
            self.config.max_workers,
        )
        stopwatch.checkpoint("destination hashing complete")

        report.sources = sources
        report.destinations = destinations
        report.source_hashes = source_hashes
        report.destination_hashes = destination_hashes
        report.mismatches = self._compare(sources, destinations, source_hashes, destination_hashes)

        stopwatch.checkpoint("done")
        report.duration = stopwatch.elapsed()
        return report

    def _names_directory(self) -> bool:
        """True when the destination was spelled with a trailing separator."""
        separators = tuple(sep for sep in (os.sep, os.altsep) if sep)
        return self.destination_spec.endswith(separators)

    def _hash_sources(self, sources: list[Path], stopwatch: Stopwatch) -> dict[str, str]:
        """Background task body: hash every source file."""
        hashes = hash_files(
            sources,
            self.config.hash_algorithm,
            self.config.buffer_size,
            self.config.max_workers,
        )
        stopwatch.checkpoint("source hashing complete")
        return hashes

    @staticmethod
    async def _join(task: asyncio.Future) -> dict[str, str]:
        """Wait for the background hashing task and re-raise its failure."""
        try:
            return await task
        except OSError:
            raise
        except Exception as e:
            raise ThreadJoinError() from e

    @staticmethod
    def _compare(
        sources: list[Path],
        destinations: list[Path],
        source_hashes: dict[str, str],
        destination_hashes: dict[str, str],
    ) -> list[str]:
        """
        Return names of sources whose destination hash differs.

        A single file copied to a literal path may be renamed, so each source
        name is looked up under the name of the destination it was copied to.
        """
        destination_names = {
            source.name: target.name for source, target in zip(sources, destinations)
        }

        mismatches = []
        for name, source_hash in source_hashes.items():
            destination_name = destination_names[name]
            if destination_name not in destination_hashes:
                raise RuntimeError(f"no destination hash recorded for {destination_name}")
            if destination_hashes[destination_name] != source_hash:
                mismatches.append(name)
        return mismatches



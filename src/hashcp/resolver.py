"""
Source resolution: turn command-line source specifications into files.

Each specification is classified once as a directory, a literal file or a
glob pattern, and expanded into a lazy sequence of regular-file paths.
Resolution is best effort: a specification that cannot be listed, matched or
read contributes no paths instead of aborting the run.
"""

import glob
import logging
import os
from collections import Counter
from collections.abc import Iterable, Iterator
from enum import Enum
from itertools import chain
from pathlib import Path

logger = logging.getLogger(__name__)


class SourceKind(Enum):
    """
    How a source specification is expanded.

    Attributes
    ----------
    DIRECTORY : str
        Existing directory, immediate regular files only
    LITERAL : str
        Existing regular file, yielded as-is
    GLOB : str
        Anything else, expanded as a glob pattern
    """

    DIRECTORY = "directory"
    LITERAL = "literal"
    GLOB = "glob"


def classify(spec: str) -> SourceKind:
    """
    Classify a source specification.

    Parameters
    ----------
    spec : str
        Source specification as given on the command line

    Returns
    -------
    SourceKind
        DIRECTORY or LITERAL when the path exists, GLOB otherwise
    """
    path = Path(spec)
    if path.is_dir():
        return SourceKind.DIRECTORY
    if path.is_file():
        return SourceKind.LITERAL
    return SourceKind.GLOB


def _directory_files(path: Path) -> Iterator[Path]:
    """Yield regular files directly inside path, sorted by name."""
    try:
        with os.scandir(path) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        logger.debug(f"cannot list {path}: {e}")
        return

    for entry in entries:
        # Entries may vanish or become unreadable after listing
        try:
            is_file = entry.is_file()
        except OSError:
            continue
        if is_file:
            yield Path(entry.path)


def _glob_files(pattern: str) -> Iterator[Path]:
    """Yield regular files matching pattern, sorted; wildcards match dotfiles."""
    try:
        matches = sorted(glob.glob(pattern, include_hidden=True))
    except (OSError, ValueError) as e:
        logger.debug(f"cannot expand {pattern!r}: {e}")
        return

    for match in matches:
        path = Path(match)
        if path.is_file():
            yield path


def expand(spec: str) -> Iterator[Path]:
    """
    Expand one source specification into regular-file paths.

    Parameters
    ----------
    spec : str
        Directory, file or glob pattern

    Yields
    ------
    Path
        Regular files, never directories
    """
    kind = classify(spec)
    if kind is SourceKind.DIRECTORY:
        yield from _directory_files(Path(spec))
    elif kind is SourceKind.LITERAL:
        yield Path(spec)
    else:
        found = False
        for path in _glob_files(spec):
            found = True
            yield path
        if not found:
            logger.debug(f"no files matched {spec!r}")


def resolve_paths(specs: Iterable[str]) -> Iterator[Path]:
    """
    Resolve source specifications into a flat, source-major file sequence.

    Parameters
    ----------
    specs : Iterable[str]
        Source specifications in command-line order

    Returns
    -------
    Iterator[Path]
        Lazy concatenation of every specification's expansion
    """
    return chain.from_iterable(expand(spec) for spec in specs)


def duplicate_names(paths: Iterable[Path]) -> list[str]:
    """Return basenames shared by more than one path, in first-seen order."""
    counts = Counter(path.name for path in paths)
    return [name for name, count in counts.items() if count > 1]

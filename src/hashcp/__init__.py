"""
hashcp: copy files and verify the copies by content hash.

Sources (files, directories or glob patterns) are copied to a destination
while they are hashed in the background; the destinations are then hashed
and any file whose content differs is reported.
"""

from .cli import main
from .config import CopyConfig
from .copier import copy_file, destination_for
from .errors import AmbiguousDestinationError, HashcpError, ThreadJoinError
from .hasher import HashCalculator, hash_files
from .resolver import SourceKind, classify, expand, resolve_paths
from .verifier import CopyVerifier, Stopwatch, VerificationReport

__version__ = "1.0.0"
__author__ = "thomjiji"
__description__ = "Copy files and verify the copies by content hash"

__all__ = [
    "AmbiguousDestinationError",
    "CopyConfig",
    "CopyVerifier",
    "HashCalculator",
    "HashcpError",
    "SourceKind",
    "Stopwatch",
    "ThreadJoinError",
    "VerificationReport",
    "classify",
    "copy_file",
    "destination_for",
    "expand",
    "hash_files",
    "main",
    "resolve_paths",
]

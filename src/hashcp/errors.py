"""Error types raised by hashcp."""


class HashcpError(Exception):
    """Base class for hashcp failures."""


class AmbiguousDestinationError(HashcpError):
    """Multiple sources resolved but the destination is not a directory."""

    def __init__(self, message: str = "copying multiple files to one path; probable data loss"):
        super().__init__(message)


class ThreadJoinError(HashcpError):
    """
    The background hashing task could not be joined.

    Raised instead of the underlying exception when the failure is not an
    ordinary I/O error, so a concurrency fault is distinguishable from a data
    fault. The original exception is available as ``__cause__``.
    """

    def __init__(self, message: str = "thread join failed"):
        super().__init__(message)

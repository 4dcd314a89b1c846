"""Error taxonomy for archives and stored-state samplers.

Every failure carries an ErrorKind so callers can branch on the category
without matching on exception classes:

    try:
        storage.load("states.bin")
    except StateStorageError as exc:
        if exc.kind is ErrorKind.SIGNATURE_MISMATCH:
            ...
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum, auto


class ErrorKind(Enum):
    """Category of a state storage failure."""

    IO_UNAVAILABLE = auto()
    """Stream is closed, not readable/writable, or the path cannot be opened."""

    BAD_MAGIC = auto()
    """Archive does not start with the archive marker."""

    SIGNATURE_MISMATCH = auto()
    """Archive signature differs from the loading space's signature."""

    TRUNCATED = auto()
    """Declared lengths exceed the bytes available in the stream."""

    INCOMPATIBLE_SPACE = auto()
    """Sampler requested for a space whose signature differs from the stored states'."""

    STALE_STATES = auto()
    """Sampler used after the storage it draws from was cleared or released."""


class StateStorageError(Exception):
    """Base class for all statestore failures."""

    kind: ErrorKind


class IoUnavailableError(StateStorageError):
    """Raised when the underlying stream or file cannot be used."""

    kind = ErrorKind.IO_UNAVAILABLE


class BadMagicError(StateStorageError):
    """Raised when the archive marker is missing or wrong."""

    kind = ErrorKind.BAD_MAGIC


class SignatureMismatchError(StateStorageError):
    """Raised when the archive was written for a different state space."""

    kind = ErrorKind.SIGNATURE_MISMATCH


class TruncatedError(StateStorageError):
    """Raised when the archive ends before its declared contents."""

    kind = ErrorKind.TRUNCATED


class IncompatibleSpaceError(StateStorageError):
    """Raised when a sampler is requested for an incompatible state space.

    Attributes:
        expected: Signature recorded when the sampler allocator was created.
        actual: Signature of the space the sampler was requested for.
        space_name: Name of that space.
    """

    kind = ErrorKind.INCOMPATIBLE_SPACE

    def __init__(self, expected: Sequence[int], actual: Sequence[int], space_name: str):
        self.expected = tuple(expected)
        self.actual = tuple(actual)
        self.space_name = space_name
        super().__init__(
            "Cannot allocate state sampler for a state space whose signature does not "
            f"match that of the stored states. Expected signature {_join(self.expected)} "
            f"but space {space_name} has signature {_join(self.actual)}"
        )


class StaleStatesError(StateStorageError):
    """Raised when a sampler outlives the states it was built over."""

    kind = ErrorKind.STALE_STATES


def _join(values: Sequence[int]) -> str:
    return " ".join(str(v) for v in values)


class ArchiveWarning(UserWarning):
    """Emitted instead of raising when StorageSettings.strict is False."""

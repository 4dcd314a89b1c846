"""Core primitives: type aliases and the error taxonomy.

Architecture Note:
    core/ holds stateless definitions shared by every other package.
    For stateful services, see storage/ and sampling/.
"""

from statestore.core.errors import (
    ArchiveWarning,
    BadMagicError,
    ErrorKind,
    IncompatibleSpaceError,
    IoUnavailableError,
    SignatureMismatchError,
    StaleStatesError,
    StateStorageError,
    TruncatedError,
)
from statestore.core.types import Signature, State

__all__ = [
    # Types
    "Signature",
    "State",
    # Errors
    "ErrorKind",
    "ArchiveWarning",
    "StateStorageError",
    "IoUnavailableError",
    "BadMagicError",
    "SignatureMismatchError",
    "TruncatedError",
    "IncompatibleSpaceError",
    "StaleStatesError",
]

"""statestore: persist and resample collections of state-space states.

Usage:
    from statestore import RealVectorBounds, RealVectorStateSpace, StateStorage

    space = RealVectorStateSpace(2, RealVectorBounds.uniform(2, -1.0, 1.0))

    storage = StateStorage(space)
    storage.generate_samples(5)
    storage.store("states.bin")

    restored = StateStorage(space)
    restored.load("states.bin")
    restored.print_states()

    # Draw from the stored states wherever the space's sampler is used
    space.set_state_sampler_allocator(restored.get_state_sampler_allocator())
"""

__version__ = "0.1.0"

# Configuration
from statestore.config import StorageSettings

# Core primitives
from statestore.core import (
    ArchiveWarning,
    BadMagicError,
    ErrorKind,
    IncompatibleSpaceError,
    IoUnavailableError,
    Signature,
    SignatureMismatchError,
    StaleStatesError,
    State,
    StateStorageError,
    TruncatedError,
)

# Sampling
from statestore.sampling import (
    PrecomputedStateSampler,
    StatesView,
    check_signature,
    signatures_match,
)

# State spaces
from statestore.space import (
    CompoundState,
    CompoundStateSpace,
    RealVectorBounds,
    RealVectorState,
    RealVectorStateSpace,
    SO2State,
    SO2StateSpace,
    StateSampler,
    StateSamplerAllocator,
    StateSpace,
    StateSpaceBase,
    StateSpaceType,
)

# Storage
from statestore.storage import ARCHIVE_MARKER, ArchiveHeader, StateStorage

__all__ = [
    # Version
    "__version__",
    # Config
    "StorageSettings",
    # Core
    "Signature",
    "State",
    "ErrorKind",
    "ArchiveWarning",
    "StateStorageError",
    "IoUnavailableError",
    "BadMagicError",
    "SignatureMismatchError",
    "TruncatedError",
    "IncompatibleSpaceError",
    "StaleStatesError",
    # Spaces
    "StateSpace",
    "StateSampler",
    "StateSamplerAllocator",
    "StateSpaceBase",
    "StateSpaceType",
    "RealVectorStateSpace",
    "RealVectorBounds",
    "RealVectorState",
    "SO2StateSpace",
    "SO2State",
    "CompoundStateSpace",
    "CompoundState",
    # Storage
    "StateStorage",
    "ArchiveHeader",
    "ARCHIVE_MARKER",
    # Sampling
    "PrecomputedStateSampler",
    "StatesView",
    "check_signature",
    "signatures_match",
]

"""State space protocols.

A state space defines the layout of its states: how they are allocated,
serialized, compared by signature, sampled and printed. Storage and sampling
code only talks to spaces through these protocols.

Usage:
    space: StateSpace = RealVectorStateSpace(2, RealVectorBounds.uniform(2, -1.0, 1.0))
    state = space.alloc_state()
    space.alloc_state_sampler().sample_uniform(state)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, TextIO, runtime_checkable

from statestore.core.types import Signature, State


@runtime_checkable
class StateSampler(Protocol):
    """Fills allocated states with sampled values."""

    def sample_uniform(self, state: State) -> None:
        """Overwrite state with a uniformly drawn sample."""
        ...


@runtime_checkable
class StateSpace(Protocol):
    """Abstract state space interface. Implementations own the state layout."""

    @property
    def name(self) -> str:
        """Human-readable space name (used in diagnostics)."""
        ...

    def compute_signature(self) -> Signature:
        """Signature of the space; element 0 counts the elements that follow."""
        ...

    def get_serialization_length(self) -> int:
        """Number of bytes every serialized state occupies."""
        ...

    def serialize(self, state: State) -> bytes:
        """Serialize state to exactly get_serialization_length() bytes."""
        ...

    def deserialize(self, state: State, data: bytes | memoryview) -> None:
        """Fill an allocated state from its serialized bytes."""
        ...

    def alloc_state(self) -> State:
        """Allocate a new state owned by the caller."""
        ...

    def free_state(self, state: State) -> None:
        """Release a state allocated by this space."""
        ...

    def copy_state(self, destination: State, source: State) -> None:
        """Overwrite destination with the value of source."""
        ...

    def alloc_state_sampler(self) -> StateSampler:
        """Sampler used to generate fresh states for this space."""
        ...

    def print_state(self, state: State, out: TextIO) -> None:
        """Write a one-line, human-readable form of state."""
        ...


StateSamplerAllocator = Callable[[StateSpace], StateSampler]
"""Builds a sampler for the given space. Raises if the space is unsuitable."""

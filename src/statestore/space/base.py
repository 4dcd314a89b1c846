"""Shared behavior for the bundled state spaces.

StateSpaceBase derives the full signature from a per-space signature body and
lets a space swap its default sampler for one supplied by an allocator (for
example, a sampler drawing from stored states).
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, TextIO

from statestore.core.types import Signature, State

if TYPE_CHECKING:
    from statestore.space.protocol import StateSampler, StateSamplerAllocator


class StateSpaceType(IntEnum):
    """Type identifiers embedded in signatures."""

    UNKNOWN = 0
    REAL_VECTOR = 1
    SO2 = 2
    COMPOUND = 3


class StateSpaceBase:
    """Base class for spaces built on signature bodies.

    Subclasses implement signature_body(), the serialization methods and
    alloc_default_state_sampler().

    Args:
        name: Space name used in diagnostics.
    """

    type_id: StateSpaceType = StateSpaceType.UNKNOWN

    def __init__(self, name: str):
        self._name = name
        self._sampler_allocator: StateSamplerAllocator | None = None

    @property
    def name(self) -> str:
        return self._name

    def signature_body(self) -> list[int]:
        """Signature elements describing this space, without the leading count."""
        return [int(self.type_id)]

    def compute_signature(self) -> Signature:
        """Full signature: the body prefixed by its length."""
        body = self.signature_body()
        return (len(body), *body)

    def free_state(self, state: State) -> None:
        """States are garbage collected; nothing to release by default."""

    def alloc_default_state_sampler(self) -> StateSampler:
        """Uniform sampler used when no allocator is set. Subclasses must override."""
        raise NotImplementedError(
            f"{type(self).__name__} does not provide a default state sampler"
        )

    def alloc_state_sampler(self) -> StateSampler:
        """Sampler from the configured allocator, or the default uniform sampler."""
        if self._sampler_allocator is not None:
            return self._sampler_allocator(self)
        return self.alloc_default_state_sampler()

    def set_state_sampler_allocator(self, allocator: StateSamplerAllocator) -> None:
        """Route alloc_state_sampler() through allocator.

        Args:
            allocator: Callable building a sampler for this space, e.g.
                StateStorage.get_state_sampler_allocator().
        """
        self._sampler_allocator = allocator

    def clear_state_sampler_allocator(self) -> None:
        """Restore the default sampler."""
        self._sampler_allocator = None

    def print_state(self, state: State, out: TextIO) -> None:
        out.write(f"{state!r}\n")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"

"""Sampler adapter: build samplers that draw from stored states.

StateStorage.get_state_sampler_allocator() returns a partial of
alloc_precomputed_state_sampler bound to the storage's signature and a
StatesView of its states. The allocator refuses spaces with a different
signature, since stored bytes are only meaningful under the layout that
produced them.

Lifetime:
    A StatesView never owns or frees states. The storage must outlive every
    sampler built from it; clearing, reloading or collecting the storage
    invalidates existing samplers, which then raise StaleStatesError.
"""

from __future__ import annotations

import weakref
from collections.abc import Sequence
from typing import TYPE_CHECKING

from statestore.core.errors import StaleStatesError
from statestore.core.types import State
from statestore.sampling.precomputed import PrecomputedStateSampler
from statestore.sampling.signature import check_signature
from statestore.space.protocol import StateSpace

if TYPE_CHECKING:
    from statestore.storage.collection import StateStorage


class StatesView:
    """Non-owning handle on the states of a StateStorage.

    Args:
        storage_ref: Weak reference to the storage.
        states: The storage's live state list (looked up, never mutated).
        generation: Storage generation the view is valid for.
    """

    __slots__ = ("_storage_ref", "_states", "_generation")

    def __init__(
        self,
        storage_ref: weakref.ReferenceType[StateStorage],
        states: list[State],
        generation: int,
    ):
        self._storage_ref = storage_ref
        self._states = states
        self._generation = generation

    @property
    def generation(self) -> int:
        return self._generation

    def is_valid(self) -> bool:
        """True while the storage is alive and has not freed its states since pinning."""
        storage = self._storage_ref()
        return storage is not None and storage.generation == self._generation

    def pin(self) -> StatesView:
        """View of the same storage, valid for its current generation."""
        storage = self._storage_ref()
        if storage is None:
            raise StaleStatesError("The state storage backing this view was released")
        return StatesView(self._storage_ref, self._states, storage.generation)

    @property
    def states(self) -> Sequence[State]:
        """The stored states.

        Raises:
            StaleStatesError: The storage was released or freed its states.
        """
        if not self.is_valid():
            raise StaleStatesError(
                "Stored states were cleared or released after the sampler was allocated"
            )
        return self._states

    def __len__(self) -> int:
        return len(self.states)


def alloc_precomputed_state_sampler(
    space: StateSpace,
    expected_signature: Sequence[int],
    view: StatesView,
    seed: int | None = None,
) -> PrecomputedStateSampler:
    """Build a sampler over stored states for space.

    Args:
        space: Space the sampler will fill states for.
        expected_signature: Signature captured when the allocator was created.
        view: Handle on the stored states.
        seed: Seed for the sampler's random index choice.

    Raises:
        IncompatibleSpaceError: space's signature differs from expected_signature.
        StaleStatesError: The storage behind view was released.
    """
    check_signature(expected_signature, space)
    return PrecomputedStateSampler(space, view.pin(), seed=seed)

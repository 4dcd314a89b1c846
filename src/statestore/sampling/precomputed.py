"""Sampler drawing from a fixed set of precomputed states."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from statestore.core.types import State
from statestore.space.protocol import StateSpace

if TYPE_CHECKING:
    from statestore.sampling.adapter import StatesView


class PrecomputedStateSampler:
    """Draws uniformly among stored states and copies the pick into the output.

    Args:
        space: Space used to copy states.
        view: Handle on the stored states.
        min_index: First index eligible for sampling.
        max_index: Last index eligible for sampling (inclusive, defaults to the
            last stored state at draw time).
        seed: Seed for index selection.
    """

    def __init__(
        self,
        space: StateSpace,
        view: StatesView,
        min_index: int = 0,
        max_index: int | None = None,
        seed: int | None = None,
    ):
        if min_index < 0:
            raise ValueError(f"min_index must be non-negative, got {min_index}")
        if max_index is not None and max_index < min_index:
            raise ValueError(f"max_index {max_index} is below min_index {min_index}")
        self._space = space
        self._view = view
        self._min_index = min_index
        self._max_index = max_index
        self._rng = random.Random(seed)

    @property
    def view(self) -> StatesView:
        return self._view

    def _window(self) -> tuple[int, int]:
        count = len(self._view.states)
        upper = count - 1 if self._max_index is None else min(self._max_index, count - 1)
        return self._min_index, upper

    def sample_uniform(self, state: State) -> None:
        """Copy a uniformly chosen stored state into state.

        Raises:
            ValueError: No stored state falls inside the index window.
            StaleStatesError: The stored states were cleared or released.
        """
        low, high = self._window()
        if high < low:
            raise ValueError("No stored states available to sample from")
        index = self._rng.randint(low, high)
        self._space.copy_state(state, self._view.states[index])

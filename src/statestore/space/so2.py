"""SO(2) state space: planar rotations stored as an angle in [-pi, pi)."""

from __future__ import annotations

import math
import random
import struct
from dataclasses import dataclass
from typing import TextIO

from statestore.space.base import StateSpaceBase, StateSpaceType

_ANGLE = struct.Struct("=d")


@dataclass(slots=True)
class SO2State:
    """Rotation angle in radians."""

    value: float = 0.0


class SO2UniformSampler:
    """Uniform sampler over the full circle [-pi, pi)."""

    def __init__(self, rng: random.Random):
        self._rng = rng

    def sample_uniform(self, state: SO2State) -> None:
        state.value = self._rng.uniform(-math.pi, math.pi)


class SO2StateSpace(StateSpaceBase):
    """Space of planar rotations. Signature body: (SO2,)."""

    type_id = StateSpaceType.SO2

    def __init__(self, name: str | None = None, seed: int | None = None):
        super().__init__(name or "SO2")
        self._rng = random.Random(seed)

    def get_serialization_length(self) -> int:
        return _ANGLE.size

    def serialize(self, state: SO2State) -> bytes:
        return _ANGLE.pack(state.value)

    def deserialize(self, state: SO2State, data: bytes | memoryview) -> None:
        (state.value,) = _ANGLE.unpack(data)

    def alloc_state(self) -> SO2State:
        return SO2State()

    def copy_state(self, destination: SO2State, source: SO2State) -> None:
        destination.value = source.value

    def alloc_default_state_sampler(self) -> SO2UniformSampler:
        return SO2UniformSampler(self._rng)

    def print_state(self, state: SO2State, out: TextIO) -> None:
        out.write(f"SO2State [{state.value!r}]\n")

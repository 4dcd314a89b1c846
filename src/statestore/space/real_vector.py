"""Real vector state space: fixed-dimension vectors of floats within bounds.

Usage:
    bounds = RealVectorBounds.uniform(3, -1.0, 1.0)
    space = RealVectorStateSpace(3, bounds, seed=7)
    state = space.alloc_state()
    space.alloc_state_sampler().sample_uniform(state)
"""

from __future__ import annotations

import random
import struct
from dataclasses import dataclass, field
from typing import TextIO

from statestore.space.base import StateSpaceBase, StateSpaceType


@dataclass(slots=True)
class RealVectorState:
    """State holding one float per dimension."""

    values: list[float] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class RealVectorBounds:
    """Per-dimension lower and upper bounds."""

    low: tuple[float, ...]
    high: tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.low) != len(self.high):
            raise ValueError(
                f"Bounds dimension mismatch: {len(self.low)} low vs {len(self.high)} high"
            )
        for i, (lo, hi) in enumerate(zip(self.low, self.high, strict=True)):
            if lo > hi:
                raise ValueError(f"Lower bound {lo} exceeds upper bound {hi} at dimension {i}")

    @classmethod
    def uniform(cls, dimension: int, low: float, high: float) -> RealVectorBounds:
        """Same bounds on every dimension."""
        return cls(low=(low,) * dimension, high=(high,) * dimension)

    @property
    def dimension(self) -> int:
        return len(self.low)


class RealVectorUniformSampler:
    """Uniform sampler inside the bounds of a RealVectorStateSpace."""

    def __init__(self, space: RealVectorStateSpace, rng: random.Random):
        self._space = space
        self._rng = rng

    def sample_uniform(self, state: RealVectorState) -> None:
        bounds = self._space.bounds
        state.values[:] = [
            self._rng.uniform(lo, hi) for lo, hi in zip(bounds.low, bounds.high, strict=True)
        ]


class RealVectorStateSpace(StateSpaceBase):
    """Space of real vectors, serialized as native-order float64 values.

    Signature body: (REAL_VECTOR, dimension).

    Args:
        dimension: Number of components per state.
        bounds: Sampling bounds; must match dimension.
        name: Space name (defaults to "RealVector<dimension>").
        seed: Seed for default uniform samplers.
    """

    type_id = StateSpaceType.REAL_VECTOR

    def __init__(
        self,
        dimension: int,
        bounds: RealVectorBounds,
        name: str | None = None,
        seed: int | None = None,
    ):
        if dimension < 1:
            raise ValueError(f"Dimension must be positive, got {dimension}")
        if bounds.dimension != dimension:
            raise ValueError(
                f"Bounds have dimension {bounds.dimension}, space has dimension {dimension}"
            )
        super().__init__(name or f"RealVector{dimension}")
        self._dimension = dimension
        self._bounds = bounds
        self._struct = struct.Struct(f"={dimension}d")
        self._rng = random.Random(seed)

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def bounds(self) -> RealVectorBounds:
        return self._bounds

    def signature_body(self) -> list[int]:
        return [int(self.type_id), self._dimension]

    def get_serialization_length(self) -> int:
        return self._struct.size

    def serialize(self, state: RealVectorState) -> bytes:
        return self._struct.pack(*state.values)

    def deserialize(self, state: RealVectorState, data: bytes | memoryview) -> None:
        state.values[:] = self._struct.unpack(data)

    def alloc_state(self) -> RealVectorState:
        return RealVectorState(values=[0.0] * self._dimension)

    def copy_state(self, destination: RealVectorState, source: RealVectorState) -> None:
        destination.values[:] = source.values

    def alloc_default_state_sampler(self) -> RealVectorUniformSampler:
        return RealVectorUniformSampler(self, self._rng)

    def print_state(self, state: RealVectorState, out: TextIO) -> None:
        out.write("RealVectorState [" + " ".join(repr(v) for v in state.values) + "]\n")

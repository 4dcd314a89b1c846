"""Compound state space: a fixed sequence of component spaces.

Usage:
    space = CompoundStateSpace([
        RealVectorStateSpace(2, RealVectorBounds.uniform(2, 0.0, 10.0)),
        SO2StateSpace(),
    ])
"""

from __future__ import annotations

import io
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, TextIO

from statestore.space.base import StateSpaceBase, StateSpaceType
from statestore.space.protocol import StateSampler, StateSpace


@dataclass(slots=True)
class CompoundState:
    """One state per component space, in component order."""

    components: list[Any] = field(default_factory=list)


class CompoundStateSampler:
    """Samples every component with that component's own sampler."""

    def __init__(self, samplers: Sequence[StateSampler]):
        self._samplers = list(samplers)

    def sample_uniform(self, state: CompoundState) -> None:
        for sampler, component in zip(self._samplers, state.components, strict=True):
            sampler.sample_uniform(component)


class CompoundStateSpace(StateSpaceBase):
    """Concatenation of component spaces.

    Serialization is the component serializations back to back. The signature
    body is (COMPOUND, component_count, *component_bodies), so two compounds
    only match when every component matches in order.

    Args:
        subspaces: Component spaces, at least one.
        name: Space name (defaults to the component names joined by "+").
    """

    type_id = StateSpaceType.COMPOUND

    def __init__(self, subspaces: Sequence[StateSpace], name: str | None = None):
        if not subspaces:
            raise ValueError("CompoundStateSpace needs at least one component space")
        self._subspaces = list(subspaces)
        super().__init__(name or "+".join(s.name for s in self._subspaces))
        self._lengths = [s.get_serialization_length() for s in self._subspaces]

    @property
    def subspaces(self) -> tuple[StateSpace, ...]:
        return tuple(self._subspaces)

    def signature_body(self) -> list[int]:
        body = [int(self.type_id), len(self._subspaces)]
        for subspace in self._subspaces:
            body.extend(subspace.compute_signature()[1:])
        return body

    def get_serialization_length(self) -> int:
        return sum(self._lengths)

    def serialize(self, state: CompoundState) -> bytes:
        return b"".join(
            s.serialize(c) for s, c in zip(self._subspaces, state.components, strict=True)
        )

    def deserialize(self, state: CompoundState, data: bytes | memoryview) -> None:
        offset = 0
        for subspace, component, length in zip(
            self._subspaces, state.components, self._lengths, strict=True
        ):
            subspace.deserialize(component, data[offset : offset + length])
            offset += length

    def alloc_state(self) -> CompoundState:
        return CompoundState(components=[s.alloc_state() for s in self._subspaces])

    def free_state(self, state: CompoundState) -> None:
        for subspace, component in zip(self._subspaces, state.components, strict=True):
            subspace.free_state(component)
        state.components.clear()

    def copy_state(self, destination: CompoundState, source: CompoundState) -> None:
        for subspace, dst, src in zip(
            self._subspaces, destination.components, source.components, strict=True
        ):
            subspace.copy_state(dst, src)

    def alloc_default_state_sampler(self) -> CompoundStateSampler:
        return CompoundStateSampler([s.alloc_state_sampler() for s in self._subspaces])

    def print_state(self, state: CompoundState, out: TextIO) -> None:
        parts = []
        for subspace, component in zip(self._subspaces, state.components, strict=True):
            buffer = io.StringIO()
            subspace.print_state(component, buffer)
            parts.append(buffer.getvalue().strip())
        out.write("CompoundState [" + " ".join(parts) + "]\n")

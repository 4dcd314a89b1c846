"""Tests for the bundled state spaces."""

import io
import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from statestore import (
    CompoundStateSpace,
    RealVectorBounds,
    RealVectorState,
    RealVectorStateSpace,
    SO2State,
    SO2StateSpace,
    StateSpace,
    StateSpaceBase,
    StateSpaceType,
)

finite = st.floats(allow_nan=False, allow_infinity=False)


@pytest.fixture
def compound_space() -> CompoundStateSpace:
    return CompoundStateSpace(
        [
            RealVectorStateSpace(2, RealVectorBounds.uniform(2, 0.0, 10.0), seed=1),
            SO2StateSpace(seed=2),
        ]
    )


@pytest.mark.parametrize(
    ("space", "signature", "length"),
    [
        (RealVectorStateSpace(3, RealVectorBounds.uniform(3, -1.0, 1.0)), (2, 1, 3), 24),
        (SO2StateSpace(), (1, 2), 8),
        (
            CompoundStateSpace(
                [RealVectorStateSpace(2, RealVectorBounds.uniform(2, 0.0, 1.0)), SO2StateSpace()]
            ),
            (5, 3, 2, 1, 2, 2),
            24,
        ),
    ],
    ids=["real-vector", "so2", "compound"],
)
def test_signature_and_serialization_length(space, signature, length) -> None:
    """Signature element 0 counts the elements after it."""
    assert space.compute_signature() == signature
    assert space.compute_signature()[0] == len(signature) - 1
    assert space.get_serialization_length() == length
    assert isinstance(space, StateSpace)


def test_real_vector_dimension_is_part_of_signature() -> None:
    two = RealVectorStateSpace(2, RealVectorBounds.uniform(2, 0.0, 1.0))
    three = RealVectorStateSpace(3, RealVectorBounds.uniform(3, 0.0, 1.0))
    assert two.compute_signature() != three.compute_signature()


def test_compound_component_order_is_part_of_signature() -> None:
    vector = RealVectorStateSpace(1, RealVectorBounds.uniform(1, 0.0, 1.0))
    so2 = SO2StateSpace()
    assert (
        CompoundStateSpace([vector, so2]).compute_signature()
        != CompoundStateSpace([so2, vector]).compute_signature()
    )


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"low": (0.0, 0.0), "high": (1.0,)}, "dimension mismatch"),
        ({"low": (2.0,), "high": (1.0,)}, "exceeds upper bound"),
    ],
    ids=["dimension", "inverted"],
)
def test_invalid_bounds(kwargs, message) -> None:
    with pytest.raises(ValueError, match=message):
        RealVectorBounds(**kwargs)


def test_space_rejects_mismatched_bounds() -> None:
    with pytest.raises(ValueError, match="Bounds have dimension 2"):
        RealVectorStateSpace(3, RealVectorBounds.uniform(2, 0.0, 1.0))


def test_compound_needs_components() -> None:
    with pytest.raises(ValueError):
        CompoundStateSpace([])


def test_real_vector_sampling_respects_bounds() -> None:
    bounds = RealVectorBounds(low=(-1.0, 5.0), high=(1.0, 6.0))
    space = RealVectorStateSpace(2, bounds, seed=11)
    sampler = space.alloc_state_sampler()
    state = space.alloc_state()

    for _ in range(50):
        sampler.sample_uniform(state)
        assert -1.0 <= state.values[0] <= 1.0
        assert 5.0 <= state.values[1] <= 6.0


def test_so2_sampling_range() -> None:
    space = SO2StateSpace(seed=5)
    sampler = space.alloc_state_sampler()
    state = space.alloc_state()
    for _ in range(50):
        sampler.sample_uniform(state)
        assert -math.pi <= state.value <= math.pi


@given(st.lists(finite, min_size=3, max_size=3))
def test_real_vector_serialize_deserialize(values) -> None:
    space = RealVectorStateSpace(3, RealVectorBounds.uniform(3, -1.0, 1.0))
    restored = space.alloc_state()
    space.deserialize(restored, space.serialize(RealVectorState(values=list(values))))
    assert restored.values == values


def test_compound_serialization_concatenates_components(compound_space) -> None:
    state = compound_space.alloc_state()
    state.components[0].values[:] = [1.5, 2.5]
    state.components[1].value = 0.25

    data = compound_space.serialize(state)
    vector, so2 = compound_space.subspaces

    assert data == vector.serialize(state.components[0]) + so2.serialize(state.components[1])

    restored = compound_space.alloc_state()
    compound_space.deserialize(restored, memoryview(data))
    assert restored.components[0].values == [1.5, 2.5]
    assert restored.components[1].value == 0.25


def test_copy_state_does_not_alias(compound_space) -> None:
    source = compound_space.alloc_state()
    compound_space.alloc_state_sampler().sample_uniform(source)
    destination = compound_space.alloc_state()

    compound_space.copy_state(destination, source)
    source.components[0].values[0] = -99.0

    assert destination.components[0].values[0] != -99.0
    assert destination.components[1].value == source.components[1].value


def test_print_state_writes_single_line(compound_space) -> None:
    state = compound_space.alloc_state()
    state.components[0].values[:] = [1.0, 2.0]
    state.components[1].value = 0.5
    out = io.StringIO()

    compound_space.print_state(state, out)

    assert out.getvalue() == "CompoundState [RealVectorState [1.0 2.0] SO2State [0.5]]\n"


def test_so2_print_and_copy() -> None:
    space = SO2StateSpace()
    source, destination = SO2State(1.25), space.alloc_state()
    space.copy_state(destination, source)
    out = io.StringIO()
    space.print_state(destination, out)
    assert out.getvalue() == "SO2State [1.25]\n"


def test_default_names() -> None:
    vector = RealVectorStateSpace(2, RealVectorBounds.uniform(2, 0.0, 1.0))
    assert vector.name == "RealVector2"
    assert CompoundStateSpace([vector, SO2StateSpace()]).name == "RealVector2+SO2"
    assert StateSpaceType.COMPOUND == 3


def test_base_space_without_default_sampler_says_so() -> None:
    class Bare(StateSpaceBase):
        pass

    with pytest.raises(NotImplementedError, match="Bare does not provide a default state sampler"):
        Bare("bare").alloc_state_sampler()

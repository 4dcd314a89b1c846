"""Shared test fixtures."""

import random
import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from statestore import RealVectorBounds, RealVectorStateSpace, StorageSettings


class BytesSampler:
    def __init__(self, rng: random.Random):
        self._rng = rng

    def sample_uniform(self, state: bytearray) -> None:
        state[:] = self._rng.randbytes(len(state))


class BytesStateSpace:
    """Space of fixed-length byte strings with a caller-chosen signature.

    Records every allocation, free and deserialization so tests can assert on
    ownership and on which codec steps ran.
    """

    def __init__(
        self,
        signature: tuple[int, ...] = (1, 7),
        length: int = 8,
        name: str = "Bytes",
        seed: int = 0,
        fail_on_deserialize: int | None = None,
    ):
        self._signature = signature
        self._length = length
        self._name = name
        self._rng = random.Random(seed)
        self._fail_on_deserialize = fail_on_deserialize
        self.signature_calls = 0
        self.allocated: list[bytearray] = []
        self.freed: list[int] = []
        self.deserialized = 0

    @property
    def name(self) -> str:
        return self._name

    def compute_signature(self) -> tuple[int, ...]:
        self.signature_calls += 1
        return self._signature

    def get_serialization_length(self) -> int:
        return self._length

    def serialize(self, state: bytearray) -> bytes:
        return bytes(state)

    def deserialize(self, state: bytearray, data) -> None:
        if self._fail_on_deserialize is not None and self.deserialized == self._fail_on_deserialize:
            raise RuntimeError("deserialize failed")
        self.deserialized += 1
        state[:] = data

    def alloc_state(self) -> bytearray:
        state = bytearray(self._length)
        self.allocated.append(state)
        return state

    def free_state(self, state: bytearray) -> None:
        self.freed.append(id(state))

    def copy_state(self, destination: bytearray, source: bytearray) -> None:
        destination[:] = source

    def alloc_state_sampler(self) -> BytesSampler:
        return BytesSampler(self._rng)

    def print_state(self, state: bytearray, out) -> None:
        out.write(f"Bytes [{state.hex()}]\n")


@pytest.fixture
def make_space():
    """Factory for BytesStateSpace instances."""
    return BytesStateSpace


@pytest.fixture
def bytes_space() -> BytesStateSpace:
    """Byte-string space with signature (1, 7) and 8-byte states."""
    return BytesStateSpace()


@pytest.fixture
def vector_space() -> RealVectorStateSpace:
    """Seeded 3-dimensional real vector space on [-1, 1]."""
    return RealVectorStateSpace(3, RealVectorBounds.uniform(3, -1.0, 1.0), seed=7)


@pytest.fixture
def strict_settings() -> StorageSettings:
    return StorageSettings(strict=True, sampler_seed=3)


@pytest.fixture
def lenient_settings() -> StorageSettings:
    return StorageSettings(strict=False, sampler_seed=3)

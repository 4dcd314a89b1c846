"""State storage: an ordered collection of states owned on behalf of one space.

Usage:
    space = RealVectorStateSpace(2, RealVectorBounds.uniform(2, -1.0, 1.0))

    storage = StateStorage(space)
    storage.generate_samples(100)
    storage.store("states.bin")

    restored = StateStorage(space)
    restored.load("states.bin")

    # Stored states can replace the space's random sampler
    space.set_state_sampler_allocator(restored.get_state_sampler_allocator())

Not thread-safe: callers sharing a storage across threads must serialize
access themselves.
"""

from __future__ import annotations

import functools
import os
import sys
import warnings
import weakref
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO, TextIO

from statestore.config import StorageSettings
from statestore.core.errors import ArchiveWarning, IoUnavailableError, StateStorageError
from statestore.core.types import State
from statestore.sampling.adapter import StatesView, alloc_precomputed_state_sampler
from statestore.space.protocol import StateSamplerAllocator, StateSpace
from statestore.storage.header import ensure_writable, load_header, write_header
from statestore.storage.records import read_records, write_records

PathLike = str | os.PathLike[str]


def _free_states(space: StateSpace, states: list[State]) -> None:
    for state in states:
        space.free_state(state)
    states.clear()


class StateStorage:
    """Owns states allocated by a single state space.

    Every state held was allocated by the space and serializes to exactly
    space.get_serialization_length() bytes. States are freed through the space
    on clear(), before every load(), when leaving a ``with`` block and when the
    storage is garbage collected.

    The generation counter increments whenever held states are freed, which
    invalidates samplers built over the previous states.

    Args:
        space: Space the stored states belong to.
        settings: Error reporting and sampler settings (defaults from environment).
    """

    def __init__(self, space: StateSpace, settings: StorageSettings | None = None):
        self._space = space
        self._settings = settings or StorageSettings()
        self._states: list[State] = []
        self._generation = 0
        self._finalizer = weakref.finalize(self, _free_states, space, self._states)

    @property
    def space(self) -> StateSpace:
        return self._space

    @property
    def settings(self) -> StorageSettings:
        return self._settings

    @property
    def states(self) -> tuple[State, ...]:
        """Snapshot of the stored states, in order. The storage keeps ownership."""
        return tuple(self._states)

    @property
    def generation(self) -> int:
        return self._generation

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[State]:
        return iter(self._states)

    def __getitem__(self, index: int) -> State:
        return self._states[index]

    def __enter__(self) -> StateStorage:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.clear()

    def add_state(self, state: State) -> None:
        """Append a state. The storage takes ownership of it.

        Args:
            state: State allocated by this storage's space.
        """
        self._states.append(state)

    def generate_samples(self, count: int) -> None:
        """Append count uniformly sampled states.

        Args:
            count: Number of states to generate.
        """
        sampler = self._space.alloc_state_sampler()
        for _ in range(count):
            state = self._space.alloc_state()
            sampler.sample_uniform(state)
            self.add_state(state)

    def clear(self) -> None:
        """Free every stored state. Calling it on an empty storage does nothing."""
        if not self._states:
            return
        _free_states(self._space, self._states)
        self._generation += 1

    def print_states(self, out: TextIO | None = None) -> None:
        """Write every stored state, one per line, in order.

        Args:
            out: Text sink (defaults to sys.stdout).
        """
        sink = out if out is not None else sys.stdout
        for state in self._states:
            self._space.print_state(state, sink)

    def load(self, source: PathLike | BinaryIO) -> None:
        """Replace the stored states with those of an archive.

        The storage is cleared first. Nothing is appended unless the header
        validates and every record deserializes.

        Args:
            source: Archive path, or binary stream positioned at an archive.

        Raises:
            StateStorageError: Archive unreadable or invalid (strict mode only;
                otherwise an ArchiveWarning is emitted and the storage stays empty).
        """
        self.clear()
        try:
            if isinstance(source, (str, os.PathLike)):
                states = self._load_path(Path(source))
            else:
                states = self._load_stream(source)
        except StateStorageError as exc:
            if self._settings.strict:
                raise
            warnings.warn(f"Unable to load states: {exc}", ArchiveWarning, stacklevel=2)
            return
        self._states.extend(states)

    def _load_path(self, path: Path) -> list[State]:
        try:
            stream = path.open("rb")
        except OSError as e:
            raise IoUnavailableError(f"Unable to open {path} for reading: {e}") from e
        with stream:
            return self._load_stream(stream)

    def _load_stream(self, stream: BinaryIO) -> list[State]:
        header = load_header(stream, self._space)
        return read_records(stream, self._space, header)

    def store(self, destination: PathLike | BinaryIO) -> None:
        """Write every stored state as an archive.

        No atomic replace is attempted: a failure while writing a path may
        leave a partial file behind.

        Args:
            destination: Archive path, or writable binary stream.

        Raises:
            StateStorageError: Destination unavailable (strict mode only;
                otherwise an ArchiveWarning is emitted).
            ValueError: The space serialized a state to the wrong length.
        """
        try:
            if isinstance(destination, (str, os.PathLike)):
                self._store_path(Path(destination))
            else:
                self._store_stream(destination)
        except StateStorageError as exc:
            if self._settings.strict:
                raise
            warnings.warn(f"Unable to store states: {exc}", ArchiveWarning, stacklevel=2)

    def _store_path(self, path: Path) -> None:
        try:
            stream = path.open("wb")
        except OSError as e:
            raise IoUnavailableError(f"Unable to open {path} for writing: {e}") from e
        with stream:
            self._store_stream(stream)

    def _store_stream(self, stream: BinaryIO) -> None:
        ensure_writable(stream)
        write_header(stream, self._space.compute_signature(), len(self._states))
        write_records(stream, self._space, self._states)

    def view(self) -> StatesView:
        """Non-owning handle on the stored states for the current generation."""
        return StatesView(weakref.ref(self), self._states, self._generation)

    def get_state_sampler_allocator(self) -> StateSamplerAllocator:
        """Allocator of samplers that draw from the stored states.

        The current space signature is captured now. Calling the allocator with
        a space checks that space's signature against it and raises
        IncompatibleSpaceError on mismatch; otherwise it returns a sampler over
        the states held when the sampler is built.

        The storage must outlive every sampler built this way.
        """
        return functools.partial(
            alloc_precomputed_state_sampler,
            expected_signature=tuple(self._space.compute_signature()),
            view=self.view(),
            seed=self._settings.sampler_seed,
        )

    def __repr__(self) -> str:
        return f"StateStorage(space={self._space.name!r}, states={len(self._states)})"

"""Generate states, archive them, and reuse the archive as a sampler.

Run:
    python examples/precomputed_sampling.py states.bin
"""

import sys

from statestore import (
    CompoundStateSpace,
    RealVectorBounds,
    RealVectorStateSpace,
    SO2StateSpace,
    StateStorage,
)


def make_space() -> CompoundStateSpace:
    """Planar pose: position in a 10x10 box plus heading."""
    return CompoundStateSpace(
        [RealVectorStateSpace(2, RealVectorBounds.uniform(2, 0.0, 10.0)), SO2StateSpace()],
        name="SE2",
    )


def main(path: str) -> None:
    with StateStorage(make_space()) as storage:
        storage.generate_samples(5)
        storage.store(path)
        print(f"Stored {len(storage)} states to {path}")

    space = make_space()
    restored = StateStorage(space)
    restored.load(path)
    restored.print_states()

    # Anything asking the space for a sampler now draws from the archive
    space.set_state_sampler_allocator(restored.get_state_sampler_allocator())
    sampler = space.alloc_state_sampler()
    state = space.alloc_state()
    for _ in range(3):
        sampler.sample_uniform(state)
        space.print_state(state, sys.stdout)


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "states.bin")

"""Signature comparison helpers.

Pure functions: they compute nothing beyond the signatures they are given
(check_signature asks the space for its current signature once).
"""

from __future__ import annotations

from collections.abc import Sequence

from statestore.core.errors import IncompatibleSpaceError
from statestore.core.types import Signature
from statestore.space.protocol import StateSpace


def signatures_match(expected: Sequence[int], actual: Sequence[int]) -> bool:
    """True iff both signatures have the same elements in the same order."""
    return tuple(expected) == tuple(actual)


def check_signature(expected: Sequence[int], space: StateSpace) -> Signature:
    """Verify space is compatible with states recorded under expected.

    Args:
        expected: Signature captured when the states were stored.
        space: Space a sampler is about to be built for.

    Returns:
        The space's current signature.

    Raises:
        IncompatibleSpaceError: Signatures differ.
    """
    actual = tuple(space.compute_signature())
    if not signatures_match(expected, actual):
        raise IncompatibleSpaceError(expected, actual, space.name)
    return actual

"""Core type definitions for statestore."""

from typing import Any

type Signature = tuple[int, ...]
"""Ordered integers identifying the structure of a state space.

Element 0 is the number of elements that follow it. Two spaces are binary
compatible iff their signatures are equal element-wise.
"""

type State = Any
"""Opaque state record. Only the owning state space knows its layout."""

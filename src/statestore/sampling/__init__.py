"""Sampling from stored states, gated by state space signatures."""

from statestore.sampling.adapter import StatesView, alloc_precomputed_state_sampler
from statestore.sampling.precomputed import PrecomputedStateSampler
from statestore.sampling.signature import check_signature, signatures_match

__all__ = [
    "StatesView",
    "PrecomputedStateSampler",
    "alloc_precomputed_state_sampler",
    "check_signature",
    "signatures_match",
]

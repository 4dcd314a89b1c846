"""State spaces: the collaborator contract and bundled implementations."""

from statestore.space.base import StateSpaceBase, StateSpaceType
from statestore.space.compound import CompoundState, CompoundStateSpace
from statestore.space.protocol import StateSampler, StateSamplerAllocator, StateSpace
from statestore.space.real_vector import RealVectorBounds, RealVectorState, RealVectorStateSpace
from statestore.space.so2 import SO2State, SO2StateSpace

__all__ = [
    # Protocols
    "StateSpace",
    "StateSampler",
    "StateSamplerAllocator",
    # Base
    "StateSpaceBase",
    "StateSpaceType",
    # Spaces
    "RealVectorStateSpace",
    "RealVectorBounds",
    "RealVectorState",
    "SO2StateSpace",
    "SO2State",
    "CompoundStateSpace",
    "CompoundState",
]

"""Record stream codec: the flat, fixed-stride body following the header.

Records are stored back to back with no per-record length prefix. Both
directions use one buffer and one bulk I/O call for the whole body.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import BinaryIO

from statestore.core.errors import TruncatedError
from statestore.core.types import State
from statestore.space.protocol import StateSpace
from statestore.storage.header import ArchiveHeader, read_exact, remaining_bytes

logger = logging.getLogger(__name__)


def read_records(stream: BinaryIO, space: StateSpace, header: ArchiveHeader) -> list[State]:
    """Deserialize header.record_count states from stream.

    Per-record metadata bytes (header.metadata_size) are skipped. States are
    only returned once all of them deserialized; on failure any state already
    allocated is freed before the error propagates.

    Args:
        stream: Stream positioned just past a validated header.
        space: Space that allocates and deserializes the states.
        header: Header returned by load_header for this stream.

    Returns:
        Newly allocated states in archive order, owned by the caller.

    Raises:
        TruncatedError: Stream holds fewer bytes than the header declares.
    """
    length = space.get_serialization_length()
    stride = length + header.metadata_size
    total = header.record_count * stride
    if total == 0:
        return []

    available = remaining_bytes(stream)
    if available is not None and available < total:
        raise TruncatedError(
            f"Unable to read state data: expected {total} bytes, {available} available"
        )
    buffer = read_exact(stream, total)
    if len(buffer) < total:
        raise TruncatedError(
            f"Unable to read state data: expected {total} bytes, got {len(buffer)}"
        )

    logger.debug("Deserializing %d states", header.record_count)
    view = memoryview(buffer)
    states: list[State] = []
    try:
        for i in range(header.record_count):
            state = space.alloc_state()
            states.append(state)
            offset = i * stride
            space.deserialize(state, view[offset : offset + length])
    except Exception:
        for state in states:
            space.free_state(state)
        raise
    return states


def write_records(stream: BinaryIO, space: StateSpace, states: Sequence[State]) -> int:
    """Serialize states into one contiguous buffer and write it.

    Metadata is never written, so the stride is the serialization length.

    Returns:
        Number of body bytes written.

    Raises:
        ValueError: The space serialized a state to the wrong number of bytes.
    """
    length = space.get_serialization_length()
    buffer = bytearray(length * len(states))
    logger.debug("Serializing %d states", len(states))
    for i, state in enumerate(states):
        data = space.serialize(state)
        if len(data) != length:
            raise ValueError(
                f"State space {space.name} serialized state {i} to {len(data)} bytes, "
                f"expected {length}"
            )
        buffer[i * length : (i + 1) * length] = data
    stream.write(buffer)
    return len(buffer)

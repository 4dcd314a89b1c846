"""Archive header codec.

Single source of truth for the archive layout. All integers use native byte
order with standard sizes; no byte swapping is performed.

Layout:
    [marker: uint32]                  ARCHIVE_MARKER
    [signature: int32 * len(sig)]     full signature, sig[0] first
    [record_count: uint64]
    [metadata_size: uint64]           0 on write
    [records: record_count * (serialization_length + metadata_size) bytes]

The writer emits the signature verbatim; the reader treats its first element
as the count of elements that follow and cross-checks everything against the
signature of the space doing the loading.
"""

from __future__ import annotations

import io
import struct
from dataclasses import dataclass
from typing import BinaryIO

from statestore.core.errors import (
    BadMagicError,
    IoUnavailableError,
    SignatureMismatchError,
    TruncatedError,
)
from statestore.core.types import Signature
from statestore.space.protocol import StateSpace

ARCHIVE_MARKER = 0x4C504D4F  # b"OMPL" on little-endian hosts

MARKER = struct.Struct("=I")
SIGNATURE_ELEMENT = struct.Struct("=i")
SIZE = struct.Struct("=Q")

READ_CHUNK = 1 << 20
INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1


@dataclass(frozen=True, slots=True)
class ArchiveHeader:
    """Validated archive preamble."""

    signature: Signature
    record_count: int
    metadata_size: int = 0
    marker: int = ARCHIVE_MARKER


def ensure_readable(stream: BinaryIO) -> None:
    """Raise IoUnavailableError unless stream is open for reading."""
    if getattr(stream, "closed", False):
        raise IoUnavailableError("Unable to load states: stream is closed")
    readable = getattr(stream, "readable", None)
    if readable is not None and not readable():
        raise IoUnavailableError("Unable to load states: stream is not readable")


def ensure_writable(stream: BinaryIO) -> None:
    """Raise IoUnavailableError unless stream is open for writing."""
    if getattr(stream, "closed", False):
        raise IoUnavailableError("Unable to store states: stream is closed")
    writable = getattr(stream, "writable", None)
    if writable is not None and not writable():
        raise IoUnavailableError("Unable to store states: stream is not writable")


def read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read up to size bytes, retrying short reads until EOF.

    Each call asks for at most READ_CHUNK bytes, so a size taken from an
    untrusted header never turns into a single huge allocation. Returns fewer
    than size bytes only when the stream is exhausted.
    """
    chunks: list[bytes] = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(min(remaining, READ_CHUNK))
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def remaining_bytes(stream: BinaryIO) -> int | None:
    """Bytes left between the current position and the end, if knowable."""
    seekable = getattr(stream, "seekable", None)
    if seekable is None or not seekable():
        return None
    position = stream.tell()
    end = stream.seek(0, io.SEEK_END)
    stream.seek(position)
    return max(end - position, 0)


def encode_header(signature: Signature, record_count: int) -> bytes:
    """Encode the preamble for an archive of record_count states.

    Raises:
        ValueError: A signature element does not fit in an int32.
    """
    for i, value in enumerate(signature):
        if not INT32_MIN <= value <= INT32_MAX:
            raise ValueError(f"Signature element {i} ({value}) does not fit in an int32")
    return b"".join(
        [
            MARKER.pack(ARCHIVE_MARKER),
            struct.pack(f"={len(signature)}i", *signature),
            SIZE.pack(record_count),
            SIZE.pack(0),
        ]
    )


def write_header(stream: BinaryIO, signature: Signature, record_count: int) -> int:
    """Write the preamble. Returns the number of bytes written."""
    data = encode_header(signature, record_count)
    stream.write(data)
    return len(data)


def load_header(stream: BinaryIO, space: StateSpace) -> ArchiveHeader:
    """Read and validate the preamble against space.

    Validation stops at the first problem; nothing past the failing field is
    read. The signature is checked before anything depending on the record
    layout.

    Args:
        stream: Binary stream positioned at the start of an archive.
        space: Space the archive's states will be deserialized into.

    Returns:
        The validated header, with the stream positioned at the first record.

    Raises:
        IoUnavailableError: Stream is closed or not readable.
        BadMagicError: Archive marker is missing or wrong.
        SignatureMismatchError: Archive was written for a different space.
        TruncatedError: Record count, metadata size or record data is missing.
    """
    ensure_readable(stream)

    raw = read_exact(stream, MARKER.size)
    if len(raw) < MARKER.size or MARKER.unpack(raw)[0] != ARCHIVE_MARKER:
        raise BadMagicError("The stored data does not start with the correct header")

    signature = tuple(space.compute_signature())
    if not signature:
        raise SignatureMismatchError(f"State space {space.name} has an empty signature")

    raw = read_exact(stream, SIGNATURE_ELEMENT.size)
    if len(raw) < SIGNATURE_ELEMENT.size:
        raise SignatureMismatchError("State space signatures do not match: missing length")
    signature_length = SIGNATURE_ELEMENT.unpack(raw)[0]
    if signature_length != signature[0]:
        raise SignatureMismatchError(
            f"State space signatures do not match: archive declares {signature_length} "
            f"elements, space {space.name} declares {signature[0]}"
        )

    expected = signature[1:]
    for i in range(signature_length):
        raw = read_exact(stream, SIGNATURE_ELEMENT.size)
        if len(raw) < SIGNATURE_ELEMENT.size:
            raise SignatureMismatchError(
                f"State space signatures do not match: archive ends at element {i}"
            )
        value = SIGNATURE_ELEMENT.unpack(raw)[0]
        if i >= len(expected) or value != expected[i]:
            raise SignatureMismatchError(
                f"State space signatures do not match at element {i}: archive has {value}"
            )

    raw = read_exact(stream, SIZE.size)
    if len(raw) < SIZE.size:
        raise TruncatedError("Expected number of states. Incorrect file format")
    record_count = SIZE.unpack(raw)[0]

    raw = read_exact(stream, SIZE.size)
    if len(raw) < SIZE.size:
        raise TruncatedError("Expected metadata size. Incorrect file format")
    metadata_size = SIZE.unpack(raw)[0]

    if record_count > 0 and remaining_bytes(stream) == 0:
        raise TruncatedError("Expected state data. Incorrect file format")

    return ArchiveHeader(
        signature=signature,
        record_count=record_count,
        metadata_size=metadata_size,
    )

"""Tests for the record stream codec.

Why these tests exist:
- The body is a flat, fixed-stride array; offsets must line up exactly
- Metadata bytes are skipped on read and never written
- A short body must fail without handing back partially built states
"""

import io

import pytest

from statestore import ArchiveHeader, TruncatedError
from statestore.storage.records import read_records, write_records


class OneWayStream:
    """Readable stream that cannot report its size."""

    closed = False

    def __init__(self, data: bytes, chunk: int = 3):
        self._inner = io.BytesIO(data)
        self._chunk = chunk

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return False

    def read(self, size: int = -1) -> bytes:
        return self._inner.read(min(size, self._chunk))


def test_write_records_concatenates_serialized_states(make_space) -> None:
    space = make_space(length=4)
    states = [bytearray(b"abcd"), bytearray(b"efgh"), bytearray(b"ijkl")]
    stream = io.BytesIO()

    written = write_records(stream, space, states)

    assert written == 12
    assert stream.getvalue() == b"abcdefghijkl"


def test_write_records_with_no_states_writes_nothing(bytes_space) -> None:
    stream = io.BytesIO()
    assert write_records(stream, bytes_space, []) == 0
    assert stream.getvalue() == b""


def test_write_records_rejects_wrong_serialized_length(make_space) -> None:
    """A state that serializes to the wrong size would corrupt every later slot."""
    space = make_space(length=4)
    with pytest.raises(ValueError, match="expected 4"):
        write_records(io.BytesIO(), space, [bytearray(b"abcd"), bytearray(b"toolong")])


def test_read_records_deserializes_in_order(make_space) -> None:
    space = make_space(length=2)
    header = ArchiveHeader(signature=(1, 7), record_count=3)

    states = read_records(io.BytesIO(b"aabbcc"), space, header)

    assert [bytes(s) for s in states] == [b"aa", b"bb", b"cc"]
    assert space.deserialized == 3


def test_read_records_skips_metadata_bytes(make_space) -> None:
    """Stride is serialization length plus metadata size; metadata is ignored."""
    space = make_space(length=2)
    header = ArchiveHeader(signature=(1, 7), record_count=2, metadata_size=3)

    states = read_records(io.BytesIO(b"aa###bb###"), space, header)

    assert [bytes(s) for s in states] == [b"aa", b"bb"]


def test_read_records_with_zero_length_body_reads_nothing(make_space) -> None:
    space = make_space(length=2)
    stream = io.BytesIO(b"untouched")

    states = read_records(stream, space, ArchiveHeader(signature=(1, 7), record_count=0))

    assert states == []
    assert stream.tell() == 0
    assert space.allocated == []


@pytest.mark.parametrize(
    "stream_factory",
    [io.BytesIO, OneWayStream],
    ids=["seekable", "unseekable"],
)
def test_read_records_truncated_body(make_space, stream_factory) -> None:
    """A body shorter than record_count * stride is rejected before deserializing."""
    space = make_space(length=4)
    header = ArchiveHeader(signature=(1, 7), record_count=3)

    with pytest.raises(TruncatedError):
        read_records(stream_factory(b"x" * 11), space, header)
    assert space.allocated == []


def test_read_records_handles_short_reads(make_space) -> None:
    """Bulk reads are retried until the full body arrives."""
    space = make_space(length=4)
    header = ArchiveHeader(signature=(1, 7), record_count=2)

    states = read_records(OneWayStream(b"abcdefgh", chunk=3), space, header)

    assert [bytes(s) for s in states] == [b"abcd", b"efgh"]


def test_read_records_frees_states_when_deserialize_fails(make_space) -> None:
    space = make_space(length=1, fail_on_deserialize=2)
    header = ArchiveHeader(signature=(1, 7), record_count=4)

    with pytest.raises(RuntimeError, match="deserialize failed"):
        read_records(io.BytesIO(b"abcd"), space, header)

    assert len(space.allocated) == 3
    assert sorted(space.freed) == sorted(id(s) for s in space.allocated)


@pytest.mark.parametrize("record_count", [2**40, 2**62], ids=["2^40", "2^62"])
def test_read_records_oversized_count_on_unseekable_stream(make_space, record_count) -> None:
    """A corrupt count on a pipe-like stream is a truncation, not a huge allocation."""
    space = make_space(length=8)
    header = ArchiveHeader(signature=(1, 7), record_count=record_count)

    with pytest.raises(TruncatedError):
        read_records(OneWayStream(b"x" * 8, chunk=1 << 20), space, header)
    assert space.allocated == []

"""Archive codecs and the state collection."""

from statestore.storage.collection import StateStorage
from statestore.storage.header import (
    ARCHIVE_MARKER,
    ArchiveHeader,
    encode_header,
    load_header,
    write_header,
)
from statestore.storage.records import read_records, write_records

__all__ = [
    "StateStorage",
    "ARCHIVE_MARKER",
    "ArchiveHeader",
    "encode_header",
    "load_header",
    "write_header",
    "read_records",
    "write_records",
]

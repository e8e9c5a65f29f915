from __future__ import annotations

import io
from typing import BinaryIO, Union

from .models import RawHeader, RawRecord, ReadStatus
from .wire import RECORD_HEADER, RECORD_HEADER_LEN


def _read_upto(stream: BinaryIO, size: int) -> bytes:
    """
    Read until size bytes are collected or the stream has nothing more.

    A single read() may return less than asked on raw or non blocking files
    even when more data is already there, so keep asking until it returns empty.
    """
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def read_raw_record(stream: BinaryIO) -> Union[RawRecord, ReadStatus]:
    """
    Read one length prefixed record from a seekable binary stream.

    The stream must be positioned at a record boundary. Every call leaves it
    at a boundary again:
      success
        positioned right after the record body

      END_OF_STREAM
        no bytes were available, position unchanged

      INCOMPLETE
        only part of the header or body was there, position rewound to
        where it was on entry so the same offset can be polled again while
        a writer is still appending
    """
    offset = stream.tell()

    header_bytes = _read_upto(stream, RECORD_HEADER_LEN)
    if not header_bytes:
        stream.seek(offset, io.SEEK_SET)
        return ReadStatus.END_OF_STREAM
    if len(header_bytes) < RECORD_HEADER_LEN:
        stream.seek(offset, io.SEEK_SET)
        return ReadStatus.INCOMPLETE

    header = RawHeader(*RECORD_HEADER.unpack(header_bytes))

    data = _read_upto(stream, header.length)
    if len(data) < header.length:
        stream.seek(offset, io.SEEK_SET)
        return ReadStatus.INCOMPLETE

    return RawRecord(type=header.type, data=data)

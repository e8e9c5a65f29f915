from __future__ import annotations

from typing import BinaryIO, Iterator, Union

from .decoder import decode_event, decode_extra_data, decode_packet
from .framer import read_raw_record
from .models import DecodedRecord, RawRecord, ReadStatus, UnknownRecord
from .wire import RecordType


def decode_raw_record(raw: RawRecord) -> DecodedRecord:
    """
    Route a framed record to its decoder by type tag.

    Unrecognized tags give UnknownRecord. DecodingError from a decoder
    propagates unchanged.
    """
    rt = RecordType.lookup(raw.type)
    if rt is None:
        return UnknownRecord(type=raw.type)
    if rt.is_event:
        return decode_event(rt, raw.data)
    if rt is RecordType.PACKET:
        return decode_packet(raw.data)
    if rt is RecordType.EXTRA_DATA:
        return decode_extra_data(raw.data)
    return UnknownRecord(type=raw.type)


def read_record(stream: BinaryIO) -> Union[DecodedRecord, ReadStatus]:
    """
    Read and decode the next record.

    Returns ReadStatus.END_OF_STREAM or ReadStatus.INCOMPLETE exactly as the
    framer reported them. Raises DecodingError if the body is corrupt, in
    which case the stream is already past that record.
    """
    raw = read_raw_record(stream)
    if isinstance(raw, ReadStatus):
        return raw
    return decode_raw_record(raw)


def iter_records(stream: BinaryIO) -> Iterator[DecodedRecord]:
    """
    Yield decoded records until the stream runs out or ends mid record.

    Unknown records are yielded too, callers usually just skip them.
    """
    while True:
        rec = read_record(stream)
        if isinstance(rec, ReadStatus):
            return
        yield rec

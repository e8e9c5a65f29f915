"""
Unified2 reading and decoding.

Everything needed to read records from a stream lives here. Nothing in the
decoding path opens files or logs, the tailer is the one piece that owns
a file handle.
"""

from .wire import RecordType, is_event_type
from .models import (
    DecodedRecord,
    EventRecord,
    ExtraDataRecord,
    PacketRecord,
    RawHeader,
    RawRecord,
    ReadStatus,
    UnknownRecord,
)
from .errors import DecodingError, Unified2Error
from .framer import read_raw_record
from .decoder import decode_event, decode_extra_data, decode_packet
from .dispatch import decode_raw_record, iter_records, read_record
from .tail import Unified2Tailer

__all__ = [
    "RecordType",
    "is_event_type",
    "DecodedRecord",
    "EventRecord",
    "ExtraDataRecord",
    "PacketRecord",
    "RawHeader",
    "RawRecord",
    "ReadStatus",
    "UnknownRecord",
    "DecodingError",
    "Unified2Error",
    "read_raw_record",
    "decode_event",
    "decode_extra_data",
    "decode_packet",
    "decode_raw_record",
    "iter_records",
    "read_record",
    "Unified2Tailer",
]

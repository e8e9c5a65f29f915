from __future__ import annotations

import struct
from enum import IntEnum
from typing import Optional

# Unified2 is big endian throughout. Layouts follow the Snort unified2 output
# plugin, record header first, then one of the bodies below.


class RecordType(IntEnum):
    """
    Record type tags found in the record header.

    Anything outside this set is an unknown record, which is skipped,
    not rejected.
    """

    PACKET = 2
    EVENT = 7
    EVENT_IP6 = 72
    EVENT_V2 = 104
    EVENT_IP6_V2 = 105
    EXTRA_DATA = 110

    @classmethod
    def lookup(cls, value: int) -> Optional["RecordType"]:
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def is_event(self) -> bool:
        return self in _EVENT_TYPES

    @property
    def is_ipv6(self) -> bool:
        return self in (RecordType.EVENT_IP6, RecordType.EVENT_IP6_V2)

    @property
    def is_v2(self) -> bool:
        return self in (RecordType.EVENT_V2, RecordType.EVENT_IP6_V2)


_EVENT_TYPES = frozenset(
    (
        RecordType.EVENT,
        RecordType.EVENT_IP6,
        RecordType.EVENT_V2,
        RecordType.EVENT_IP6_V2,
    )
)


def is_event_type(value: int) -> bool:
    """
    True if the raw type tag is one of the four event tags.
    """
    rt = RecordType.lookup(value)
    return rt is not None and rt.is_event


# Record header: type(4), length(4)
RECORD_HEADER = struct.Struct("!II")

# Event preamble:
# sensor_id, event_id, event_second, event_microsecond,
# signature_id, generator_id, signature_revision, classification_id, priority
EVENT_PREAMBLE = struct.Struct("!9I")

# Address pair, width fixed by the type tag
EVENT_ADDRS_IP4 = struct.Struct("!4s4s")
EVENT_ADDRS_IP6 = struct.Struct("!16s16s")

# sport_itype(2), dport_icode(2), protocol(1), impact_flag(1), impact(1), blocked(1)
EVENT_MID = struct.Struct("!HHBBBB")

# Only on v2 event tags: mpls_label(4), vlan_id(2)
EVENT_V2_TAIL = struct.Struct("!IH")

# sensor_id, event_id, event_second, packet_second, packet_microsecond,
# linktype, packet_length, then packet bytes
PACKET_HEADER = struct.Struct("!7I")

# event_type, event_length, sensor_id, event_id, event_second,
# type, data_type, data_length, then data bytes
EXTRA_DATA_HEADER = struct.Struct("!8I")

RECORD_HEADER_LEN = RECORD_HEADER.size
EVENT_PREAMBLE_LEN = EVENT_PREAMBLE.size
PACKET_RECORD_HDR_LEN = PACKET_HEADER.size
EXTRA_DATA_RECORD_HDR_LEN = EXTRA_DATA_HEADER.size


def event_body_len(record_type: RecordType) -> int:
    """
    Minimum body length for an event of the given type.
    """
    addrs = EVENT_ADDRS_IP6 if record_type.is_ipv6 else EVENT_ADDRS_IP4
    size = EVENT_PREAMBLE.size + addrs.size + EVENT_MID.size
    if record_type.is_v2:
        size += EVENT_V2_TAIL.size
    return size

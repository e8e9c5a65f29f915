from __future__ import annotations

import struct
from typing import Tuple

from .errors import DecodingError
from .models import EventRecord, ExtraDataRecord, PacketRecord
from .wire import (
    EVENT_ADDRS_IP4,
    EVENT_ADDRS_IP6,
    EVENT_MID,
    EVENT_PREAMBLE,
    EVENT_V2_TAIL,
    EXTRA_DATA_HEADER,
    PACKET_HEADER,
    RecordType,
)


def _unpack(layout: struct.Struct, data: bytes, off: int, record_type: int) -> Tuple[tuple, int]:
    """
    Unpack one fixed size block at off and return the values and the new offset.

    The framer already checked the declared length, so running out of bytes
    here means the body itself is malformed.
    """
    end = off + layout.size
    if end > len(data):
        raise DecodingError(
            f"record type {record_type}: need {layout.size} bytes at offset {off}, "
            f"body has {len(data)}",
            record_type=record_type,
            offset=off,
        )
    return layout.unpack_from(data, off), end


def decode_event(record_type: int, data: bytes) -> EventRecord:
    """
    Decode the body of any of the four event record types.

    Layout, all big endian:
      preamble, 9 x u32
      source and destination address, 4 bytes each for IPv4 tags, 16 for IPv6
      sport_itype(2), dport_icode(2), protocol(1), impact_flag(1), impact(1), blocked(1)
      mpls_label(4), vlan_id(2), v2 tags only

    Bytes after the last field are ignored. Any short read fails the whole
    record, a partial EventRecord is never returned.
    """
    rt = RecordType.lookup(record_type)
    if rt is None or not rt.is_event:
        raise DecodingError(f"record type {record_type} is not an event type", record_type=record_type)

    (
        sensor_id,
        event_id,
        event_second,
        event_microsecond,
        signature_id,
        generator_id,
        signature_revision,
        classification_id,
        priority,
    ), off = _unpack(EVENT_PREAMBLE, data, 0, rt)

    addrs = EVENT_ADDRS_IP6 if rt.is_ipv6 else EVENT_ADDRS_IP4
    (ip_source, ip_destination), off = _unpack(addrs, data, off, rt)

    (sport_itype, dport_icode, protocol, impact_flag, impact, blocked), off = _unpack(
        EVENT_MID, data, off, rt
    )

    mpls_label = None
    vlan_id = None
    if rt.is_v2:
        (mpls_label, vlan_id), off = _unpack(EVENT_V2_TAIL, data, off, rt)

    return EventRecord(
        record_type=rt,
        sensor_id=sensor_id,
        event_id=event_id,
        event_second=event_second,
        event_microsecond=event_microsecond,
        signature_id=signature_id,
        generator_id=generator_id,
        signature_revision=signature_revision,
        classification_id=classification_id,
        priority=priority,
        ip_source=ip_source,
        ip_destination=ip_destination,
        sport_itype=sport_itype,
        dport_icode=dport_icode,
        protocol=protocol,
        impact_flag=impact_flag,
        impact=impact,
        blocked=blocked,
        mpls_label=mpls_label,
        vlan_id=vlan_id,
    )


def decode_packet(data: bytes) -> PacketRecord:
    """
    Decode a packet record body.

    The packet bytes are everything after the 28 byte header. The declared
    length field is kept as is and not used for slicing.
    """
    (
        sensor_id,
        event_id,
        event_second,
        packet_second,
        packet_microsecond,
        linktype,
        length,
    ), off = _unpack(PACKET_HEADER, data, 0, RecordType.PACKET)

    return PacketRecord(
        sensor_id=sensor_id,
        event_id=event_id,
        event_second=event_second,
        packet_second=packet_second,
        packet_microsecond=packet_microsecond,
        linktype=linktype,
        length=length,
        data=bytes(data[off:]),
    )


def decode_extra_data(data: bytes) -> ExtraDataRecord:
    """
    Decode an extra data record body. The opaque data is the remainder of
    the body after the 32 byte header, whatever data_length says.
    """
    (
        event_type,
        event_length,
        sensor_id,
        event_id,
        event_second,
        type_,
        data_type,
        data_length,
    ), off = _unpack(EXTRA_DATA_HEADER, data, 0, RecordType.EXTRA_DATA)

    return ExtraDataRecord(
        event_type=event_type,
        event_length=event_length,
        sensor_id=sensor_id,
        event_id=event_id,
        event_second=event_second,
        type=type_,
        data_type=data_type,
        data_length=data_length,
        data=bytes(data[off:]),
    )

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Union

from .wire import RecordType


class ReadStatus(Enum):
    """
    Framing outcomes that are not records.

    END_OF_STREAM
      No bytes at all at a record boundary. Nothing more right now.

    INCOMPLETE
      Header or body only partially written. The stream was rewound to the
      record boundary, call again once the writer appended more.
    """

    END_OF_STREAM = "end_of_stream"
    INCOMPLETE = "incomplete"


@dataclass(frozen=True)
class RawHeader:
    type: int
    length: int


@dataclass(frozen=True)
class RawRecord:
    """
    One framed record. data holds exactly header.length bytes.
    """

    type: int
    data: bytes


@dataclass
class EventRecord:
    """
    Decoded intrusion event, any of the four event record types.

    Fields:
      record_type
        Which event tag produced this record. Decides address width
        and whether mpls_label and vlan_id exist.

      ip_source, ip_destination
        Raw address bytes, 4 long for IPv4 tags and 16 long for IPv6 tags.

      sport_itype, dport_icode
        Transport ports, or ICMP type and code for ICMP events.

      mpls_label, vlan_id
        Only set for v2 tags, None otherwise.
    """

    kind: ClassVar[str] = "event"

    record_type: RecordType
    sensor_id: int
    event_id: int
    event_second: int
    event_microsecond: int
    signature_id: int
    generator_id: int
    signature_revision: int
    classification_id: int
    priority: int
    ip_source: bytes
    ip_destination: bytes
    sport_itype: int
    dport_icode: int
    protocol: int
    impact_flag: int
    impact: int
    blocked: int
    mpls_label: Optional[int] = None
    vlan_id: Optional[int] = None

    @property
    def is_ipv6(self) -> bool:
        return len(self.ip_source) == 16

    @property
    def source_address(self) -> Union[ipaddress.IPv4Address, ipaddress.IPv6Address]:
        return ipaddress.ip_address(self.ip_source)

    @property
    def destination_address(self) -> Union[ipaddress.IPv4Address, ipaddress.IPv6Address]:
        return ipaddress.ip_address(self.ip_destination)

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "kind": self.kind,
            "record_type": int(self.record_type),
            "sensor_id": self.sensor_id,
            "event_id": self.event_id,
            "event_second": self.event_second,
            "event_microsecond": self.event_microsecond,
            "signature_id": self.signature_id,
            "generator_id": self.generator_id,
            "signature_revision": self.signature_revision,
            "classification_id": self.classification_id,
            "priority": self.priority,
            "ip_source": str(self.source_address),
            "ip_destination": str(self.destination_address),
            "sport_itype": self.sport_itype,
            "dport_icode": self.dport_icode,
            "protocol": self.protocol,
            "impact_flag": self.impact_flag,
            "impact": self.impact,
            "blocked": self.blocked,
        }
        if self.record_type.is_v2:
            d["mpls_label"] = self.mpls_label
            d["vlan_id"] = self.vlan_id
        return d


@dataclass
class PacketRecord:
    """
    Captured packet tied to an event.

    length is what the sensor declared. data is the rest of the record body,
    so len(data) can differ from length.
    """

    kind: ClassVar[str] = "packet"

    sensor_id: int
    event_id: int
    event_second: int
    packet_second: int
    packet_microsecond: int
    linktype: int
    length: int
    data: bytes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "record_type": int(RecordType.PACKET),
            "sensor_id": self.sensor_id,
            "event_id": self.event_id,
            "event_second": self.event_second,
            "packet_second": self.packet_second,
            "packet_microsecond": self.packet_microsecond,
            "linktype": self.linktype,
            "length": self.length,
            "data": self.data.hex(),
        }


@dataclass
class ExtraDataRecord:
    """
    Vendor extra data tied to an event. Same tail rule as PacketRecord,
    data_length is informational.
    """

    kind: ClassVar[str] = "extra_data"

    event_type: int
    event_length: int
    sensor_id: int
    event_id: int
    event_second: int
    type: int
    data_type: int
    data_length: int
    data: bytes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "record_type": int(RecordType.EXTRA_DATA),
            "event_type": self.event_type,
            "event_length": self.event_length,
            "sensor_id": self.sensor_id,
            "event_id": self.event_id,
            "event_second": self.event_second,
            "type": self.type,
            "data_type": self.data_type,
            "data_length": self.data_length,
            "data": self.data.hex(),
        }


@dataclass(frozen=True)
class UnknownRecord:
    """
    A well framed record with a type tag we do not decode.
    Not an error, skip it and read the next one.
    """

    kind: ClassVar[str] = "unknown"

    type: int

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "record_type": self.type}


DecodedRecord = Union[EventRecord, PacketRecord, ExtraDataRecord, UnknownRecord]

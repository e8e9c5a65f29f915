import io
import struct
from typing import Optional

from unified2_mcp.core.wire import RecordType

V4_SRC = bytes([10, 0, 0, 1])
V4_DST = bytes([10, 0, 0, 2])
V6_SRC = bytes([0x20, 0x01, 0x0D, 0xB8] + [0] * 11 + [1])
V6_DST = bytes([0x20, 0x01, 0x0D, 0xB8] + [0] * 11 + [2])


def build_event_body(
    record_type=RecordType.EVENT,
    sensor_id=1,
    event_id=2,
    event_second=1_000_000,
    event_microsecond=250,
    signature_id=2_100_498,
    generator_id=1,
    signature_revision=7,
    classification_id=29,
    priority=3,
    ip_source: Optional[bytes] = None,
    ip_destination: Optional[bytes] = None,
    sport_itype=80,
    dport_icode=443,
    protocol=6,
    impact_flag=0,
    impact=0,
    blocked=0,
    mpls_label=0,
    vlan_id=0,
) -> bytes:
    rt = RecordType(record_type)
    if ip_source is None:
        ip_source = V6_SRC if rt.is_ipv6 else V4_SRC
    if ip_destination is None:
        ip_destination = V6_DST if rt.is_ipv6 else V4_DST

    body = struct.pack(
        "!9I",
        sensor_id, event_id, event_second, event_microsecond,
        signature_id, generator_id, signature_revision, classification_id, priority,
    )
    body += ip_source + ip_destination
    body += struct.pack("!HHBBBB", sport_itype, dport_icode, protocol, impact_flag, impact, blocked)
    if rt.is_v2:
        body += struct.pack("!IH", mpls_label, vlan_id)
    return body


def build_packet_body(
    data=b"",
    sensor_id=1,
    event_id=2,
    event_second=1_000_000,
    packet_second=1_000_001,
    packet_microsecond=42,
    linktype=1,
    length=None,
) -> bytes:
    if length is None:
        length = len(data)
    return struct.pack(
        "!7I",
        sensor_id, event_id, event_second, packet_second, packet_microsecond, linktype, length,
    ) + data


def build_extra_data_body(
    data=b"",
    event_type=4,
    event_length=None,
    sensor_id=1,
    event_id=2,
    event_second=1_000_000,
    type_=1,
    data_type=1,
    data_length=None,
) -> bytes:
    if data_length is None:
        data_length = len(data)
    if event_length is None:
        event_length = 32 + len(data)
    return struct.pack(
        "!8I",
        event_type, event_length, sensor_id, event_id, event_second, type_, data_type, data_length,
    ) + data


def frame(record_type, body: bytes) -> bytes:
    return struct.pack("!II", int(record_type), len(body)) + body


class TrickleStream(io.RawIOBase):
    """
    Seekable stream that hands out at most chunk bytes per read call.
    """

    def __init__(self, data: bytes, chunk: int = 1):
        self._buf = io.BytesIO(data)
        self._chunk = chunk

    def readable(self):
        return True

    def seekable(self):
        return True

    def read(self, size=-1):
        if size is None or size < 0:
            size = self._chunk
        return self._buf.read(min(size, self._chunk))

    def tell(self):
        return self._buf.tell()

    def seek(self, offset, whence=io.SEEK_SET):
        return self._buf.seek(offset, whence)


class ToolRecorder:
    """
    Stands in for FastMCP, keeps registered tool functions by name.
    """

    def __init__(self):
        self.tools = {}

    def tool(self, name=None, **_kwargs):
        def decorator(fn):
            self.tools[name or fn.__name__] = fn
            return fn

        return decorator

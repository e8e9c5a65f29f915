import ipaddress

import pytest

from unified2_mcp.core.decoder import decode_event
from unified2_mcp.core.errors import DecodingError
from unified2_mcp.core.wire import RecordType, event_body_len
from tests.helpers import V6_DST, V6_SRC, build_event_body


def test_event_v4_v1_decodes_all_fields():
    body = build_event_body(
        RecordType.EVENT,
        sensor_id=1,
        event_id=2,
        event_second=1_000_000,
        priority=3,
        ip_source=bytes([10, 0, 0, 1]),
        ip_destination=bytes([10, 0, 0, 2]),
        sport_itype=80,
        dport_icode=443,
        protocol=6,
    )
    ev = decode_event(7, body)

    assert ev.record_type is RecordType.EVENT
    assert ev.sensor_id == 1
    assert ev.event_id == 2
    assert ev.event_second == 1_000_000
    assert ev.event_microsecond == 250
    assert ev.signature_id == 2_100_498
    assert ev.generator_id == 1
    assert ev.signature_revision == 7
    assert ev.classification_id == 29
    assert ev.priority == 3
    assert ev.ip_source == bytes([10, 0, 0, 1])
    assert ev.ip_destination == bytes([10, 0, 0, 2])
    assert ev.sport_itype == 80
    assert ev.dport_icode == 443
    assert ev.protocol == 6
    assert (ev.impact_flag, ev.impact, ev.blocked) == (0, 0, 0)
    assert ev.mpls_label is None
    assert ev.vlan_id is None
    assert ev.source_address == ipaddress.IPv4Address("10.0.0.1")


@pytest.mark.parametrize(
    "record_type, addr_len",
    [
        (RecordType.EVENT, 4),
        (RecordType.EVENT_IP6, 16),
        (RecordType.EVENT_V2, 4),
        (RecordType.EVENT_IP6_V2, 16),
    ],
)
def test_address_width_follows_type_tag(record_type, addr_len):
    ev = decode_event(record_type, build_event_body(record_type))
    assert len(ev.ip_source) == addr_len
    assert len(ev.ip_destination) == addr_len
    assert ev.is_ipv6 == (addr_len == 16)


def test_event_v6_addresses():
    ev = decode_event(RecordType.EVENT_IP6, build_event_body(RecordType.EVENT_IP6))
    assert ev.ip_source == V6_SRC
    assert ev.ip_destination == V6_DST
    assert ev.destination_address == ipaddress.IPv6Address("2001:db8::2")


@pytest.mark.parametrize("record_type", [RecordType.EVENT_V2, RecordType.EVENT_IP6_V2])
def test_v2_tags_carry_mpls_and_vlan(record_type):
    body = build_event_body(record_type, mpls_label=0x12345, vlan_id=100, blocked=1)
    ev = decode_event(record_type, body)
    assert ev.mpls_label == 0x12345
    assert ev.vlan_id == 100
    assert ev.blocked == 1


@pytest.mark.parametrize("record_type", [RecordType.EVENT, RecordType.EVENT_IP6])
def test_v1_tags_do_not_consume_v2_tail(record_type):
    body = build_event_body(record_type)
    assert len(body) == event_body_len(record_type)

    # Extra bytes after blocked are ignored for v1, not read as mpls and vlan.
    ev = decode_event(record_type, body + b"\xff" * 6)
    assert ev.mpls_label is None
    assert ev.vlan_id is None
    assert "mpls_label" not in ev.to_dict()


def test_event_body_lengths():
    assert event_body_len(RecordType.EVENT) == 52
    assert event_body_len(RecordType.EVENT_IP6) == 76
    assert event_body_len(RecordType.EVENT_V2) == 58
    assert event_body_len(RecordType.EVENT_IP6_V2) == 82


@pytest.mark.parametrize(
    "record_type",
    [RecordType.EVENT, RecordType.EVENT_IP6, RecordType.EVENT_V2, RecordType.EVENT_IP6_V2],
)
def test_truncated_event_body_is_decoding_error(record_type):
    body = build_event_body(record_type)
    for cut in (0, 20, 36, len(body) - 1):
        with pytest.raises(DecodingError):
            decode_event(record_type, body[:cut])


def test_v2_missing_vlan_fails_whole_record():
    body = build_event_body(RecordType.EVENT_V2, mpls_label=1, vlan_id=2)
    with pytest.raises(DecodingError) as exc:
        decode_event(RecordType.EVENT_V2, body[:-1])
    assert exc.value.record_type == RecordType.EVENT_V2
    assert exc.value.offset == 52


def test_non_event_type_rejected():
    with pytest.raises(DecodingError):
        decode_event(RecordType.PACKET, build_event_body())
    with pytest.raises(DecodingError):
        decode_event(12345, build_event_body())


def test_event_to_dict_renders_addresses():
    d = decode_event(RecordType.EVENT_V2, build_event_body(RecordType.EVENT_V2, vlan_id=7)).to_dict()
    assert d["kind"] == "event"
    assert d["record_type"] == 104
    assert d["ip_source"] == "10.0.0.1"
    assert d["ip_destination"] == "10.0.0.2"
    assert d["vlan_id"] == 7

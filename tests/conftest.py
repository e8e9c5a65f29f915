import logging

import pytest

from unified2_mcp.core.capability_base import CapabilityContext
from unified2_mcp.core.config import Settings
from tests.helpers import build_event_body, build_packet_body, frame
from unified2_mcp.core.wire import RecordType


@pytest.fixture
def settings():
    return Settings(env={"U2_POLL_INTERVAL": "0.01", "U2_QUEUE_SIZE": "100", "U2_READ_LIMIT": "50"})


@pytest.fixture
def ctx(settings):
    return CapabilityContext(settings=settings, logger=logging.getLogger("unified2_mcp.capabilities"))


@pytest.fixture
def spool_bytes():
    """
    One v4 event followed by its packet, an unknown record and a v6 v2 event.
    """
    return (
        frame(RecordType.EVENT, build_event_body(RecordType.EVENT, event_id=1))
        + frame(RecordType.PACKET, build_packet_body(b"\xde\xad\xbe\xef", event_id=1))
        + frame(999, b"\x00" * 12)
        + frame(RecordType.EVENT_IP6_V2, build_event_body(RecordType.EVENT_IP6_V2, event_id=2, vlan_id=10))
    )


@pytest.fixture
def spool_file(tmp_path, spool_bytes):
    path = tmp_path / "unified2.alert.1700000000"
    path.write_bytes(spool_bytes)
    return path

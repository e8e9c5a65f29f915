from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from .capability_base import CapabilityContext
from .config import Settings
from .registry import CapabilityRegistry
from .wire import (
    EXTRA_DATA_RECORD_HDR_LEN,
    PACKET_RECORD_HDR_LEN,
    RecordType,
    event_body_len,
)

logger = logging.getLogger("unified2_mcp.core.server")


def describe_record_types() -> List[Dict[str, Any]]:
    """
    The record types this server decodes and the minimum body length of each.
    """
    rows: List[Dict[str, Any]] = []
    for rt in RecordType:
        if rt.is_event:
            rows.append(
                {
                    "type": int(rt),
                    "name": rt.name.lower(),
                    "kind": "event",
                    "ipv6": rt.is_ipv6,
                    "v2": rt.is_v2,
                    "min_body_len": event_body_len(rt),
                }
            )
        elif rt is RecordType.PACKET:
            rows.append({"type": int(rt), "name": "packet", "kind": "packet", "min_body_len": PACKET_RECORD_HDR_LEN})
        elif rt is RecordType.EXTRA_DATA:
            rows.append(
                {"type": int(rt), "name": "extra_data", "kind": "extra_data", "min_body_len": EXTRA_DATA_RECORD_HDR_LEN}
            )
    return rows


class Unified2MCPServer:
    """
    MCP server around the unified2 reader.

    Responsibilities:
      Load configured capabilities
      Hand them settings and a logger
      Expose core tools that do not touch any file
    """

    def __init__(self, settings: Optional[Settings] = None, capability_imports: Optional[List[str]] = None):
        self.settings = settings or Settings()
        self.registry = CapabilityRegistry()
        self.mcp = FastMCP("unified2_mcp")

        imports = capability_imports if capability_imports is not None else self.settings.capabilities
        self._load_capabilities(imports)
        self._register_core_tools()

    def _load_capabilities(self, imports: List[str]) -> None:
        self.registry.load_from_import_paths(imports)
        ctx = CapabilityContext(
            settings=self.settings,
            logger=logging.getLogger("unified2_mcp.capabilities"),
        )

        for name in self.registry.list():
            cap = self.registry.get(name)
            cap.register_tools(self.mcp, ctx)

    def _register_core_tools(self) -> None:
        @self.mcp.tool()
        def list_capabilities() -> List[str]:
            return self.registry.list()

        @self.mcp.tool()
        def capability_status(name: str) -> Dict[str, Any]:
            return self.registry.get(name).status()

        @self.mcp.tool(name="describe_record_types")
        def describe_record_types_tool() -> List[Dict[str, Any]]:
            return describe_record_types()

    def run(self) -> None:
        logger.info("starting unified2 MCP server with %s", ", ".join(self.registry.list()))
        self.mcp.run()

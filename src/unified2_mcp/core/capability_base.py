from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Protocol

from .config import Settings


@dataclass
class CapabilityContext:
    """
    Shared runtime objects the server hands to every capability.

    settings
      Host Settings, read limits and tail polling parameters.

    logger
      Logger under unified2_mcp.capabilities, capabilities take a child of it.
    """

    settings: Settings
    logger: logging.Logger


class Capability(Protocol):
    """
    Required interface for a capability plugin.

    A capability
    1. Registers its MCP tools
    2. Owns any files and cursors it opens
    3. Uses the core reader and decoders to turn bytes into records

    The server never imports capabilities directly, the registry loads them
    from import strings.
    """

    name: str

    def register_tools(self, mcp: Any, ctx: CapabilityContext) -> None:
        """
        Called once at server startup. Capabilities register tools here.
        """
        ...

    def status(self) -> Dict[str, Any]:
        """
        Quick health and counters. Must be fast and side effect free.
        """
        ...

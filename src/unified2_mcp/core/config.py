"""Runtime settings read from U2_* environment variables."""

from __future__ import annotations

import json
import os
from typing import List, Mapping, Optional

DEFAULT_CAPABILITIES = [
    "unified2_mcp.capabilities.file_read.capability:build_capability",
    "unified2_mcp.capabilities.file_tail.capability:build_capability",
]


class Settings:
    """
    Host settings. The decoding core takes none of these.

    capabilities
      Import strings "module:factory" loaded by the registry.

    log_level
      Level name for the unified2_mcp logger.

    poll_interval
      Seconds the tail collector sleeps after reaching the end of the file.

    queue_size
      Records the tail collector buffers before dropping the oldest.

    read_limit
      Default and maximum records returned by one tool call.
    """

    def __init__(self, env: Optional[Mapping[str, str]] = None):
        env = os.environ if env is None else env

        raw_caps = env.get("U2_CAPABILITIES")
        self.capabilities: List[str] = json.loads(raw_caps) if raw_caps else list(DEFAULT_CAPABILITIES)
        if not isinstance(self.capabilities, list) or not all(isinstance(c, str) for c in self.capabilities):
            raise ValueError("U2_CAPABILITIES must be a JSON list of import strings")

        self.log_level = env.get("U2_LOG_LEVEL", "info")
        self.poll_interval = float(env.get("U2_POLL_INTERVAL", "1.0"))
        self.queue_size = int(env.get("U2_QUEUE_SIZE", "10000"))
        self.read_limit = int(env.get("U2_READ_LIMIT", "500"))

        if self.poll_interval <= 0:
            raise ValueError("U2_POLL_INTERVAL must be positive")
        if self.queue_size <= 0:
            raise ValueError("U2_QUEUE_SIZE must be positive")
        if self.read_limit <= 0:
            raise ValueError("U2_READ_LIMIT must be positive")

    def clamp_limit(self, requested: Optional[int]) -> int:
        if requested is None or requested <= 0:
            return self.read_limit
        return min(int(requested), self.read_limit)

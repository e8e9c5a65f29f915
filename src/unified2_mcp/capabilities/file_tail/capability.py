from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from unified2_mcp.core.capability_base import Capability, CapabilityContext
from unified2_mcp.core.queue import RecordQueue
from unified2_mcp.core.tail import Unified2Tailer


class FileTailCapability:
    """
    Follows a unified2 file while the sensor keeps appending to it.

    One collector task, one tailer, one cursor. Decoded records go into a
    bounded RecordQueue that fetch_records drains. Corrupt records are
    skipped and counted by the tailer, unknown types are dropped.
    """

    name = "file_tail"

    def __init__(self, poll_interval: float = 1.0, queue_size: int = 10_000, batch_size: int = 500):
        self._ctx: Optional[CapabilityContext] = None
        self._log = logging.getLogger("unified2_mcp.capabilities.file_tail")
        self._task: Optional[asyncio.Task] = None
        self._stop = asyncio.Event()
        self._running = False

        self._tailer: Optional[Unified2Tailer] = None
        self._poll_interval = float(poll_interval)
        self._batch_size = int(batch_size)
        self.queue = RecordQueue(maxlen=queue_size)

        self._ingested = 0
        self._last_error: Optional[str] = None

    def register_tools(self, mcp: Any, ctx: CapabilityContext) -> None:
        self._ctx = ctx
        self._log = ctx.logger.getChild(self.name)
        self._poll_interval = ctx.settings.poll_interval
        self._batch_size = ctx.settings.read_limit
        self.queue = RecordQueue(maxlen=ctx.settings.queue_size)

        @mcp.tool()
        async def start_collection(capability: str, path: str, offset: int = 0) -> str:
            if capability != self.name:
                return f"wrong capability, expected {self.name}"
            return await self.start(path, offset)

        @mcp.tool()
        async def stop_collection(capability: str) -> str:
            if capability != self.name:
                return f"wrong capability, expected {self.name}"
            return await self.stop()

        @mcp.tool()
        def fetch_records(limit: int = 0) -> Dict[str, Any]:
            return self.fetch(ctx.settings.clamp_limit(limit))

    async def start(self, path: str, offset: int = 0) -> str:
        if self._running:
            return "already running"
        if not Path(path).is_file():
            return f"no such file {path}"

        self._tailer = Unified2Tailer(path, offset=offset)
        self._last_error = None
        self._stop.clear()
        self._task = asyncio.create_task(self._run())
        self._running = True
        self._log.info("tailing %s from offset %d", path, offset)
        return f"tailing {path} from offset {offset}"

    async def stop(self) -> str:
        if not self._running:
            return "not running"
        self._stop.set()
        if self._task:
            await self._task
        self._running = False
        self._log.info("stopped tailing at offset %d", self._tailer.offset if self._tailer else 0)
        return "stopped"

    async def _run(self) -> None:
        tailer = self._tailer
        if tailer is None:
            return

        try:
            while not self._stop.is_set():
                try:
                    records = tailer.poll(self._batch_size)
                except OSError as e:
                    self._last_error = str(e)
                    self._log.error("tail of %s failed: %s", tailer.path, e)
                    break

                if records:
                    self.queue.put_many(records)
                    self._ingested += len(records)
                    # A full batch means more may already be waiting.
                    if len(records) >= self._batch_size:
                        await asyncio.sleep(0)
                        continue

                try:
                    await asyncio.wait_for(self._stop.wait(), timeout=self._poll_interval)
                except asyncio.TimeoutError:
                    pass
        finally:
            tailer.close()
            self._running = False

    def fetch(self, limit: Optional[int] = None) -> Dict[str, Any]:
        records: List[Dict[str, Any]] = [r.to_dict() for r in self.queue.drain(limit)]
        return {
            "records": records,
            "count": len(records),
            "pending": len(self.queue),
            "offset": self._tailer.offset if self._tailer else None,
        }

    def status(self) -> Dict[str, Any]:
        st: Dict[str, Any] = {
            "name": self.name,
            "running": self._running,
            "ingested": self._ingested,
            "pending": len(self.queue),
            "dropped": self.queue.dropped,
            "last_error": self._last_error,
        }
        if self._tailer is not None:
            st.update(self._tailer.stats())
        return st


def build_capability() -> Capability:
    return FileTailCapability()

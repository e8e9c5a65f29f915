from __future__ import annotations

import io
import logging
from typing import Any, Dict, List, Optional

from unified2_mcp.core.capability_base import Capability, CapabilityContext
from unified2_mcp.core.dispatch import read_record
from unified2_mcp.core.errors import DecodingError
from unified2_mcp.core.models import ReadStatus, UnknownRecord


class FileReadCapability:
    """
    Stateless reads of a unified2 file.

    Every call opens the file, seeks to offset, decodes up to max_records
    and returns next_offset. The caller keeps the cursor, so the same call
    works for one shot dumps and for paging through a growing file.

    stop values:
      end_of_stream
        Reached the end of what is written

      incomplete
        Last record only partially written, retry from next_offset later

      limit
        max_records reached

      decoding_error
        Record at error_offset is corrupt. next_offset is past it.
    """

    name = "file_read"

    def __init__(self):
        self._ctx: Optional[CapabilityContext] = None
        self._log = logging.getLogger("unified2_mcp.capabilities.file_read")
        self._calls = 0
        self._records = 0
        self._errors = 0

    def register_tools(self, mcp: Any, ctx: CapabilityContext) -> None:
        self._ctx = ctx
        self._log = ctx.logger.getChild(self.name)

        @mcp.tool()
        def read_unified2(path: str, offset: int = 0, max_records: int = 0) -> Dict[str, Any]:
            limit = ctx.settings.clamp_limit(max_records)
            return self.read(path, offset=offset, max_records=limit)

    def read(self, path: str, offset: int = 0, max_records: int = 100) -> Dict[str, Any]:
        self._calls += 1
        records: List[Dict[str, Any]] = []
        skipped_unknown = 0
        stop = "limit"
        error: Optional[Dict[str, Any]] = None

        with open(path, "rb") as f:
            f.seek(int(offset), io.SEEK_SET)

            while len(records) < max_records:
                start = f.tell()
                try:
                    rec = read_record(f)
                except DecodingError as e:
                    self._errors += 1
                    self._log.warning("corrupt record at offset %d in %s: %s", start, path, e)
                    stop = "decoding_error"
                    error = {"error_offset": start, "record_type": e.record_type, "message": str(e)}
                    break

                if isinstance(rec, ReadStatus):
                    stop = rec.value
                    break

                if isinstance(rec, UnknownRecord):
                    skipped_unknown += 1
                    continue

                records.append(rec.to_dict())

            next_offset = f.tell()

        self._records += len(records)
        result: Dict[str, Any] = {
            "path": path,
            "records": records,
            "count": len(records),
            "skipped_unknown": skipped_unknown,
            "next_offset": next_offset,
            "stop": stop,
        }
        if error:
            result.update(error)
        return result

    def status(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "calls": self._calls,
            "records": self._records,
            "errors": self._errors,
        }


def build_capability() -> Capability:
    return FileReadCapability()

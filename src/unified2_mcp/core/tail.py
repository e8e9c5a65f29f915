from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Union

from .dispatch import read_record
from .errors import DecodingError
from .models import DecodedRecord, ReadStatus, UnknownRecord

logger = logging.getLogger("unified2_mcp.core.tail")


class Unified2Tailer:
    """
    Follows one unified2 file with one cursor.

    The file may still be written by the sensor. poll() reads as far as
    complete records go and stops at the first partially written record,
    leaving the cursor on its boundary for the next poll.

    skip_corrupt
      True means a record that fails to decode is logged, counted and
      skipped. False means DecodingError is raised to the caller. Either
      way the cursor is already past the corrupt record.

    Unknown record types are counted and never returned.
    """

    def __init__(self, path: Union[str, Path], offset: int = 0, skip_corrupt: bool = True):
        self.path = Path(path)
        self.skip_corrupt = skip_corrupt
        self._start_offset = int(offset)
        self._file: Optional[BinaryIO] = None
        self._last_status: Optional[ReadStatus] = None

        self._counts: Dict[str, int] = {
            "event": 0,
            "packet": 0,
            "extra_data": 0,
            "unknown": 0,
            "corrupt": 0,
        }

    def _open(self) -> BinaryIO:
        if self._file is None:
            f = open(self.path, "rb")
            f.seek(self._start_offset, io.SEEK_SET)
            self._file = f
        return self._file

    @property
    def offset(self) -> int:
        if self._file is None:
            return self._start_offset
        return self._file.tell()

    def poll(self, max_records: Optional[int] = None) -> List[DecodedRecord]:
        """
        Return decoded records available right now, at most max_records.
        """
        f = self._open()
        out: List[DecodedRecord] = []

        while max_records is None or len(out) < max_records:
            start = f.tell()
            try:
                rec = read_record(f)
            except DecodingError as e:
                self._counts["corrupt"] += 1
                if not self.skip_corrupt:
                    raise
                logger.warning("skipping corrupt record at offset %d in %s: %s", start, self.path, e)
                continue

            if isinstance(rec, ReadStatus):
                self._last_status = rec
                break

            if isinstance(rec, UnknownRecord):
                self._counts["unknown"] += 1
                logger.debug("skipping unknown record type %d at offset %d", rec.type, start)
                continue

            self._counts[rec.kind] += 1
            out.append(rec)

        return out

    def stats(self) -> Dict[str, Any]:
        return {
            "path": str(self.path),
            "offset": self.offset,
            "last_status": self._last_status.value if self._last_status else None,
            **self._counts,
        }

    def close(self) -> None:
        if self._file is not None:
            self._start_offset = self._file.tell()
            self._file.close()
            self._file = None

    def __enter__(self) -> "Unified2Tailer":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

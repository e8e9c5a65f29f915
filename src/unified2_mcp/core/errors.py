from __future__ import annotations

from typing import Optional


class Unified2Error(Exception):
    """
    Base class for errors raised by the unified2 core.
    """


class DecodingError(Unified2Error, ValueError):
    """
    A fixed size field could not be read from a body whose length the
    framer already confirmed. The payload is corrupt, retrying reads the
    same bytes again.
    """

    def __init__(self, message: str, record_type: Optional[int] = None, offset: Optional[int] = None):
        super().__init__(message)
        self.record_type = record_type
        self.offset = offset

"""
Transaction validity window.

TimeBounds carries 64-bit Unix timestamps. ``max_time == 0`` means the
transaction has no upper bound. An absent TimeBounds on the wire decodes to
``None``, which is distinct from a present TimeBounds with ``max_time == 0``.
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError, model_validator

from ..codec.reader import XdrReader
from ..codec.writer import XdrWriter
from ..runtime.errors import InvalidArgumentError, UnmarshalError

UINT64_MAX = 2**64 - 1


class TimeBounds(BaseModel):
    """
    Time interval during which a transaction is valid.
    """
    min_time: int = Field(ge=0, le=UINT64_MAX, alias="minTime", description="Earliest valid close time")
    max_time: int = Field(ge=0, le=UINT64_MAX, alias="maxTime", description="Latest valid close time, 0 for none")

    model_config = {"frozen": True, "populate_by_name": True, "strict": True}

    def __init__(self, min_time: int, max_time: int, **data: Any):
        """
        Args:
            min_time: 64-bit Unix timestamp, inclusive lower bound
            max_time: 64-bit Unix timestamp, upper bound or 0

        Raises:
            InvalidArgumentError: If either bound is negative or
                ``min_time >= max_time`` while ``max_time != 0``
        """
        try:
            super().__init__(min_time=min_time, max_time=max_time, **data)
        except ValidationError as e:
            raise InvalidArgumentError(
                f"invalid time bounds: {e.errors()[0]['msg']}",
                details={"min_time": min_time, "max_time": max_time},
                cause=e,
            ) from e

    @model_validator(mode="after")
    def _check_order(self) -> TimeBounds:
        if self.max_time != 0 and self.min_time >= self.max_time:
            raise ValueError("minTime must be < maxTime")
        return self

    @classmethod
    def expires_after(cls, timeout: int) -> TimeBounds:
        """
        Time bounds ending ``timeout`` seconds from now, with no lower bound.

        Args:
            timeout: Seconds from now
        """
        now = round(datetime.now(timezone.utc).timestamp())
        return cls(0, now + timeout)

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.uint64(self.min_time)
        writer.uint64(self.max_time)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> TimeBounds:
        min_time = reader.uint64()
        max_time = reader.uint64()
        try:
            return cls(min_time, max_time)
        except InvalidArgumentError as e:
            raise UnmarshalError(str(e.message), cause=e) from e

    @classmethod
    def read_optional_xdr(cls, reader: XdrReader) -> Optional[TimeBounds]:
        """Read an optional TimeBounds; an absent value yields None."""
        return reader.optional(cls.read_xdr)

    def to_xdr(self) -> bytes:
        writer = XdrWriter()
        self.write_xdr(writer)
        return writer.to_bytes()

    @classmethod
    def from_xdr(cls, data: bytes) -> TimeBounds:
        reader = XdrReader(data)
        bounds = cls.read_xdr(reader)
        reader.expect_eof()
        return bounds

    def to_dict(self) -> Dict[str, Any]:
        return {"minTime": self.min_time, "maxTime": self.max_time}

"""
XDR Writer

Implements the big-endian, 4-byte aligned External Data Representation used
on the Stellar wire. Every primitive checks its range so an unrepresentable
value surfaces as a MarshalError instead of silently wrapping.
"""

import struct
from typing import Callable, List, Optional, Sequence, TypeVar

from ..runtime.errors import MarshalError

T = TypeVar("T")


class XdrWriter:
    """
    Append-only XDR encoder.

    Values are written in call order; to_bytes() returns the accumulated
    encoding.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[bytes] = []

    def _pack(self, fmt: str, v: int, kind: str) -> None:
        try:
            self._bb.append(struct.pack(fmt, v))
        except struct.error as e:
            raise MarshalError(f"value {v!r} does not fit {kind}", cause=e) from e

    def uint32(self, v: int) -> None:
        """Write unsigned 32-bit integer."""
        self._pack(">I", v, "uint32")

    def int32(self, v: int) -> None:
        """Write signed 32-bit integer."""
        self._pack(">i", v, "int32")

    def uint64(self, v: int) -> None:
        """Write unsigned 64-bit integer."""
        self._pack(">Q", v, "uint64")

    def int64(self, v: int) -> None:
        """Write signed 64-bit integer."""
        self._pack(">q", v, "int64")

    def boolean(self, v: bool) -> None:
        """Write boolean as a 32-bit 0 or 1."""
        self.uint32(1 if v else 0)

    def raw(self, v: bytes) -> None:
        """
        Write raw bytes without length prefix or padding.

        Used for pre-encoded fragments such as the network id.
        """
        self._bb.append(bytes(v))

    def fixed_opaque(self, v: bytes, size: int) -> None:
        """
        Write fixed-length opaque data, padded to a 4-byte boundary.

        Args:
            v: Bytes to write, exactly ``size`` long
            size: Declared length of the field

        Raises:
            MarshalError: If ``v`` is not ``size`` bytes
        """
        if len(v) != size:
            raise MarshalError(f"opaque[{size}] given {len(v)} bytes")
        self._bb.append(bytes(v))
        self._pad(size)

    def var_opaque(self, v: bytes, max_size: Optional[int] = None) -> None:
        """
        Write variable-length opaque data with a uint32 length prefix.

        Args:
            v: Bytes to write
            max_size: Optional declared upper bound

        Raises:
            MarshalError: If ``v`` exceeds ``max_size``
        """
        if max_size is not None and len(v) > max_size:
            raise MarshalError(f"opaque<{max_size}> given {len(v)} bytes")
        self.uint32(len(v))
        self._bb.append(bytes(v))
        self._pad(len(v))

    def string(self, s: str, max_size: Optional[int] = None) -> None:
        """Write a UTF-8 string as variable-length opaque data."""
        self.var_opaque(s.encode("utf-8"), max_size)

    def optional(self, v: Optional[T], write: Callable[["XdrWriter", T], None]) -> None:
        """
        Write an XDR optional: a presence flag followed by the value.

        Args:
            v: Value or None
            write: Callable encoding a present value into this writer
        """
        if v is None:
            self.boolean(False)
        else:
            self.boolean(True)
            write(self, v)

    def array(self, items: Sequence[T], write: Callable[["XdrWriter", T], None],
              max_size: Optional[int] = None) -> None:
        """
        Write a variable-length array: uint32 count then each element.

        Raises:
            MarshalError: If the array exceeds ``max_size``
        """
        if max_size is not None and len(items) > max_size:
            raise MarshalError(f"array<{max_size}> given {len(items)} elements")
        self.uint32(len(items))
        for item in items:
            write(self, item)

    def _pad(self, n: int) -> None:
        rem = n % 4
        if rem:
            self._bb.append(b"\x00" * (4 - rem))

    def to_bytes(self) -> bytes:
        """
        Return accumulated bytes as immutable bytes object.

        Returns:
            Bytes containing all written data
        """
        return b"".join(self._bb)

"""
XDR Reader

Decodes the big-endian, 4-byte aligned External Data Representation written
by XdrWriter. Reading past the end of the buffer or meeting a malformed
field raises UnmarshalError.
"""

import builtins
import struct
from typing import Callable, List, Optional, TypeVar

from ..runtime.errors import UnmarshalError

T = TypeVar("T")


class XdrReader:
    """
    Sequential XDR decoder over an in-memory buffer.
    """

    def __init__(self, buf: builtins.bytes):
        """
        Initialize reader with byte buffer.

        Args:
            buf: Byte buffer to read from
        """
        self._buf = builtins.bytes(buf)
        self._off = 0

    @property
    def eof(self) -> bool:
        """
        Check if at end of buffer.

        Returns:
            True if at end of buffer
        """
        return self._off >= len(self._buf)

    @property
    def offset(self) -> int:
        """Number of bytes consumed so far."""
        return self._off

    def _take(self, n: int) -> builtins.bytes:
        if n < 0 or self._off + n > len(self._buf):
            raise UnmarshalError(
                f"Buffer overflow: attempting to read {n} bytes at offset {self._off}",
                details={"length": len(self._buf)},
            )
        out = self._buf[self._off : self._off + n]
        self._off += n
        return out

    def uint32(self) -> int:
        """Read unsigned 32-bit integer."""
        return struct.unpack(">I", self._take(4))[0]

    def int32(self) -> int:
        """Read signed 32-bit integer."""
        return struct.unpack(">i", self._take(4))[0]

    def uint64(self) -> int:
        """Read unsigned 64-bit integer."""
        return struct.unpack(">Q", self._take(8))[0]

    def int64(self) -> int:
        """Read signed 64-bit integer."""
        return struct.unpack(">q", self._take(8))[0]

    def boolean(self) -> bool:
        """
        Read a 32-bit boolean.

        Raises:
            UnmarshalError: If the value is neither 0 nor 1
        """
        v = self.uint32()
        if v not in (0, 1):
            raise UnmarshalError(f"invalid boolean value: {v}")
        return v == 1

    def raw(self, n: int) -> builtins.bytes:
        """Read n bytes without padding."""
        return self._take(n)

    def fixed_opaque(self, size: int) -> builtins.bytes:
        """
        Read fixed-length opaque data and its padding.

        Args:
            size: Declared length of the field

        Returns:
            Bytes of the declared length
        """
        out = self._take(size)
        self._skip_pad(size)
        return out

    def var_opaque(self, max_size: Optional[int] = None) -> builtins.bytes:
        """
        Read variable-length opaque data with a uint32 length prefix.

        Args:
            max_size: Optional declared upper bound

        Returns:
            Bytes with length read from the prefix
        """
        n = self.uint32()
        if max_size is not None and n > max_size:
            raise UnmarshalError(f"opaque<{max_size}> declares {n} bytes")
        out = self._take(n)
        self._skip_pad(n)
        return out

    def string(self, max_size: Optional[int] = None) -> str:
        """Read a UTF-8 string encoded as variable-length opaque data."""
        data = self.var_opaque(max_size)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise UnmarshalError("string is not valid UTF-8", cause=e) from e

    def optional(self, read: Callable[["XdrReader"], T]) -> Optional[T]:
        """
        Read an XDR optional.

        Returns:
            The decoded value, or None when the presence flag is clear
        """
        if self.boolean():
            return read(self)
        return None

    def array(self, read: Callable[["XdrReader"], T], max_size: Optional[int] = None) -> List[T]:
        """Read a variable-length array."""
        n = self.uint32()
        if max_size is not None and n > max_size:
            raise UnmarshalError(f"array<{max_size}> declares {n} elements")
        return [read(self) for _ in range(n)]

    def _skip_pad(self, n: int) -> None:
        rem = n % 4
        if rem:
            pad = self._take(4 - rem)
            if pad.strip(b"\x00"):
                raise UnmarshalError("non-zero XDR padding")

    def expect_eof(self) -> None:
        """
        Assert the whole buffer was consumed.

        Raises:
            UnmarshalError: If trailing bytes remain
        """
        if not self.eof:
            raise UnmarshalError(f"{len(self._buf) - self._off} trailing bytes after XDR value")

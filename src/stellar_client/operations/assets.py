"""
Asset and price values used by offer operations.
"""

from __future__ import annotations
from decimal import Decimal, InvalidOperation, localcontext
from enum import IntEnum
from typing import Optional
import re

from ..codec.reader import XdrReader
from ..codec.writer import XdrWriter
from ..runtime.account_id import AccountId
from ..runtime.errors import InvalidArgumentError, UnmarshalError
from ..tx.account import read_account_id, write_account_id

INT32_MAX = 2**31 - 1

_ASSET_CODE = re.compile(r"^[a-zA-Z0-9]{1,12}$")


class AssetType(IntEnum):
    """XDR AssetType discriminants."""

    ASSET_TYPE_NATIVE = 0
    ASSET_TYPE_CREDIT_ALPHANUM4 = 1
    ASSET_TYPE_CREDIT_ALPHANUM12 = 2


class Asset:
    """
    The native asset (lumens) or a credit asset identified by code and issuer.
    """

    def __init__(self, asset_type: AssetType, code: Optional[str] = None, issuer: Optional[str] = None):
        self.type = AssetType(asset_type)
        self.code = code
        self.issuer = str(AccountId.parse(issuer)) if issuer is not None else None

    @classmethod
    def native(cls) -> Asset:
        return cls(AssetType.ASSET_TYPE_NATIVE)

    @classmethod
    def credit(cls, code: str, issuer: str) -> Asset:
        """
        Credit asset; the code length picks the alphanum4 or alphanum12 arm.

        Raises:
            InvalidArgumentError: If the code is not 1-12 alphanumeric characters
        """
        if not isinstance(code, str) or not _ASSET_CODE.match(code):
            raise InvalidArgumentError(f"invalid asset code: {code!r}")
        asset_type = AssetType.ASSET_TYPE_CREDIT_ALPHANUM4 if len(code) <= 4 else AssetType.ASSET_TYPE_CREDIT_ALPHANUM12
        return cls(asset_type, code, issuer)

    @property
    def is_native(self) -> bool:
        return self.type == AssetType.ASSET_TYPE_NATIVE

    def _code_size(self) -> int:
        return 4 if self.type == AssetType.ASSET_TYPE_CREDIT_ALPHANUM4 else 12

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.uint32(self.type)
        if self.is_native:
            return
        size = self._code_size()
        writer.fixed_opaque(self.code.encode("ascii").ljust(size, b"\x00"), size)
        write_account_id(writer, self.issuer)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> Asset:
        discriminant = reader.uint32()
        if discriminant == AssetType.ASSET_TYPE_NATIVE:
            return cls.native()
        elif discriminant in (AssetType.ASSET_TYPE_CREDIT_ALPHANUM4, AssetType.ASSET_TYPE_CREDIT_ALPHANUM12):
            size = 4 if discriminant == AssetType.ASSET_TYPE_CREDIT_ALPHANUM4 else 12
            code = reader.fixed_opaque(size).rstrip(b"\x00").decode("ascii", errors="replace")
            issuer = read_account_id(reader)
            return cls(AssetType(discriminant), code, issuer)
        raise UnmarshalError(f"unknown asset type: {discriminant}")

    def __eq__(self, other) -> bool:
        if not isinstance(other, Asset):
            return False
        return (self.type, self.code, self.issuer) == (other.type, other.code, other.issuer)

    def __hash__(self) -> int:
        return hash((self.type, self.code, self.issuer))

    def __str__(self) -> str:
        if self.is_native:
            return "native"
        return f"{self.code}:{self.issuer}"

    def __repr__(self) -> str:
        return f"Asset({self})"


class Price:
    """
    A price expressed as the fraction ``n / d`` of two int32 values.
    """

    def __init__(self, n: int, d: int):
        if not (0 <= n <= INT32_MAX and 0 < d <= INT32_MAX):
            raise InvalidArgumentError(f"price components must be positive int32 values: {n}/{d}")
        self.n = n
        self.d = d

    @classmethod
    def from_string(cls, price: str) -> Price:
        """
        Approximate a decimal price string by a fraction of int32 values.

        Expands the value as a continued fraction and keeps the last
        convergent whose numerator and denominator both fit int32.
        """
        try:
            with localcontext() as ctx:
                ctx.prec = 50
                number = Decimal(price)
                if not number.is_finite() or number < 0:
                    raise InvalidArgumentError(f"invalid price: {price!r}")
                fractions = [(0, 1), (1, 0)]
                while number <= INT32_MAX:
                    a = int(number)
                    f = number - a
                    h = a * fractions[-1][0] + fractions[-2][0]
                    k = a * fractions[-1][1] + fractions[-2][1]
                    if h > INT32_MAX or k > INT32_MAX:
                        break
                    fractions.append((h, k))
                    if f == 0:
                        break
                    number = 1 / f
        except (InvalidOperation, TypeError) as e:
            raise InvalidArgumentError(f"invalid price: {price!r}", cause=e) from e

        n, d = fractions[-1]
        if d == 0:
            raise InvalidArgumentError(f"price out of range: {price}")
        return cls(n, d)

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.int32(self.n)
        writer.int32(self.d)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> Price:
        n = reader.int32()
        d = reader.int32()
        try:
            return cls(n, d)
        except InvalidArgumentError as e:
            raise UnmarshalError(str(e.message), cause=e) from e

    def to_decimal(self) -> Decimal:
        return Decimal(self.n) / Decimal(self.d)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Price):
            return False
        return self.n == other.n and self.d == other.d

    def __hash__(self) -> int:
        return hash((self.n, self.d))

    def __str__(self) -> str:
        text = format(self.to_decimal(), "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text

    def __repr__(self) -> str:
        return f"Price({self.n}, {self.d})"

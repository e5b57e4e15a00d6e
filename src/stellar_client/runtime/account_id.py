"""
AccountId Pydantic custom type for Stellar ``G...`` addresses.
"""

from typing import Any
from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from ..crypto import strkey


class AccountId:
    """Custom Pydantic type for Stellar account ids."""

    def __init__(self, account_id: str):
        if not isinstance(account_id, str):
            raise ValueError("AccountId must be a string")
        if not account_id:
            raise ValueError("AccountId cannot be empty")
        if not account_id.startswith("G"):
            raise ValueError("AccountId must start with 'G'")

        # Raises StrKeyError (a ValueError) on bad checksum or length
        self._public_key = strkey.decode_account_id(account_id)
        self.account_id = account_id

    @classmethod
    def from_public_key(cls, public_key: bytes) -> "AccountId":
        """Build an account id from a raw 32-byte Ed25519 key."""
        return cls(strkey.encode_account_id(public_key))

    @property
    def public_key(self) -> bytes:
        """The raw 32-byte Ed25519 key behind the address."""
        return self._public_key

    def __str__(self) -> str:
        return self.account_id

    def __repr__(self) -> str:
        return f"AccountId('{self.account_id}')"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, AccountId):
            return self.account_id == other.account_id
        elif isinstance(other, str):
            return self.account_id == other
        return False

    def __hash__(self) -> int:
        return hash(self.account_id)

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        """Return a Pydantic CoreSchema that validates the AccountId."""
        return core_schema.no_info_before_validator_function(
            cls._validate,
            core_schema.is_instance_schema(cls),
        )

    @classmethod
    def _validate(cls, value: Any, _info=None) -> "AccountId":
        """Validate and convert the input to an AccountId."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(value)
        raise ValueError(f"Invalid AccountId: {value}")

    @classmethod
    def parse(cls, value: Any) -> "AccountId":
        """Parse a string or AccountId into an AccountId."""
        return cls._validate(value)

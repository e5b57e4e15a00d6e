"""
Stellar Client Error Model

This module provides the error handling framework for the transaction
envelope core. Every contract violation is reported synchronously to the
immediate caller as one of the error types below.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes for transaction building, encoding and decoding."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INVALID_ARGUMENT = 2
    OVERFLOW = 3

    # Encoding errors (100-199)
    ENCODING_ERROR = 100
    MARSHAL_ERROR = 103
    UNMARSHAL_ERROR = 104
    UNSUPPORTED_ENVELOPE_TYPE = 105

    # Builder errors (400-499)
    ALREADY_SET = 400
    MISSING_FIELD = 401
    EMPTY_OPERATION_LIST = 402

    # Signature errors (500-599)
    UNSIGNED = 500


class StellarError(Exception):
    """
    Base class for all Stellar client errors.

    Carries a structured code, optional details and the underlying cause.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a Stellar client error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class InvalidArgumentError(StellarError):
    """Malformed time bounds, sub-minimum base fee or underpaying fee bump."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_ARGUMENT, details, cause)


class FeeOverflowError(StellarError):
    """Fee arithmetic exceeds the signed 64-bit range."""

    def __init__(self, message: str = "fee overflows 64 bit int",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.OVERFLOW, details, cause)


class AlreadySetError(StellarError):
    """A set-once builder field was set a second time."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.ALREADY_SET, details, cause)


class MissingFieldError(StellarError):
    """A required builder field was never set before build()."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.MISSING_FIELD, details, cause)


class EmptyOperationListError(StellarError):
    """A transaction needs at least one operation."""

    def __init__(self, message: str = "At least one operation required",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.EMPTY_OPERATION_LIST, details, cause)


class UnsignedTransactionError(StellarError):
    """An envelope was requested before any signature was attached."""

    def __init__(self, message: str = "Transaction must be signed by at least one signer. Use transaction.sign().",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.UNSIGNED, details, cause)


class EncodingError(StellarError):
    """Data encoding/decoding errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.ENCODING_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class MarshalError(EncodingError):
    """A value cannot be represented in its XDR field."""

    def __init__(self, message: str = "Marshal error",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.MARSHAL_ERROR, details, cause)


class UnmarshalError(EncodingError):
    """Truncated or malformed XDR input."""

    def __init__(self, message: str = "Unmarshal error",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.UNMARSHAL_ERROR, details, cause)


class UnsupportedEnvelopeTypeError(EncodingError):
    """Envelope discriminant is not one of the decodable transaction envelopes."""

    def __init__(self, discriminant: int, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(f"transaction type is not supported: {discriminant}",
                         ErrorCode.UNSUPPORTED_ENVELOPE_TYPE, details, cause)
        self.discriminant = discriminant


__all__ = [
    "ErrorCode",
    "StellarError",
    "InvalidArgumentError",
    "FeeOverflowError",
    "AlreadySetError",
    "MissingFieldError",
    "EmptyOperationListError",
    "UnsignedTransactionError",
    "EncodingError",
    "MarshalError",
    "UnmarshalError",
    "UnsupportedEnvelopeTypeError",
]

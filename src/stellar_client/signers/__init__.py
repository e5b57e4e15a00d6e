"""
Signer interfaces.
"""

from .signer import Signer, SignerError

__all__ = ["Signer", "SignerError"]

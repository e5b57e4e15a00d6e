"""
Stellar XDR Codec Module

Canonical binary encoding for transactions and envelopes.

Key components:
- writer.py: big-endian XDR writer with range-checked primitives
- reader.py: matching XDR reader
- hashes.py: SHA-256 and signature hint helpers
"""

from .hashes import preimage_hint, sha256_bytes, signature_hint
from .reader import XdrReader
from .writer import XdrWriter

__all__ = [
    "XdrReader",
    "XdrWriter",
    "preimage_hint",
    "sha256_bytes",
    "signature_hint",
]

"""
Hashing and encoding helpers for building analyzer URLs.
"""

from __future__ import annotations

import base64
import hashlib


def sha256_str(text: str) -> str:
    """SHA-256 hash of a string."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def b64_str(text: str) -> str:
    """Standard base64 of a UTF-8 string (FOFA-style query encoding)."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")

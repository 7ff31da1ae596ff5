# codegate/domain/services.py
from __future__ import annotations

import hmac
import secrets

# Glyphs that are hard to tell apart once rendered (0/O, 1/I/L) are left out.
IMAGE_CODE_ALPHABET = "23456789ABCDEFGHJKMNPQRSTUVWXYZ"


def generate_numeric_code(length: int = 6) -> str:
    """Zero-padded numeric code of `length` digits."""
    if length < 1:
        raise ValueError("length must be positive")
    return f"{secrets.randbelow(10**length):0{length}d}"


def generate_text_code(length: int = 4, alphabet: str = IMAGE_CODE_ALPHABET) -> str:
    """Random code drawn from `alphabet`, used for rendered image codes."""
    if length < 1:
        raise ValueError("length must be positive")
    return "".join(secrets.choice(alphabet) for _ in range(length))


def secure_compare(a: str, b: str) -> bool:
    """
    Constant-time, case-preserving comparison for secrets.
    Accepts strings; falls back to bytes if needed.
    """
    try:
        # hmac.compare_digest supports str if types match
        return hmac.compare_digest(a, b)
    except TypeError:
        return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))

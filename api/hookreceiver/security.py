"""Signature primitives shared by the WebHook receivers."""

import binascii
import hmac

SIGNATURE_ALGORITHM = "sha256"


def from_hex(content: str) -> bytes:
    """
    Decode a hex string into raw bytes.

    Upper and lower case digits are accepted. Raises ValueError on an odd
    length or on any non-hex character, whitespace included.
    """
    try:
        return binascii.unhexlify(content)
    except (binascii.Error, TypeError) as exc:
        raise ValueError(f"Invalid hex content: {exc}") from exc


def to_hex(data: bytes) -> str:
    return data.hex()


def secret_equal(expected: bytes, actual: bytes) -> bool:
    """Constant-time comparison of two byte strings."""
    return hmac.compare_digest(expected, actual)


def compute_hash(secret: bytes, body: bytes, algorithm: str = SIGNATURE_ALGORITHM) -> bytes:
    return hmac.new(secret, body, algorithm).digest()


def compute_signature(secret: bytes, body: bytes, algorithm: str = SIGNATURE_ALGORITHM) -> str:
    """Return the signature header value a sender produces for ``body``."""
    return f"{algorithm}={to_hex(compute_hash(secret, body, algorithm))}"

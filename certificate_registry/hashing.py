"""Certificate hash helpers (validation and SHA-256 digests)."""

from __future__ import annotations

import hashlib
import re
from typing import Mapping, Union

from .errors import MalformedHash

HASH_BYTES = 32
HASH_HEX_LENGTH = HASH_BYTES * 2

_HEX = re.compile(r"[0-9a-fA-F]{%d}" % HASH_HEX_LENGTH)

CERTIFICATE_FIELDS = ("event", "organizer", "date", "recipient_name", "recipient_address")


def normalize_hash(value: Union[str, bytes]) -> str:
    """Return the canonical lowercase hex form of a certificate hash.

    Accepts 64 hex characters (with or without a ``0x`` prefix) or 32 raw bytes.
    """
    if isinstance(value, (bytes, bytearray)):
        if len(value) != HASH_BYTES:
            raise MalformedHash(f"Certificate hash must be {HASH_BYTES} bytes, got {len(value)}")
        return bytes(value).hex()

    if not isinstance(value, str):
        raise MalformedHash(f"Certificate hash must be str or bytes, got {type(value).__name__}")

    text = value.strip()
    if text[:2].lower() == "0x":
        text = text[2:]
    if not _HEX.fullmatch(text):
        raise MalformedHash(f"Certificate hash must be {HASH_HEX_LENGTH} hex characters: {value!r}")
    return text.lower()


def hash_certificate_fields(
    event: str,
    organizer: str,
    date: str,
    recipient_name: str,
    recipient_address: str,
) -> str:
    hash_input = f"{event}|{organizer}|{date}|{recipient_name}|{recipient_address}"
    return hashlib.sha256(hash_input.encode("utf-8")).hexdigest()


def verify_certificate_hash(certificate_details: Mapping[str, str], certificate_hash: str) -> bool:
    """Check that certificate details hash to ``certificate_hash``."""
    if not certificate_hash or not certificate_details:
        return False
    try:
        expected = normalize_hash(certificate_hash)
    except MalformedHash:
        return False
    calculated = hash_certificate_fields(*(certificate_details[k] for k in CERTIFICATE_FIELDS))
    return calculated == expected

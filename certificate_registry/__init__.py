"""Append-only certificate hash registry."""

from .contract import CertificateRecord, CertificateRegistry
from .errors import (
    AlreadyRegistered,
    InvalidOwner,
    MalformedHash,
    NotFound,
    RegistryError,
    TransactionFailed,
)

__all__ = [
    "AlreadyRegistered",
    "CertificateRecord",
    "CertificateRegistry",
    "InvalidOwner",
    "MalformedHash",
    "NotFound",
    "RegistryError",
    "TransactionFailed",
]

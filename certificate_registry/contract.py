# certificate_registry/contract.py

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple, Union

from .clock import SystemClock
from .errors import AlreadyRegistered, InvalidOwner, NotFound
from .hashing import normalize_hash

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


@dataclass(frozen=True)
class CertificateRecord:
    cert_hash: str
    owner: str
    timestamp: int


class CertificateRegistry:
    """
    An append-only ledger binding certificate hashes to the account that registered them.
    Each hash can be registered exactly once; records are never updated or removed.
    A single lock guards both the records and the per-owner counts, so readers never
    see a registration that is only half applied.
    """

    def __init__(self, clock: Optional[Clock] = None, owner_validator: Optional[Callable[[str], bool]] = None) -> None:
        self._clock = clock or SystemClock()
        self._owner_validator = owner_validator
        self._lock = threading.Lock()
        self._certificates: Dict[str, Tuple[str, int]] = {}
        self._owner_counts: Dict[str, int] = {}

    def register_certificate(self, cert_hash: Union[str, bytes], caller: str) -> CertificateRecord:
        """
        Registers a new certificate hash and associates it with the caller.
        Args:
            cert_hash: The SHA-256 hash of the certificate, as hex or raw bytes.
            caller: Identity of the registering account.
        Returns:
            The stored record.
        Raises:
            AlreadyRegistered: if the hash already has an owner.
        """
        key = normalize_hash(cert_hash)
        self._check_owner(caller)

        with self._lock:
            existing = self._certificates.get(key)
            if existing is not None:
                logger.warning(f"Rejected registration of {key} by {caller}: already owned by {existing[0]}")
                raise AlreadyRegistered(key, existing[0])

            timestamp = int(self._clock())
            self._certificates[key] = (caller, timestamp)
            self._owner_counts[caller] = self._owner_counts.get(caller, 0) + 1

        logger.info(f"Registered certificate {key} for {caller} at {timestamp}")
        return CertificateRecord(key, caller, timestamp)

    def certificate_exists(self, cert_hash: Union[str, bytes]) -> bool:
        key = normalize_hash(cert_hash)
        with self._lock:
            return key in self._certificates

    def get_certificate_owner(self, cert_hash: Union[str, bytes]) -> Tuple[str, int]:
        """
        Returns the (owner, timestamp) pair recorded when the hash was registered.
        Raises:
            NotFound: if the hash was never registered.
        """
        key = normalize_hash(cert_hash)
        with self._lock:
            entry = self._certificates.get(key)
        if entry is None:
            raise NotFound(key)
        return entry

    def get_certificate_count(self, owner: str) -> int:
        with self._lock:
            return self._owner_counts.get(owner, 0)

    def records(self) -> List[CertificateRecord]:
        """Snapshot of every record, in registration order."""
        with self._lock:
            return [CertificateRecord(h, o, t) for h, (o, t) in self._certificates.items()]

    def __len__(self) -> int:
        with self._lock:
            return len(self._certificates)

    def _check_owner(self, caller: str) -> None:
        if not isinstance(caller, str) or not caller:
            raise InvalidOwner("Caller identity must be a non-empty string")
        if self._owner_validator is not None and not self._owner_validator(caller):
            raise InvalidOwner(f"Caller is not a valid address: {caller}")

"""In-process execution environment for registry instances.

Plays the part a ledger plays for the deployed contract: it assigns app ids,
hands out transaction receipts, confirms them in rounds and supplies the
timestamp used for registrations.
"""

from __future__ import annotations

import base64
import hashlib
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .accounts import is_valid_address
from .clock import SystemClock
from .contract import CertificateRegistry
from .errors import AlreadyRegistered, TransactionFailed

logger = logging.getLogger(__name__)

MUTATING_METHODS = ("register_certificate",)
READONLY_METHODS = ("certificate_exists", "get_certificate_owner", "get_certificate_count")

FIRST_APP_ID = 1001


@dataclass
class Receipt:
    txid: str
    app_id: int
    sender: str
    method: str
    confirmed_round: Optional[int] = None
    return_value: Any = None
    error: Optional[AlreadyRegistered] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class Confirmation:
    txid: str
    app_id: int
    confirmed_round: int
    return_value: Any = None


def _txid(nonce: int, sender: str, method: str, args: tuple) -> str:
    digest = hashlib.sha256(f"{nonce}|{sender}|{method}|{args!r}".encode("utf-8")).digest()
    return base64.b32encode(digest).decode("ascii").rstrip("=")


class LocalHost:
    def __init__(self, clock: Optional[Callable[[], int]] = None, require_algorand_addresses: bool = True):
        self.clock = clock or SystemClock()
        self.require_algorand_addresses = require_algorand_addresses
        self._lock = threading.Lock()
        self._apps: Dict[int, CertificateRegistry] = {}
        self._receipts: Dict[str, Receipt] = {}
        self._next_app_id = FIRST_APP_ID
        self._round = 0
        self._nonce = 0

    def current_timestamp(self) -> int:
        return int(self.clock())

    @property
    def last_round(self) -> int:
        with self._lock:
            return self._round

    def registry(self, app_id: int) -> CertificateRegistry:
        with self._lock:
            try:
                return self._apps[app_id]
            except KeyError:
                raise LookupError(f"Unknown app id: {app_id}") from None

    def deploy(self, sender: str) -> Receipt:
        """Create a new registry instance and return the deployment receipt."""
        validator = is_valid_address if self.require_algorand_addresses else None
        registry = CertificateRegistry(clock=self.current_timestamp, owner_validator=validator)
        with self._lock:
            app_id = self._next_app_id
            self._next_app_id += 1
            self._apps[app_id] = registry
            receipt = self._record(app_id, sender, "create", (), app_id)
        logger.info(f"Created app {app_id} in round {receipt.confirmed_round} (txid {receipt.txid})")
        return receipt

    def submit(self, app_id: int, sender: str, method: str, *args: Any) -> Receipt:
        """
        Apply a state-changing call. A rejected call leaves no state change;
        its error is kept on the receipt and raised by wait().
        Malformed arguments raise immediately.
        """
        if method not in MUTATING_METHODS:
            raise ValueError(f"{method} is not a state-changing method; use call()")
        registry = self.registry(app_id)

        # rounds are handed out in the same order as registration timestamps
        with self._lock:
            try:
                result = registry.register_certificate(*args, caller=sender)
            except AlreadyRegistered as e:
                return self._record(app_id, sender, method, args, None, error=e)
            return self._record(app_id, sender, method, args, result)

    def wait(self, receipt: Receipt) -> Confirmation:
        with self._lock:
            known = self._receipts.get(receipt.txid)
        if known is None:
            raise TransactionFailed(receipt.txid, "unknown transaction")
        if known.error is not None:
            raise TransactionFailed(known.txid, str(known.error)) from known.error
        return Confirmation(known.txid, known.app_id, known.confirmed_round, known.return_value)

    def call(self, app_id: int, method: str, *args: Any) -> Any:
        """Read-only call; no transaction is recorded."""
        if method not in READONLY_METHODS:
            raise ValueError(f"{method} is not a read-only method; use submit()")
        return getattr(self.registry(app_id), method)(*args)

    def _record(self, app_id, sender, method, args, return_value, error=None) -> Receipt:
        # caller holds self._lock
        self._nonce += 1
        receipt = Receipt(
            txid=_txid(self._nonce, sender, method, args),
            app_id=app_id,
            sender=sender,
            method=method,
            return_value=return_value,
            error=error,
        )
        if error is None:
            self._round += 1
            receipt.confirmed_round = self._round
        self._receipts[receipt.txid] = receipt
        return receipt

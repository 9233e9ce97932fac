class RegistryError(Exception):
    """Base error for the certificate registry."""


class AlreadyRegistered(RegistryError):
    """Raised when a certificate hash is already registered."""

    def __init__(self, cert_hash: str, owner: str):
        super().__init__(f"Certificate hash is already registered: {cert_hash}")
        self.cert_hash = cert_hash
        self.owner = owner


class NotFound(RegistryError, KeyError):
    """Raised when a certificate hash is not registered."""

    def __init__(self, cert_hash: str):
        super().__init__(f"Certificate not found or not registered: {cert_hash}")
        self.cert_hash = cert_hash

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class MalformedHash(RegistryError, ValueError):
    """Raised when a certificate hash is not a 32-byte digest."""


class InvalidOwner(RegistryError, ValueError):
    """Raised when a caller identity is empty or not a valid address."""


class TransactionFailed(RegistryError):
    """Raised when waiting on a transaction that was rejected."""

    def __init__(self, txid: str, reason: str):
        super().__init__(f"Transaction {txid} rejected: {reason}")
        self.txid = txid
        self.reason = reason

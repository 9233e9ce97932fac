"""Algorand accounts used as registry principals."""

from dataclasses import dataclass

from algosdk import account, encoding, mnemonic


@dataclass(frozen=True)
class Account:
    address: str
    private_key: str

    @property
    def mnemonic(self) -> str:
        return mnemonic.from_private_key(self.private_key)


def load_account(mnemonic_phrase: str) -> Account:
    """Rebuild an account from its 25-word mnemonic."""
    private_key = mnemonic.to_private_key(mnemonic_phrase)
    return Account(account.address_from_private_key(private_key), private_key)


def generate_account() -> Account:
    private_key, address = account.generate_account()
    return Account(address, private_key)


def is_valid_address(value: str) -> bool:
    return isinstance(value, str) and encoding.is_valid_address(value)

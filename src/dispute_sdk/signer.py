"""
Dispute SDK Signer Module

Provides the signer interface used by the wallet client to sign transactions.

Classes:
    Signer: Abstract base class for signers
    LocalAccountSigner: secp256k1 signer backed by an eth-account local key

Example:
    >>> from dispute_sdk.signer import LocalAccountSigner
    >>> signer = LocalAccountSigner(private_key="0x...")
    >>> address = signer.get_address()

Note:
    - Extending to remote signers (KMS, hardware wallets) only requires
      implementing the Signer interface
"""

from typing import Any, Dict, Optional

from eth_account import Account

from .exceptions import InvalidPrivateKeyError


def _is_hex_key(value: str) -> bool:
    """Check whether a string is a 32-byte hex private key."""
    if not value:
        return False
    cleaned = value[2:] if value.startswith("0x") else value
    if len(cleaned) != 64:
        return False
    try:
        bytes.fromhex(cleaned)
        return True
    except ValueError:
        return False


class Signer:
    """
    Abstract base class for signers.

    Methods:
        get_address: Get the signer's checksummed address
        sign_tx: Sign a transaction dictionary and return raw transaction bytes
    """

    @property
    def address(self) -> str:
        return self.get_address()

    def get_address(self) -> str:
        raise NotImplementedError

    def sign_tx(self, unsigned_tx: Dict[str, Any]) -> bytes:
        """
        Sign an unsigned transaction.

        Args:
            unsigned_tx: Transaction fields as built by web3 ``build_transaction``

        Returns:
            RLP encoded signed transaction, ready for ``eth_sendRawTransaction``
        """
        raise NotImplementedError


class LocalAccountSigner(Signer):
    """
    Local key signer.

    Args:
        private_key: Hex private key (64 characters, 0x prefix optional)
        account: Existing eth-account ``LocalAccount`` (takes precedence)

    Raises:
        InvalidPrivateKeyError: Neither a valid key nor an account was given
    """

    def __init__(self, private_key: Optional[str] = None, account: Optional[Any] = None) -> None:
        if account is None:
            if not private_key or not _is_hex_key(private_key):
                raise InvalidPrivateKeyError("Expected 64 hex characters")
            try:
                account = Account.from_key(private_key)
            except Exception as e:
                raise InvalidPrivateKeyError(str(e)) from e
        self._account = account

    def get_address(self) -> str:
        return self._account.address

    def sign_tx(self, unsigned_tx: Dict[str, Any]) -> bytes:
        signed = self._account.sign_transaction(unsigned_tx)
        raw = getattr(signed, "raw_transaction", None)
        if raw is None:
            raw = signed.rawTransaction
        return bytes(raw)

# starledger/crypto/signatures.py
"""
Wallet message signatures (EIP-191 personal_sign) via eth-account.
"""

from typing import Union

from eth_account import Account
from eth_account.messages import encode_defunct

Signature = Union[str, bytes]


def verify_message(message: str, address: str, signature: Signature) -> bool:
    """
    True if `signature` over `message` recovers to `address`.
    Raises if the signature cannot be parsed at all.
    """
    recovered = Account.recover_message(encode_defunct(text=message), signature=signature)
    return str(recovered).lower() == str(address).lower()


def sign_message(message: str, private_key: Union[str, bytes]) -> str:
    """Sign `message` with a wallet key; returns 0x-prefixed hex signature."""
    signed = Account.sign_message(encode_defunct(text=message), private_key=private_key)
    return "0x" + bytes(signed.signature).hex()

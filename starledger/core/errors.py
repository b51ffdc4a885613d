# starledger/core/errors.py
"""
Exception hierarchy for the star ledger.

Every error propagates to the immediate caller unchanged; lookup misses are
not errors and come back as None or an empty list.
"""

from typing import Iterable, List


class LedgerError(Exception):
    """Base exception for starledger."""


class ConfigError(LedgerError):
    """Configuration is missing or invalid."""


class IntegrityError(LedgerError):
    """A block's stored hash does not match the hash of its fields."""

    def __init__(self, block_hash: str, message: str = ""):
        self.block_hash = block_hash
        super().__init__(message or f"Block with hash {block_hash} failed integrity check.")


class ValidationError(LedgerError):
    """Chain validation failed; carries every collected error in chain order."""

    def __init__(self, errors: Iterable[str]):
        self.errors: List[str] = list(errors)
        super().__init__(f"Chain validation failed with {len(self.errors)} error(s): " + "; ".join(self.errors))


class DecodeError(LedgerError):
    """Block body cannot be decoded as a star record."""


class OwnershipError(LedgerError):
    """Ownership proof rejected."""


class ExpiredRequestError(OwnershipError):
    """The signed challenge is older than the request window."""


class InvalidSignatureError(OwnershipError):
    """The wallet signature does not prove ownership of the address."""


class MalformedMessageError(OwnershipError):
    """The challenge message is not of the form <address>:<timestamp>:<tag>."""

# starledger/__init__.py
"""
starledger: in-memory, hash-linked star registry.
Blocks are sealed with SHA-256 over RFC 8785 canonical JSON; new entries are
gated by a time-bound challenge signed with the owner's wallet key.
"""

from starledger.chain.blockchain import Blockchain
from starledger.config import LedgerConfig
from starledger.core.errors import (
    ConfigError,
    DecodeError,
    ExpiredRequestError,
    IntegrityError,
    InvalidSignatureError,
    LedgerError,
    MalformedMessageError,
    OwnershipError,
    ValidationError,
)
from starledger.core.types import Block, StarRecord
from starledger.verify.verifier import ChainVerifier, VerificationResult

__version__ = "0.1.0-dev"

__all__ = [
    "Block",
    "Blockchain",
    "ChainVerifier",
    "ConfigError",
    "DecodeError",
    "ExpiredRequestError",
    "IntegrityError",
    "InvalidSignatureError",
    "LedgerConfig",
    "LedgerError",
    "MalformedMessageError",
    "OwnershipError",
    "StarRecord",
    "ValidationError",
    "VerificationResult",
]

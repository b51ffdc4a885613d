# starledger/chain/blockchain.py
import logging
import threading
import time
from dataclasses import replace
from typing import Callable, List, Optional

from starledger.config import LedgerConfig
from starledger.core.errors import (
    DecodeError,
    ExpiredRequestError,
    InvalidSignatureError,
    LedgerError,
    MalformedMessageError,
    ValidationError,
)
from starledger.core.types import Block, StarRecord
from starledger.crypto.signatures import Signature, verify_message
from starledger.verify.verifier import ChainVerifier, VerificationResult

logger = logging.getLogger(__name__)

GENESIS_PREVIOUS_HASH = "0x"

SignatureVerifier = Callable[[str, str, Signature], bool]


def _seal(block: Block, previous_block_hash: str, timestamp: int, height: int) -> Block:
    """Stamp linkage fields and hash; only the append path calls this."""
    stamped = replace(block, previous_block_hash=previous_block_hash, time=timestamp, height=height)
    return replace(stamped, hash=stamped.compute_digest())


class Blockchain:
    """
    In-memory, single-writer chain of star registrations.
    The genesis block is created on construction; afterwards the chain only
    grows through append(), which validates the existing history first.
    """

    def __init__(
        self,
        config: Optional[LedgerConfig] = None,
        *,
        clock: Callable[[], float] = time.time,
        verify_signature: SignatureVerifier = verify_message,
    ):
        self.config = config or LedgerConfig()
        self._clock = clock
        self._verify_signature = verify_signature
        self._verifier = ChainVerifier()
        self._blocks: List[Block] = []
        self._lock = threading.RLock()
        self.initialize()

    @property
    def height(self) -> int:
        with self._lock:
            return len(self._blocks) - 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._blocks)

    def _now(self) -> int:
        return int(self._clock())

    def _snapshot(self) -> List[Block]:
        with self._lock:
            return list(self._blocks)

    def initialize(self) -> None:
        """Create the genesis block if the chain is empty; no-op otherwise."""
        with self._lock:
            if self._blocks:
                return
            self.append(Block.from_data({"data": self.config.genesis_data}))
            logger.info("Genesis block created: %s", self._blocks[0].hash)

    def append(self, block: Block) -> int:
        """
        Validate the current chain, seal `block` onto its tail and store it.
        Returns the height of the stored block.
        """
        if block.is_sealed or block.height is not None:
            raise LedgerError("Block is already sealed and cannot be appended again")

        with self._lock:
            self.validate_chain()

            previous_hash = self._blocks[-1].hash if self._blocks else GENESIS_PREVIOUS_HASH
            sealed = _seal(block, previous_hash, self._now(), len(self._blocks))
            self._blocks.append(sealed)

        logger.debug("Appended block %d: %s", sealed.height, sealed.hash)
        return sealed.height

    def request_ownership_message(self, address: str) -> str:
        """Challenge the wallet owner signs before submitting a star."""
        return f"{address}:{self._now()}:{self.config.registry_tag}"

    def _parse_message_time(self, address: str, message: str) -> int:
        parts = message.split(":") if isinstance(message, str) else []
        if len(parts) != 3:
            raise MalformedMessageError(f"Expected '<address>:<timestamp>:{self.config.registry_tag}', got {message!r}")

        msg_address, msg_time, tag = parts
        if tag != self.config.registry_tag:
            raise MalformedMessageError(f"Unknown registry tag {tag!r}")
        if msg_address.lower() != str(address).lower():
            raise MalformedMessageError("Message was issued for a different address")
        try:
            return int(msg_time)
        except ValueError as e:
            raise MalformedMessageError(f"Invalid timestamp {msg_time!r} in message") from e

    def submit_entry(self, address: str, message: str, signature: Signature, star: dict) -> Block:
        """
        Register `star` for `address` given a signed ownership challenge.
        Each check is final: the first failure raises and nothing is appended.
        """
        message_time = self._parse_message_time(address, message)
        elapsed = self._now() - message_time

        if elapsed < 0:
            logger.warning("Rejected star for %s: challenge timestamp is in the future", address)
            raise MalformedMessageError(f"Challenge timestamp {message_time} is in the future")
        if elapsed >= self.config.request_window_seconds:
            logger.warning("Rejected star for %s: request expired (%ds old)", address, elapsed)
            raise ExpiredRequestError(
                "Your request has been expired. Please request and sign a new message."
            )

        try:
            signature_ok = self._verify_signature(message, address, signature)
        except Exception as e:
            logger.warning("Rejected star for %s: signature check raised %s", address, e)
            raise InvalidSignatureError(f"Signature could not be verified: {e}") from e
        if not signature_ok:
            logger.warning("Rejected star for %s: signature mismatch", address)
            raise InvalidSignatureError("Signature does not match the message and address")

        block = Block.from_data(StarRecord(star=star, owner=address).to_dict())
        height = self.append(block)
        stored = self._snapshot()[height]
        logger.info("Star registered for %s at height %d", address, height)
        return stored

    def find_by_digest(self, digest: str) -> Optional[Block]:
        block = next((b for b in self._snapshot() if b.hash == digest), None)
        logger.debug("Lookup by hash %s: %s", digest, "hit" if block else "miss")
        return block

    def find_by_height(self, height: int) -> Optional[Block]:
        return next((b for b in self._snapshot() if b.height == height), None)

    def list_stars_by_owner(self, address: str) -> List[StarRecord]:
        stars = []
        for block in self._snapshot():
            if block.height == 0:
                continue
            try:
                record = block.decode_payload()
            except DecodeError:
                continue
            if record.owner == address:
                stars.append(record)
        return stars

    def verify_chain(self) -> VerificationResult:
        """Collect every integrity and linkage defect without raising."""
        return self._verifier.verify(self._snapshot())

    def validate_chain(self) -> None:
        """Raise ValidationError listing every defect if the chain is not intact."""
        result = self.verify_chain()
        if not result.is_valid:
            logger.warning("Chain validation failed:\n%s", result)
            raise ValidationError(result.errors)

    def get_chain(self) -> List[Block]:
        """Returns copy of the full chain (blocks are immutable)"""
        return self._snapshot()

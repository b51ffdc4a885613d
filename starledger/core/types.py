# starledger/core/types.py
from dataclasses import dataclass, asdict
from typing import Any, Optional

from starledger.core.encoding import hex_encode_json, hex_decode_json
from starledger.core.errors import DecodeError, IntegrityError
from starledger.crypto.hashing import block_digest


@dataclass(frozen=True)
class StarRecord:
    """A registered star and the wallet address that owns it."""
    star: dict
    owner: str

    def to_dict(self) -> dict:
        return {"star": self.star, "owner": self.owner}

    @classmethod
    def from_dict(cls, data: Any) -> "StarRecord":
        if not isinstance(data, dict) or "star" not in data or "owner" not in data:
            raise DecodeError("Block body is not a star record")
        return cls(star=data["star"], owner=data["owner"])


@dataclass(frozen=True)
class Block:
    """
    Single entry in the hash-linked chain.
    Only `body` is set by the caller; the linkage fields stay None until the
    owning Blockchain seals the block on append.
    """
    body: str                                   # hex of canonical JSON payload
    previous_block_hash: Optional[str] = None   # "0x" for genesis
    time: Optional[int] = None                  # unix seconds, set on append
    height: Optional[int] = None                # chain position, set on append
    hash: Optional[str] = None                  # sha256 hex over the fields above

    @classmethod
    def from_data(cls, data: Any) -> "Block":
        """Build an unsealed block carrying `data` as its body."""
        return cls(body=hex_encode_json(data))

    @property
    def is_sealed(self) -> bool:
        return self.hash is not None

    def digest_fields(self) -> dict:
        """Fields committed to by the hash (the hash itself excluded)."""
        return {
            "body": self.body,
            "previous_block_hash": self.previous_block_hash,
            "time": self.time,
            "height": self.height,
        }

    def compute_digest(self) -> str:
        return block_digest(self.digest_fields())

    def validate(self) -> None:
        """Raise IntegrityError if the stored hash does not match the block's fields."""
        if self.hash is None or self.compute_digest() != self.hash:
            raise IntegrityError(self.hash or "<unsealed>")

    def get_data(self) -> Any:
        """Raw decoded body, genesis included."""
        try:
            return hex_decode_json(self.body)
        except ValueError as e:
            raise DecodeError(f"Block body cannot be decoded: {e}") from e

    def decode_payload(self) -> StarRecord:
        if self.height == 0:
            raise DecodeError("Genesis block carries no star record")
        return StarRecord.from_dict(self.get_data())

    def to_dict(self) -> dict:
        return asdict(self)

# starledger/crypto/hashing.py
import hashlib

from starledger.core.canon import canonical_json, present_fields


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def block_digest(fields: dict) -> str:
    """
    SHA-256 over the RFC 8785 canonical JSON of the set fields.
    Unset (None) fields are omitted so an unsealed record and a sealed one
    serialize the same way across implementations.
    """
    return sha256_hex(canonical_json(present_fields(fields)))

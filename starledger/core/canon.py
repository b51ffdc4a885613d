# starledger/core/canon.py
from typing import Any

import jcs


def canonical_json(obj: Any) -> bytes:
    """
    Produce deterministic UTF-8 bytes according to RFC 8785 (JSON Canonicalization Scheme).
    Returns bytes ready for hashing.
    """
    return jcs.canonicalize(obj)


def canonical_json_str(obj: Any) -> str:
    """Same as above, but returns string (mostly for debugging)."""
    return canonical_json(obj).decode("utf-8")


def present_fields(obj: dict) -> dict:
    """Drop keys whose value is None, so unset fields are omitted instead of encoded as null."""
    return {k: v for k, v in obj.items() if v is not None}

# starledger/core/encoding.py
import binascii
import json
from typing import Any

from starledger.core.canon import canonical_json


def hex_encode_json(obj: Any) -> str:
    """Encode an object as lowercase hex of its canonical JSON bytes."""
    return canonical_json(obj).hex()


def hex_decode_json(body: str) -> Any:
    """Decode a hex body back into the JSON object it carries."""
    try:
        raw = bytes.fromhex(body)
    except (TypeError, ValueError, binascii.Error) as e:
        raise ValueError(f"body is not valid hex: {e}") from e
    return json.loads(raw.decode("utf-8"))

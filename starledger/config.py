# starledger/config.py
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from starledger.core.errors import ConfigError

DEFAULT_REQUEST_WINDOW_SECONDS = 5 * 60
DEFAULT_REGISTRY_TAG = "starRegistry"
GENESIS_DATA = "Genesis Block"


@dataclass(frozen=True)
class LedgerConfig:
    """Runtime settings for a Blockchain."""
    request_window_seconds: int = DEFAULT_REQUEST_WINDOW_SECONDS
    registry_tag: str = DEFAULT_REGISTRY_TAG
    genesis_data: str = GENESIS_DATA

    def __post_init__(self):
        if self.request_window_seconds <= 0:
            raise ConfigError(f"request_window_seconds must be positive, got {self.request_window_seconds}")
        if not self.registry_tag or ":" in self.registry_tag:
            raise ConfigError(f"registry_tag must be non-empty and contain no ':', got {self.registry_tag!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LedgerConfig":
        """Resolve settings in this order:
        1. STARLEDGER_REQUEST_WINDOW / STARLEDGER_REGISTRY_TAG environment variables
        2. Defaults (300 seconds, "starRegistry")
        """
        env = os.environ if environ is None else environ

        window_raw = env.get("STARLEDGER_REQUEST_WINDOW")
        window = DEFAULT_REQUEST_WINDOW_SECONDS
        if window_raw:
            try:
                window = int(window_raw)
            except ValueError as e:
                raise ConfigError(f"STARLEDGER_REQUEST_WINDOW must be an integer, got {window_raw!r}") from e

        tag = env.get("STARLEDGER_REGISTRY_TAG") or DEFAULT_REGISTRY_TAG
        return cls(request_window_seconds=window, registry_tag=tag)

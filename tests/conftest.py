# tests/conftest.py
import pytest
from eth_account import Account

from starledger.chain.blockchain import Blockchain

# Deterministic test keys (DO NOT USE IN PRODUCTION)
ALICE_KEY = "0x59c6995e998f97a5a0044966f0945382d1b83f5f8b2e70e9a1baddb5f9d0c2d7"
BOB_KEY = "0x5de4111afa1a4b94908f83103eb1f1706367c2e68ca870fc3fb9a804cdab365a"


class FakeClock:
    """Settable stand-in for time.time()."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(1000)


@pytest.fixture
def chain(clock: FakeClock) -> Blockchain:
    return Blockchain(clock=clock)


@pytest.fixture
def alice():
    return Account.from_key(ALICE_KEY)


@pytest.fixture
def bob():
    return Account.from_key(BOB_KEY)

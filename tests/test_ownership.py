# tests/test_ownership.py
import pytest

from starledger.chain.blockchain import Blockchain
from starledger.core.errors import (
    ExpiredRequestError,
    InvalidSignatureError,
    MalformedMessageError,
    ValidationError,
)
from starledger.core.types import StarRecord
from starledger.crypto.signatures import sign_message, verify_message

STAR = {"dec": "68° 52' 56.9", "ra": "16h 29m 1.0s", "story": "Testing the story 4"}


def test_sign_and_verify_message(alice, bob):
    sig = sign_message("hello", alice.key)
    assert sig.startswith("0x")
    assert verify_message("hello", alice.address, sig) is True
    assert verify_message("hello", alice.address.lower(), sig) is True
    assert verify_message("hello", bob.address, sig) is False
    assert verify_message("hello!", alice.address, sig) is False


def test_request_message_format(chain, alice):
    assert chain.request_ownership_message(alice.address) == f"{alice.address}:1000:starRegistry"
    assert chain.height == 0


def test_submit_within_window(chain, clock, alice):
    message = chain.request_ownership_message(alice.address)
    signature = sign_message(message, alice.key)

    clock.now = 1299
    block = chain.submit_entry(alice.address, message, signature, STAR)

    assert block.height == 1
    assert block.time == 1299
    assert block.decode_payload() == StarRecord(star=STAR, owner=alice.address)
    assert chain.find_by_digest(block.hash) == block
    chain.validate_chain()


@pytest.mark.parametrize("now", [1300, 1301, 5000])
def test_submit_after_window_expires(chain, clock, alice, now):
    message = chain.request_ownership_message(alice.address)
    signature = sign_message(message, alice.key)

    clock.now = now
    with pytest.raises(ExpiredRequestError):
        chain.submit_entry(alice.address, message, signature, STAR)
    assert chain.height == 0


def test_expired_request_skips_signature_check(clock, alice):
    calls = []

    def recording_verifier(message, address, signature):
        calls.append(message)
        return True

    chain = Blockchain(clock=clock, verify_signature=recording_verifier)
    message = chain.request_ownership_message(alice.address)
    clock.now = 1301
    with pytest.raises(ExpiredRequestError):
        chain.submit_entry(alice.address, message, "0x00", STAR)
    assert calls == []


def test_submit_with_wrong_signer(chain, alice, bob):
    message = chain.request_ownership_message(alice.address)
    signature = sign_message(message, bob.key)

    with pytest.raises(InvalidSignatureError):
        chain.submit_entry(alice.address, message, signature, STAR)
    assert chain.height == 0


def test_submit_with_unparseable_signature(chain, alice):
    message = chain.request_ownership_message(alice.address)
    with pytest.raises(InvalidSignatureError):
        chain.submit_entry(alice.address, message, "0x1234", STAR)
    assert chain.height == 0


def test_signature_over_other_message_rejected(chain, clock, alice):
    old_message = chain.request_ownership_message(alice.address)
    clock.advance(10)
    message = chain.request_ownership_message(alice.address)
    signature = sign_message(old_message, alice.key)

    with pytest.raises(InvalidSignatureError):
        chain.submit_entry(alice.address, message, signature, STAR)


@pytest.mark.parametrize("message", [
    "no-colons-here",
    "0xabc:1000",
    "0xabc:later:starRegistry",
    "0xabc:1000:otherRegistry",
    "0xabc:1000:starRegistry:extra",
])
def test_malformed_message(chain, message):
    with pytest.raises(MalformedMessageError):
        chain.submit_entry("0xabc", message, "0x00", STAR)
    assert chain.height == 0


def test_message_for_other_address_rejected(chain, alice, bob):
    message = chain.request_ownership_message(bob.address)
    signature = sign_message(message, alice.key)
    with pytest.raises(MalformedMessageError):
        chain.submit_entry(alice.address, message, signature, STAR)


def test_stars_listed_per_owner(chain, clock, alice, bob):
    for account, story in [(alice, "a1"), (bob, "b1"), (alice, "a2")]:
        message = chain.request_ownership_message(account.address)
        clock.advance(1)
        chain.submit_entry(account.address, message, sign_message(message, account.key), {"story": story})

    assert [s.star["story"] for s in chain.list_stars_by_owner(alice.address)] == ["a1", "a2"]
    assert [s.star["story"] for s in chain.list_stars_by_owner(bob.address)] == ["b1"]
    assert chain.height == 3


def test_submit_propagates_validation_error(chain, alice):
    from dataclasses import replace

    chain._blocks[0] = replace(chain._blocks[0], time=1)
    message = chain.request_ownership_message(alice.address)

    with pytest.raises(ValidationError):
        chain.submit_entry(alice.address, message, sign_message(message, alice.key), STAR)
    assert chain.height == 0


def test_future_timestamp_rejected(chain, alice):
    message = f"{alice.address}:99999999999:starRegistry"
    signature = sign_message(message, alice.key)

    with pytest.raises(MalformedMessageError):
        chain.submit_entry(alice.address, message, signature, STAR)
    assert chain.height == 0


def test_malformed_timestamp_chains_cause(chain):
    with pytest.raises(MalformedMessageError) as exc:
        chain.submit_entry("0xabc", "0xabc:later:starRegistry", "0x00", STAR)
    assert isinstance(exc.value.__cause__, ValueError)

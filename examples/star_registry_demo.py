# examples/star_registry_demo.py
# Run with: python examples/star_registry_demo.py
#
# Registers a couple of stars with freshly generated wallet keys, then shows
# what a tampered block looks like to the chain validator.

import logging
from dataclasses import replace

from eth_account import Account

from starledger import Blockchain, ValidationError
from starledger.core.encoding import hex_encode_json
from starledger.crypto.signatures import sign_message


def register(chain: Blockchain, account, star: dict):
    message = chain.request_ownership_message(account.address)
    signature = sign_message(message, account.key)
    return chain.submit_entry(account.address, message, signature, star)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    alice = Account.create()
    bob = Account.create()
    chain = Blockchain()

    register(chain, alice, {"ra": "16h 29m 1.0s", "dec": "-26° 29' 24.9", "story": "Antares"})
    register(chain, bob, {"ra": "5h 55m 10.3s", "dec": "7° 24' 25.4", "story": "Betelgeuse"})
    register(chain, alice, {"ra": "6h 45m 8.9s", "dec": "-16° 42' 58.0", "story": "Sirius"})

    print(f"Chain height: {chain.height}")
    for record in chain.list_stars_by_owner(alice.address):
        print(f"  {record.owner[:10]}... owns {record.star['story']}")

    print(chain.verify_chain())

    # Rewrite history behind the ledger's back
    victim = chain._blocks[2]
    chain._blocks[2] = replace(victim, body=hex_encode_json({"star": {"story": "Stolen"}, "owner": alice.address}))

    try:
        chain.validate_chain()
    except ValidationError as e:
        print("Tampering detected:")
        for err in e.errors:
            print(f"  {err}")

"""
2-of-3 wallet custody built on the threshold scheme.

Three parties each run their own polynomial:
    1. user
    2. backup key provider
    3. wallet service
The wallet address is the sum of the three public shares and any two parties
can spend. In practice the shares travel encrypted between the parties and
are stored by them; here everything happens in one process.

Run it with:
    python -m toybls.wallet --message Hello
"""

import argparse
import logging
import secrets
import sys
from collections import namedtuple

from .bls_op import verify
from .bls_threshold import (generate_polynomial, merge_public_shares, merge_secret_shares,
                            merge_signatures, partial_signatures, public_share, secret_shares)

logger = logging.getLogger(__name__)

PARTY_NAMES = ("user", "backup key provider", "wallet service")

Party = namedtuple("Party", "name index public_share shares")
WalletKeys = namedtuple("WalletKeys", "public_key signing_keys party_names threshold")


def create_party(name, index, m, n, rand_bytes=secrets.token_bytes) -> Party:
    poly = generate_polynomial(m, rand_bytes)
    # the polynomial goes out of scope here, only its shares are kept.
    return Party(name=name, index=index, public_share=public_share(poly),
                 shares=secret_shares(poly, n))


def create_wallet(m=2, n=3, rand_bytes=secrets.token_bytes) -> WalletKeys:
    """
    Every party generates its polynomial and hands out f(j) to party j.
    Party j merges what it received into its signing key and everybody
    can compute the common public key from the public shares.
    """
    names = [PARTY_NAMES[i] if i < len(PARTY_NAMES) else f"party {i + 1}" for i in range(n)]
    parties = [create_party(name, i + 1, m, n, rand_bytes) for i, name in enumerate(names)]
    public_key = merge_public_shares([p.public_share for p in parties])
    signing_keys = {}
    for j in range(1, n + 1):
        signing_keys[j] = merge_secret_shares([p.shares[j - 1] for p in parties])
    logger.info("created %d-of-%d wallet %s", m, n, public_key.hex())
    return WalletKeys(public_key=public_key, signing_keys=signing_keys,
                      party_names=dict(enumerate(names, start=1)), threshold=m)


def cosign(wallet: WalletKeys, message, indices) -> bytes:
    """Joint signature of the parties at indices."""
    keys = {index: wallet.signing_keys[index] for index in indices}
    partials = partial_signatures(message, keys)
    return merge_signatures(partials, threshold=wallet.threshold)


def main(argv=None):
    parser = argparse.ArgumentParser(description="2-of-3 threshold BLS wallet walkthrough.")
    parser.add_argument('--message', type=str, default="Hello", help='Message to sign.')
    parser.add_argument('--verbose', action='store_true', help='Log what is going on.')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    wallet = create_wallet()
    print(f"wallet public key = [{wallet.public_key.hex()}]")
    ok = True
    for quorum in ([1, 3], [2, 3], [1, 2]):
        signature = cosign(wallet, args.message, quorum)
        valid = verify(signature, args.message, wallet.public_key)
        names = " + ".join(wallet.party_names[i] for i in quorum)
        print(f"{names}: signature = [{signature.hex()}] verified = {valid}")
        ok = ok and valid
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())

"""
Toy implementation of threshold BLS signatures with a dealerless key generation.
"""


"""
The threshold scheme is based on values m,n
m = minimum number of participants who can sign (degree of the polynomials is m - 1)
n = total number of participants.

Keygen:
1. Each party creates a random polynomial of degree m - 1 and sends f(i) to participant i,
    keeping f(0) to itself. It publishes f(0) * G1 as its public share.
2. Each participant adds the points it receives from all parties. In the end all of them
    have a point on a polynomial that no one knows about, whose value at 0 is the sum of
    every party's secret. The sum of the public shares is the public key for that secret.

Signing:
1. Each participant in a quorum signs with its summed share like a plain BLS key.
2. The partial signatures are weighted with the Lagrange coefficients for the quorum
    at x = 0 and added up. Scalar multiplication is linear so the result is the
    signature of the secret nobody holds.
"""

import logging
import secrets
from collections.abc import Mapping
from typing import Dict, List, Optional

from py_ecc.optimized_bls12_381 import G1

from .bls_op import (O1, O2, decode_pubkey, decode_signature, ec_add, ec_scalar_mul,
                     encode_pubkey, encode_signature, sign)
from .errors import InvalidArgument
from .field import Scalar, order

logger = logging.getLogger(__name__)


def generate_polynomial(m: int, rand_bytes=secrets.token_bytes) -> List[Scalar]:
    """
    Random polynomial with m coefficients, [a0, a1, ... a(m-1)].
    The leading coefficient is never zero so the degree is exactly m - 1.
    rand_bytes(length) must return cryptographically secure bytes outside of tests.
    """
    if isinstance(m, bool) or not isinstance(m, int) or m < 1:
        raise InvalidArgument(f"threshold must be a positive integer, got {m!r}")
    poly = [Scalar.random(rand_bytes) for _ in range(m)]
    while not poly[-1]:
        poly[-1] = Scalar.random(rand_bytes)
    logger.debug("generated polynomial of degree %d", m - 1)
    return poly


def polynomial_value(poly: List[Scalar], point) -> Scalar:
    # Horner: y = (((a(m-1)) * x + a(m-2)) * x + ...) * x + a0
    x = Scalar(point)
    y = Scalar(0)
    for coef in reversed(poly):
        y = y * x + coef
    return y


def secret_shares(poly: List[Scalar], n: int) -> List[Scalar]:
    """f(1) ... f(n), the share for participant i is at position i - 1."""
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        raise InvalidArgument(f"number of participants must be a positive integer, got {n!r}")
    if n < len(poly):
        logger.warning("%d shares of a degree %d polynomial can never be recombined",
                       n, len(poly) - 1)
    return [polynomial_value(poly, i) for i in range(1, n + 1)]


def public_share(poly: List[Scalar]) -> bytes:
    """a0 * G1, the party's contribution to the public key."""
    return encode_pubkey(ec_scalar_mul(G1, poly[0]))


def merge_secret_shares(shares: List[Scalar]) -> Scalar:
    """
    Add up the shares a participant received for its index, one from every
    party's polynomial. The result is the participant's signing key.
    """
    shares = list(shares)
    if not shares:
        raise InvalidArgument("no secret shares to merge")
    key = Scalar(0)
    for share in shares:
        key = key + share
    return key


def merge_public_shares(shares: List[bytes]) -> bytes:
    """Add up every party's public share into the common public key."""
    shares = list(shares)
    if not shares:
        raise InvalidArgument("no public shares to merge")
    point = O1
    for share in shares:
        point = ec_add(point, decode_pubkey(share))
    return encode_pubkey(point)


def _check_indices(indices):
    if not indices:
        raise InvalidArgument("no participant indices")
    for i in indices:
        if isinstance(i, bool) or not isinstance(i, int):
            raise InvalidArgument(f"participant index must be an integer, got {i!r}")
        if not 1 <= i < order:
            # indices are field elements, order is 0 again and 0 is where the secret lives.
            raise InvalidArgument(f"participant index must be in [1, order), got {i}")
    if len(set(indices)) != len(indices):
        raise InvalidArgument(f"duplicate participant index in {indices}")


def _check_threshold(indices, threshold):
    if threshold is not None and len(indices) < threshold:
        raise InvalidArgument(
            f"{len(indices)} participants {indices} can't reach threshold {threshold}")


def lagrange_coefficients(indices: List[int]) -> List[Scalar]:
    """
    Lagrange basis polynomials for the given x coordinates evaluated at x = 0:

        lambda_j = prod(i_l) / prod(i_l - i_j)   for l != j

    sum(lambda_j * f(i_j)) == f(0) for every polynomial of degree < len(indices).
    Fewer points than the sharing threshold give a wrong answer, not an error.
    The coefficients are returned in the order of indices.
    """
    indices = list(indices)
    _check_indices(indices)
    coefs = []
    for x in indices:
        num = Scalar(1)
        denom = Scalar(1)
        for i in indices:
            if i != x:
                num = num * i
                denom = denom * (i - x)
        coefs.append(num * denom.inv())
    return coefs


def _pairs(association):
    """index -> value association as a list of pairs, keeping the caller's order."""
    if isinstance(association, Mapping):
        return list(association.items())
    pairs = [(index, value) for index, value in association]
    _check_indices([index for index, _ in pairs])
    return pairs


def reconstruct_secret(shares, threshold: Optional[int] = None) -> Scalar:
    """
    f(0) from {index: f(index)}. Only meaningful with at least as many
    shares as the threshold the secret was shared with; pass threshold to
    have that checked.
    """
    pairs = _pairs(shares)
    indices = [index for index, _ in pairs]
    _check_threshold(indices, threshold)
    secret = Scalar(0)
    for coef, (_, share) in zip(lagrange_coefficients(indices), pairs):
        secret = secret + coef * share
    return secret


def reconstruct_public_key(public_keys, threshold: Optional[int] = None) -> bytes:
    """
    The common public key from {index: signing_key * G1} of a quorum.
    Same interpolation as reconstruct_secret, done in G1.
    """
    pairs = _pairs(public_keys)
    indices = [index for index, _ in pairs]
    _check_threshold(indices, threshold)
    point = O1
    for coef, (_, key) in zip(lagrange_coefficients(indices), pairs):
        point = ec_add(point, ec_scalar_mul(decode_pubkey(key), coef))
    return encode_pubkey(point)


def merge_signatures(partial_signatures, threshold: Optional[int] = None) -> bytes:
    """
    Combine {index: partial signature} of a quorum into the joint signature.

    partial_signatures is a mapping or an iterable of (index, signature) pairs.
    Any quorum of at least m participants gives the same signature. With fewer
    the result is a valid point that does not verify, unless threshold is given
    in which case InvalidArgument is raised up front.
    """
    pairs = _pairs(partial_signatures)
    indices = [index for index, _ in pairs]
    _check_threshold(indices, threshold)
    coefs = lagrange_coefficients(indices)
    logger.debug("merging partial signatures of participants %s", indices)
    sig = O2
    for coef, (_, partial) in zip(coefs, pairs):
        sig = ec_add(sig, ec_scalar_mul(decode_signature(partial), coef))
    return encode_signature(sig)


def partial_signatures(message, signing_keys: Dict[int, Scalar]) -> Dict[int, bytes]:
    """Every listed participant signs message with its own key."""
    return {index: sign(message, key) for index, key in signing_keys.items()}

"""
BLS signatures over BLS12-381.
Utilities for:
    1. Public key generation (G1)
    2. Signing with a scalar key (signatures in G2)
    3. Point addition and scalar multiplication in G1 and G2
    4. Compressed encoding and decoding of points
    5. Pairing based verification

Curve arithmetic, hash to curve and the pairing come from py_ecc.
Signing follows the basic scheme of
https://datatracker.ietf.org/doc/html/draft-irtf-cfrg-bls-signature-05
with public keys in G1 and signatures in G2.
"""

from py_ecc.bls import G2Basic
from py_ecc.bls.g2_primitives import (
    G1_to_pubkey,
    G2_to_signature,
    pubkey_to_G1,
    signature_to_G2,
    subgroup_check,
)
from py_ecc.bls.hash_to_curve import hash_to_G2
from py_ecc.optimized_bls12_381 import G1, Z1, Z2, add, multiply

from .errors import CurveLibraryFailure
from .field import Scalar

PUBKEY_LENGTH = 48
SIGNATURE_LENGTH = 96
DST = G2Basic.DST

# Identity elements of both groups, as points.
O1 = Z1
O2 = Z2


def _message_bytes(message) -> bytes:
    if isinstance(message, str):
        return message.encode("utf-8")
    return bytes(message)


def decode_pubkey(data: bytes):
    """
    Compressed G1 point to a point of the prime order subgroup.
    Raises CurveLibraryFailure for garbage and for points outside the subgroup.
    """
    if len(data) != PUBKEY_LENGTH:
        raise CurveLibraryFailure(
            f"public key must be {PUBKEY_LENGTH} bytes, got {len(data)}")
    try:
        point = pubkey_to_G1(data)
    except ValueError as exc:
        raise CurveLibraryFailure(f"invalid public key {data.hex()}") from exc
    if not subgroup_check(point):
        raise CurveLibraryFailure(f"public key {data.hex()} is not in G1")
    return point


def decode_signature(data: bytes):
    """Same as decode_pubkey for G2."""
    if len(data) != SIGNATURE_LENGTH:
        raise CurveLibraryFailure(
            f"signature must be {SIGNATURE_LENGTH} bytes, got {len(data)}")
    try:
        point = signature_to_G2(data)
    except ValueError as exc:
        raise CurveLibraryFailure(f"invalid signature {data.hex()}") from exc
    if not subgroup_check(point):
        raise CurveLibraryFailure(f"signature {data.hex()} is not in G2")
    return point


def encode_pubkey(point) -> bytes:
    return G1_to_pubkey(point)


def encode_signature(point) -> bytes:
    return G2_to_signature(point)


def ec_add(P, Q):
    """Sum of two points of the same group (G1 or G2)."""
    return add(P, Q)


def ec_scalar_mul(P, scalar):
    # py_ecc wants a plain int, reduced
    return multiply(P, int(Scalar(scalar)))


def pub_key_from_priv(private) -> bytes:
    """Compressed G1 public key for any scalar, a full key or a share of one."""
    return encode_pubkey(ec_scalar_mul(G1, private))


def hash_to_point(message):
    """Hash a message to G2 under the basic scheme DST."""
    return hash_to_G2(_message_bytes(message), DST, G2Basic.xmd_hash_function)


def sign(message, key) -> bytes:
    """
    BLS sign: key * H(message).
    The key can be a full signing key or a participant's share of one,
    the operation is the same.
    """
    return encode_signature(ec_scalar_mul(hash_to_point(message), key))


def verify(signature: bytes, message, public_key: bytes) -> bool:
    """
    Check e(signature, G1) == e(H(message), public_key).
    Malformed encodings and the identity public key verify as False.
    """
    return G2Basic.Verify(public_key, _message_bytes(message), signature)

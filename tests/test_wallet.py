import pytest

from toybls.bls_op import pub_key_from_priv, verify
from toybls.bls_threshold import reconstruct_public_key
from toybls.errors import InvalidArgument
from toybls.wallet import cosign, create_wallet, main


def test_create_wallet(counter_bytes):
    wallet = create_wallet(rand_bytes=counter_bytes)
    assert len(wallet.public_key) == 48
    assert sorted(wallet.signing_keys) == [1, 2, 3]
    assert wallet.party_names[3] == "wallet service"
    public_keys = {i: pub_key_from_priv(k) for i, k in wallet.signing_keys.items()}
    assert reconstruct_public_key({2: public_keys[2], 3: public_keys[3]}) == wallet.public_key


def test_cosign():
    wallet = create_wallet()
    user_wallet = cosign(wallet, "Hello", [1, 3])
    assert verify(user_wallet, "Hello", wallet.public_key)
    # any other pair makes the same signature
    assert cosign(wallet, "Hello", [2, 3]) == user_wallet
    assert cosign(wallet, "Hello", [1, 2]) == user_wallet
    with pytest.raises(InvalidArgument):
        cosign(wallet, "Hello", [1])


def test_main(capsys):
    assert main(["--message", "Hello"]) == 0
    out = capsys.readouterr().out
    assert "wallet public key" in out
    assert out.count("verified = True") == 3

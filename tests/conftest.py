import hashlib

import pytest


class CounterBytes:
    """Deterministic stand-in for secrets.token_bytes: sha256(seed || counter) stream."""

    def __init__(self, seed=b"toybls"):
        self.seed = seed
        self.counter = 0

    def __call__(self, length):
        out = bytearray()
        while len(out) < length:
            out.extend(hashlib.sha256(self.seed + self.counter.to_bytes(8, "big")).digest())
            self.counter += 1
        return bytes(out[:length])


@pytest.fixture
def counter_bytes():
    return CounterBytes()

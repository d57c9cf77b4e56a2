"""Stand-ins for collaborators that are outside the simulator's scope.

Each function names an operation a complete RSA toolkit would offer and raises `NotImplementedError`, pointing at
what the simulator does instead. Existence of a function here makes no promise it will ever be implemented.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsasim.rsa import RSAPrivKey
from rsasim.rsa import RSAPubKey


def generate_primes(size: int, pub: int = 65537) -> tuple[int, int]:
    """Generates a pair of large probable primes suited to `pub`, for a modulus of `size` bits."""
    raise NotImplementedError("Prime generation is not implemented, supply primes through a PrimeSource.")


def oaep_encode(message: bytes, key: RSAPubKey, label: bytes = b"") -> int:
    """RSAES-OAEP encoding of `message` into a block below `key.n`."""
    raise NotImplementedError("OAEP padding is not implemented.")


def oaep_decode(block: int, key: RSAPrivKey, label: bytes = b"") -> bytes:
    """Inverse of `oaep_encode`."""
    raise NotImplementedError("OAEP padding is not implemented.")


def crt_decrypt(ciphertext: int, key: RSAPrivKey, p: int, q: int) -> int:
    """Decryption accelerated with the Chinese Remainder Theorem."""
    raise NotImplementedError("CRT decryption is not implemented, use rsa.decrypt.")

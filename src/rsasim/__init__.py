"""Textbook RSA arithmetic in an Academic Sense.

Provides the modular arithmetic engine (Extended Euclid, modular inverse, square-and-multiply), key derivation from
caller-supplied primes, and blockwise encryption/decryption of integers and texts. No padding, no CRT, no prime
generation: this is a teaching tool, not a cryptographic library.

Typical usage example:

    pub, priv = derive_keys(61, 53, 65537)
    c = encrypt(65, pub)
    m = decrypt(c, priv)
    text = decode_text([decrypt(encrypt(b, pub), priv) for b in encode_text("RUST")])
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsasim.codec import ByteCodec
from rsasim.codec import decode_text
from rsasim.codec import encode_text
from rsasim.codec import OctetCodec
from rsasim.keygen import check_prime
from rsasim.keygen import DEFAULT_PUBLIC_EXPONENT
from rsasim.keygen import derive_from_source
from rsasim.keygen import derive_keys
from rsasim.keygen import PrimeSource
from rsasim.keygen import StaticPrimeSource
from rsasim.modmath import egcd
from rsasim.modmath import KeyDerivationError
from rsasim.modmath import mod_exp
from rsasim.modmath import mod_inverse
from rsasim.rsa import decrypt
from rsasim.rsa import decrypt_blocks
from rsasim.rsa import decrypt_text
from rsasim.rsa import encrypt
from rsasim.rsa import encrypt_blocks
from rsasim.rsa import encrypt_text
from rsasim.rsa import MessageTooLargeError
from rsasim.rsa import RSAPrivKey
from rsasim.rsa import RSAPubKey

__version__ = "0.1.0"
__all__ = [
    "ByteCodec",
    "OctetCodec",
    "encode_text",
    "decode_text",
    "check_prime",
    "DEFAULT_PUBLIC_EXPONENT",
    "derive_keys",
    "derive_from_source",
    "PrimeSource",
    "StaticPrimeSource",
    "egcd",
    "mod_inverse",
    "mod_exp",
    "KeyDerivationError",
    "MessageTooLargeError",
    "RSAPubKey",
    "RSAPrivKey",
    "encrypt",
    "decrypt",
    "encrypt_blocks",
    "decrypt_blocks",
    "encrypt_text",
    "decrypt_text",
]

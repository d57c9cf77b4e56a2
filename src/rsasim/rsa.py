"""Provides the RSA keys and the encryption/decryption primitives built on the modular arithmetic engine.

Everything here is "textbook" RSA: no padding, no CRT, no blinding. Single integers go through `encrypt`/`decrypt`,
sequences of blocks through `encrypt_blocks`/`decrypt_blocks`, and whole texts through `encrypt_text`/`decrypt_text`,
which wrap the ciphertext blocks into a small DER container.

Typical usage example:

    pub, priv = derive_keys(61, 53)
    c = encrypt(65, pub)
    m = decrypt(c, priv)
    payload = encrypt_text("RUST", pub)
    text = decrypt_text(payload, priv)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
import binascii
from collections.abc import Iterable
import dataclasses
import warnings

from pyasn1 import error
from pyasn1.codec.der import decoder
from pyasn1.codec.der import encoder
from pyasn1.codec.native import encoder as localize
from pyasn1.type import namedtype
from pyasn1.type import univ
from pyasn1_modules import rfc8017

from rsasim.codec import ByteCodec
from rsasim.codec import codec_for
from rsasim.codec import OctetCodec
from rsasim.modmath import mod_exp


class MessageTooLargeError(ValueError):
    """Raised when a plaintext block falls outside [0, mod).

    Attributes:
        message: The offending block value.
        mod: The modulus it was checked against.
        index: Position of the block within its batch, None for a lone block.
    """

    def __init__(self, message: int, mod: int, index: int | None = None) -> None:
        self.message = message
        self.mod = mod
        self.index = index
        where = "" if index is None else f" (block {index})"
        super().__init__(f"Message representative must be in range [0, mod-1]{where}")


class CipherBlocks(univ.SequenceOf):
    componentType = univ.Integer()


class RSABlockMessage(univ.Sequence):
    """Blockwise ciphertext wrapper. Records which blocking scheme produced the blocks."""
    componentType = namedtype.NamedTypes(
        namedtype.NamedType("blockScheme", rfc8017.AlgorithmIdentifier()),
        namedtype.NamedType("encryptedBlocks", CipherBlocks()),
    )


@dataclasses.dataclass(frozen=True)
class RSAKey:
    """The parts shared by both halves of a key pair.

    Attributes:
        mod: The modulus of the keypair.
        expo: The exponent of the key, whether private or public.
    """
    mod: int
    expo: int

    @property
    def n(self) -> int:
        return self.mod

    def c_rsa(self, message: int) -> int:
        """Performs the core RSA operation, message**expo mod mod."""
        return mod_exp(message, self.expo, self.mod)


class RSAPubKey(RSAKey):
    """Public half of a key pair: modulus and public exponent."""

    @property
    def e(self) -> int:
        return self.expo

    def check(self, message: int, index: int | None = None) -> None:
        """Validates a plaintext block against the modulus.

        Raises:
            MessageTooLargeError: If the block is not in [0, mod).
        """
        if not 0 <= message < self.mod:
            raise MessageTooLargeError(message, self.mod, index)

    def encrypt(self, message: int) -> int:
        self.check(message)
        return self.c_rsa(message)


class RSAPrivKey(RSAKey):
    """Private half of a key pair: modulus and private exponent."""

    @property
    def d(self) -> int:
        return self.expo

    def decrypt(self, ciphertext: int) -> int:
        return self.c_rsa(ciphertext)


def encrypt(message: int, key: RSAPubKey) -> int:
    """Encrypts a single block.

    Args:
        message: Plaintext block, must be in [0, key.n).
        key: The public key.

    Returns:
        The ciphertext block.

    Raises:
        MessageTooLargeError: If the block is out of range. Raised before any exponentiation.
    """
    return key.encrypt(message)


def decrypt(ciphertext: int, key: RSAPrivKey) -> int:
    """Decrypts a single block with the private key."""
    return key.decrypt(ciphertext)


def encrypt_blocks(blocks: Iterable[int], key: RSAPubKey) -> list[int]:
    """Encrypts a sequence of blocks, preserving order.

    The whole batch is validated before the first exponentiation, so a failure never leaves partial output behind.

    Args:
        blocks: Plaintext blocks.
        key: The public key.

    Returns:
        Ciphertext blocks, in input order.

    Raises:
        MessageTooLargeError: For the first out-of-range block, with its index set.
    """
    blocks = list(blocks)
    for idx, block in enumerate(blocks):
        key.check(block, idx)
    return [key.c_rsa(block) for block in blocks]


def decrypt_blocks(blocks: Iterable[int], key: RSAPrivKey) -> list[int]:
    return [key.decrypt(block) for block in blocks]


def pack_blocks(blocks: Iterable[int], scheme: univ.ObjectIdentifier) -> bytes:
    """Wraps ciphertext blocks into a base64 encoded DER `RSABlockMessage`.

    Args:
        blocks: The ciphertext blocks.
        scheme: OID of the blocking scheme that produced the plaintext blocks.

    Returns:
        Base64 encoded container.
    """
    scheme_id = rfc8017.AlgorithmIdentifier()
    scheme_id["algorithm"] = scheme
    scheme_id["parameters"] = univ.Null("")
    payload = CipherBlocks()
    payload.clear()
    payload.extend(blocks)
    pld = RSABlockMessage()
    pld["blockScheme"] = scheme_id
    pld["encryptedBlocks"] = payload
    return base64.b64encode(encoder.encode(pld))


def unpack_blocks(message: bytes) -> tuple[univ.ObjectIdentifier, list[int]]:
    """Unwraps a container produced by `pack_blocks`.

    Args:
        message: Base64 encoded container.

    Returns:
        Tuple of (block scheme OID, ciphertext blocks).

    Raises:
        RuntimeError: If the container cannot be decoded.
    """
    try:
        pld, rest = decoder.decode(base64.b64decode(message), asn1Spec=RSABlockMessage())
    except (error.PyAsn1Error, binascii.Error) as exc:
        raise RuntimeError("Malformed ciphertext container.") from exc
    if rest:
        raise RuntimeError("Trailing data after ciphertext container.")
    return pld["blockScheme"]["algorithm"], localize.encode(pld["encryptedBlocks"])


def encrypt_text(text: str, key: RSAPubKey, codec: ByteCodec | OctetCodec | None = None) -> bytes:
    """Encrypts a text with the public key.

    Args:
        text: The message.
        key: The public key.
        codec: Blocking scheme. Defaults to an `OctetCodec` sized to the key.
            A `ByteCodec` is accepted for academic purposes. Warning! Unsecure!

    Returns:
        Base64 encoded ciphertext container.

    Raises:
        MessageTooLargeError: If any block does not fit under the modulus.
    """
    if codec is None:
        codec = OctetCodec(key.n)
    if isinstance(codec, ByteCodec):
        warnings.warn("Byte-wise blocking is unsecure! Please use with care.", RuntimeWarning)
    blocks = encrypt_blocks(codec.encode(text), key)
    return pack_blocks(blocks, codec.scheme)


def decrypt_text(message: bytes, key: RSAPrivKey, encoding: str = "utf-8") -> str:
    """Decrypts a container produced by `encrypt_text`.

    Args:
        message: Base64 encoded ciphertext container.
        key: The private key.
        encoding: Text encoding the message was encrypted with.

    Returns:
        The recovered text.

    Raises:
        RuntimeError: If the container is malformed or uses an unknown block scheme.
    """
    scheme, blocks = unpack_blocks(message)
    codec = codec_for(scheme, key.n, encoding)
    return codec.decode(decrypt_blocks(blocks, key))

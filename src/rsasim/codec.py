"""Marshalling between text and the integer blocks consumed by RSA.

Two blocking schemes are provided. `ByteCodec` is the academic one: every byte of the encoded text becomes its own
block, which only stays meaningful while each value fits a single byte. `OctetCodec` packs the octet stream into
blocks sized to the modulus, so every block is a valid residue regardless of its contents.

Typical usage example:

    blocks = encode_text("RUST")
    text = decode_text(blocks)
    codec = OctetCodec(pub.n)
    blocks = codec.encode("Hi there!")
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from collections.abc import Iterable

from pyasn1.type import univ
from pyasn1_modules import rfc8017

PLACEHOLDER = "\x00"

# Block schemes hang off the same private branch of rsaEncryption used for unpadded RSA.
id_RSAES_pure = rfc8017.rsaEncryption + (0,)
id_blocks_byte = id_RSAES_pure + (1,)
id_blocks_octet = id_RSAES_pure + (2,)


def bytes_to_integer(msg: bytes) -> int:
    """Converts a byte string to an integer, big-endian and unsigned.

    Args:
        msg: The bytes (AKA Octet String) to convert.

    Returns:
        The representative integer.
    """
    return int.from_bytes(msg, byteorder="big", signed=False)


def integer_to_bytes(msg: int, fixedlen: int) -> bytes:
    """Converts an integer to a fixed-length byte string.

    Args:
        msg: The integer to unmarshal.
        fixedlen: The target length of the byte string.

    Returns:
        The representative bytes. (AKA Octet String)

    Raises:
        ValueError: If `msg` is negative or does not fit in `fixedlen` bytes.
    """
    try:
        return msg.to_bytes(fixedlen, byteorder="big", signed=False)
    except OverflowError as exc:
        raise ValueError(f"Block value {msg} does not fit in {fixedlen} bytes") from exc


class ByteCodec:
    """One block per byte of the encoded text.

    Decoding is lenient: a value that is not a single byte is replaced by the placeholder rather than rejected, as
    a decryption under the wrong key produces such values routinely. The placeholder has to encode to exactly one
    byte, which rules out encodings such as UTF-16 that spend at least two bytes on every character.

    Attributes:
        encoding: Text encoding applied before splitting into bytes.
        placeholder: Single character substituted for values outside [0, 255].
        fill: The placeholder's byte value.
    """
    scheme = id_blocks_byte

    def __init__(self, encoding: str = "utf-8", placeholder: str = PLACEHOLDER) -> None:
        fill = placeholder.encode(encoding)
        if len(fill) != 1:
            raise ValueError(f"Placeholder {placeholder!r} must encode to exactly one byte in {encoding}")
        self.encoding = encoding
        self.placeholder = placeholder
        self.fill = fill[0]

    def encode(self, text: str) -> list[int]:
        return list(text.encode(self.encoding))

    def decode(self, values: Iterable[int]) -> str:
        raw = bytes(v if 0 <= v <= 0xff else self.fill for v in values)
        return raw.decode(self.encoding, errors="replace")


class OctetCodec:
    """Octet-stream blocking sized to the RSA modulus.

    The encoded text gets a 0x80 marker followed by as many zero bytes as needed to fill the last block (ISO/IEC
    7816-4 padding), then is cut into blocks of `bsize` bytes. With `bsize` one byte short of the modulus length,
    every block is strictly below the modulus.

    Attributes:
        mod: The modulus the blocks are sized for.
        bsize: Bytes per block.
        encoding: Text encoding applied before blocking.
    """
    scheme = id_blocks_octet

    def __init__(self, mod: int, encoding: str = "utf-8") -> None:
        self.mod = mod
        self.bsize = (mod.bit_length() - 1) // 8
        if self.bsize < 1:
            raise ValueError("Modulus too small for octet blocking, must be at least 256")
        self.encoding = encoding

    def encode(self, text: str) -> list[int]:
        data = text.encode(self.encoding) + b"\x80"
        data += b"\x00" * (-len(data) % self.bsize)
        return [bytes_to_integer(data[i:i + self.bsize]) for i in range(0, len(data), self.bsize)]

    def decode(self, values: Iterable[int]) -> str:
        data = b"".join(integer_to_bytes(v, self.bsize) for v in values)
        data = data.rstrip(b"\x00")
        if not data.endswith(b"\x80"):
            raise ValueError("Invalid block padding")
        return data[:-1].decode(self.encoding)


def codec_for(scheme: univ.ObjectIdentifier, mod: int, encoding: str = "utf-8") -> ByteCodec | OctetCodec:
    """Builds the codec registered for a block scheme identifier.

    Args:
        scheme: Block scheme OID, as found in a ciphertext container.
        mod: The modulus of the key the blocks belong to.
        encoding: Text encoding to use.

    Returns:
        The matching codec.

    Raises:
        RuntimeError: If the scheme is unknown.
    """
    if scheme == id_blocks_byte:
        return ByteCodec(encoding)
    if scheme == id_blocks_octet:
        return OctetCodec(mod, encoding)
    raise RuntimeError("Unknown block scheme.")


def encode_text(text: str, encoding: str = "utf-8") -> list[int]:
    """Splits text into one integer per byte, in order."""
    return ByteCodec(encoding).encode(text)


def decode_text(values: Iterable[int], encoding: str = "utf-8", placeholder: str = PLACEHOLDER) -> str:
    """Joins one-byte integers back into text, substituting `placeholder` for values that are not a byte.

    The bytes are decoded as a whole with `encoding`, not one character per value. Decoding is lossy: a byte
    sequence that is invalid in `encoding` comes back as U+FFFD, so `decode_text([233])` is "\\ufffd" under UTF-8
    and "é" only under latin-1. Text produced by `encode_text` with the same encoding always round-trips.
    """
    return ByteCodec(encoding, placeholder).decode(values)

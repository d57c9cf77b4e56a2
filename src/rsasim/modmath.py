"""Modular arithmetic engine backing every RSA operation in the package.

Provides the Extended Euclidean Algorithm, the modular inverse derived from it and a square-and-multiply modular
exponentiation. All functions are pure and work on arbitrarily large Python integers.

Typical usage example:

    g, x, y = egcd(17, 3120)
    d = mod_inverse(17, 3120)
    c = mod_exp(65, 17, 3233)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class KeyDerivationError(ValueError):
    """Raised when a public exponent has no inverse modulo the totient, or a derived pair is inconsistent."""


def egcd(a: int, b: int) -> tuple[int, int, int]:
    """Implements the Extended Euclidean Algorithm.

    Such that a*x + b*y = g = gcd(a, b). Runs iteratively, so the depth of the Euclidean descent never touches the
    interpreter's recursion limit.

    Args:
        a: The first integer, in RSA usage the exponent candidate.
        b: The second integer, in RSA usage the modulus candidate.

    Returns:
        Tuple of (gcd, x, y), the greatest common divisor followed by the Bezout coefficients.
    """
    r0, r1 = a, b
    x0, x1, y0, y1 = 1, 0, 0, 1
    while r1 != 0:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        x0, x1 = x1, x0 - q * x1
        y0, y1 = y1, y0 - q * y1
    return r0, x0, y0


def mod_inverse(e: int, phi: int) -> int:
    """Derives the positive modular inverse of `e` modulo `phi`.

    Args:
        e: The value to invert, usually the public exponent.
        phi: The modulus of the inversion, usually the totient of the RSA modulus.

    Returns:
        The unique d in [0, phi) with e*d = 1 (mod phi).

    Raises:
        ValueError: If `phi` is not positive.
        KeyDerivationError: If `e` and `phi` are not coprime.
    """
    if phi <= 0:
        raise ValueError("Totient must be positive")
    g, x, _ = egcd(e, phi)
    if g not in (1, -1):
        raise KeyDerivationError(f"Exponent {e} is not coprime to {phi} (gcd {abs(g)})")
    # A negative gcd flips the sign of the coefficient.
    return (x * g) % phi


def mod_exp(base: int, exponent: int, modulus: int) -> int:
    """Computes base**exponent mod modulus by right-to-left square-and-multiply.

    Walks the exponent one bit at a time from the least significant end: the running power of the base is squared
    each round and folded into the result whenever the current bit is set. Every intermediate product is reduced
    immediately, so operands never exceed modulus**2.

    Args:
        base: The base. Any integer, it is reduced into [0, modulus) up front.
        exponent: The exponent. Must be >= 0.
        modulus: The modulus. Must be > 0.

    Returns:
        base**exponent mod modulus, in [0, modulus).

    Raises:
        ValueError: If the exponent is negative or the modulus is not positive.
    """
    if exponent < 0:
        raise ValueError("Exponent must be >= 0")
    if modulus <= 0:
        raise ValueError("Modulus must be > 0")
    result = 1 % modulus
    power = base % modulus
    while exponent > 0:
        if exponent & 1:
            result = (result * power) % modulus
        power = (power * power) % modulus
        exponent >>= 1
    return result

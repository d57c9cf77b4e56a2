"""Key derivation from a pair of primes, and the prime-source seam feeding it.

Derivation follows the textbook recipe: n = p*q, phi = (p-1)(q-1), d = e^-1 mod phi. Primes are never produced
here; they come either straight from the caller or from a `PrimeSource`. The bundled `StaticPrimeSource` can vet
what it hands out with a trial-division plus Miller-Rabin primality check.

Typical usage example:

    pub, priv = derive_keys(61, 53)
    pub, priv = derive_from_source(StaticPrimeSource(61, 53), 17)
    check_prime(3233)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import secrets
import typing

from rsasim.modmath import KeyDerivationError
from rsasim.modmath import mod_exp
from rsasim.modmath import mod_inverse
from rsasim.rsa import RSAPrivKey
from rsasim.rsa import RSAPubKey

DEFAULT_PUBLIC_EXPONENT: int = 65537
_SMALL_PRIME_BOUND: int = 1000


def _sieve(n: int) -> list[int]:
    """Sieve of Eratosthenes over the odd numbers, returning every prime <= `n`."""
    if n < 2:
        return []
    odd = [True] * ((n - 1) // 2)
    for i in range(int(n**0.5) // 2):
        if odd[i]:
            r = 2 * i + 3
            for j in range((r * r - 3) // 2, len(odd), r):
                odd[j] = False
    return [2] + [2 * i + 3 for i, flag in enumerate(odd) if flag]


_SMALL_PRIMES: list[int] = _sieve(_SMALL_PRIME_BOUND)


def _trial_division(no: int) -> bool | None:
    """Screens `no` against the small primes.

    Returns:
        False if `no` is composite (or < 2), True if it is proven prime, None if undecided.
    """
    if no < 2:
        return False
    for prime in _SMALL_PRIMES:
        if prime * prime > no:
            return True
        if no % prime == 0:
            return no == prime
    return None


def _miller_rabin(w: int, iters: int) -> bool:
    """Miller-Rabin probabilistic primality test on an odd `w` > 3, with random bases."""
    tw = w - 1
    a = (tw & -tw).bit_length() - 1
    m = tw >> a
    for _ in range(iters):
        b = secrets.randbelow(w - 3) + 2
        z = mod_exp(b, m, w)
        if z in (1, tw):
            continue
        for _ in range(a - 1):
            z = mod_exp(z, 2, w)
            if z == tw:
                break
        else:
            return False
    return True


def check_prime(candidate: int, iters: int | None = None) -> bool:
    """Tests `candidate` for primality.

    Trial division by all primes below 1000 settles small candidates outright. Anything left goes through
    Miller-Rabin, with an iteration count scaled to the bit length (FIPS 186-5 Appendix C.1 defaults).

    Args:
        candidate: The number to test.
        iters: Miller-Rabin rounds. Derived from the size of `candidate` when omitted.

    Returns:
        True if `candidate` is (probably) prime, False otherwise.
    """
    screened = _trial_division(candidate)
    if screened is not None:
        return screened
    if iters is None:
        bits = candidate.bit_length()
        if bits <= 512:
            iters = 40
        elif bits <= 1024:
            iters = 56
        elif bits <= 2048:
            iters = 70
        else:
            iters = 74
    return _miller_rabin(candidate, iters)


class PrimeSource(typing.Protocol):
    """Anything able to supply the two primes of a key pair."""

    def primes(self) -> tuple[int, int]:
        ...


class StaticPrimeSource:
    """Hands out a fixed pair of primes.

    Attributes:
        p: First prime.
        q: Second prime.
    """

    def __init__(self, p: int, q: int, verify: bool = True) -> None:
        """Initialize the source.

        Args:
            p: First prime.
            q: Second prime.
            verify: Whether to check both numbers are distinct primes.

        Raises:
            ValueError: If verification is requested and fails.
        """
        if verify:
            if p == q:
                raise ValueError("Primes must be distinct.")
            for prime in (p, q):
                if not check_prime(prime):
                    raise ValueError(f"{prime} is not prime.")
        self.p = p
        self.q = q

    def primes(self) -> tuple[int, int]:
        return self.p, self.q


def derive_keys(p: int, q: int, e: int = DEFAULT_PUBLIC_EXPONENT) -> tuple[RSAPubKey, RSAPrivKey]:
    """Derives an RSA key pair from two primes and a public exponent.

    Neither primality nor size of `p` and `q` is checked here; that is the job of whoever picked them.

    Args:
        p: First prime.
        q: Second prime.
        e: The public exponent. Defaults to 65537.

    Returns:
        Tuple of (public key, private key).

    Raises:
        ValueError: If a prime is below 2 or the exponent below 1.
        KeyDerivationError: If `e` is not coprime to (p-1)(q-1).
    """
    if p < 2 or q < 2:
        raise ValueError("Primes must be >= 2.")
    if e < 1:
        raise ValueError("Public exponent must be >= 1.")
    n = p * q
    phi = (p - 1) * (q - 1)
    d = mod_inverse(e, phi)
    if (e * d) % phi != 1:
        raise KeyDerivationError(f"Derived exponent {d} is not an inverse of {e} modulo {phi}")
    return RSAPubKey(n, e), RSAPrivKey(n, d)


def derive_from_source(source: PrimeSource, e: int = DEFAULT_PUBLIC_EXPONENT) -> tuple[RSAPubKey, RSAPrivKey]:
    """Derives a key pair from the primes supplied by `source`. See `derive_keys`."""
    p, q = source.primes()
    return derive_keys(p, q, e)

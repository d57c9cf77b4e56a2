# pylint: disable=protected-access,missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from cryptography.hazmat.primitives.asymmetric import rsa
import pytest
import sympy

from rsasim import keygen
from rsasim import modmath
from rsasim import RSAPrivKey
from rsasim import RSAPubKey

base_primetest_cases = [
    # Edge Cases (neither)
    (-7, False),
    (0, False),
    (1, False),
    # Known Primes
    (2, True),
    (3, True),
    (53, True),
    (61, True),
    (101, True),
    (997, True),
    (3571, True),
    (9973, True),
    (994009 - 2 * 997, False),
    (1000003, True),
    # Composite
    (4, False),
    (6, False),
    (9, False),
    (3233, False),
    (997 * 997, False),
    # Fermat Pseudoprimes (numbers that fool naive tests)
    (341, False),  # 11 * 31
    (561, False),  # 3 * 11 * 17 (Carmichael number)
    (1105, False),  # 5 * 13 * 17 (Carmichael number)
    # Pseudo-prime (PsP)
    (2047, False),
    (52633, False),
    (3215031751, False),  # Strong pseudoprime to bases 2, 3, 5, 7
    # Beyond trial division
    (1009 * 1013, False),
    (2**61 - 1, True),
    (2**89 - 1, True),
    (2**127 - 1, True),
    ((2**61 - 1) * (2**89 - 1), False),
    (2**67 - 1, False),  # 193707721 * 761838257287
]

extreme_primetest_cases = [
    pytest.param(2**4423 - 1, True, marks=pytest.mark.extreme, id="LargeInt-M4423"),
]


def id_generator(param):
    if isinstance(param, int) and param > 1000000:
        return f"LargeInt-{param.bit_length()}bits"
    return str(param)


@pytest.fixture(scope="module")
def large_primes() -> tuple[int, int]:
    privs = rsa.generate_private_key(public_exponent=65537, key_size=2048).private_numbers()
    return privs.p, privs.q


@pytest.mark.parametrize("n", [0, 1, 2, 3, 20, 50, 1000, 5000])
def test_sieve_sane(n):
    assert keygen._sieve(n) == list(sympy.primerange(2, n + 1))


def test_small_primes_cached():
    assert keygen._SMALL_PRIMES == list(sympy.primerange(2, keygen._SMALL_PRIME_BOUND + 1))


@pytest.mark.parametrize("num,expected", [(0, False), (1, False), (2, True), (4, False), (997, True), (3233, False)])
def test_trial_division_decides(num, expected):
    assert keygen._trial_division(num) is expected


@pytest.mark.parametrize("num", [2**61 - 1, 1009 * 1013, 1009 * 1013 * 1019 * 1021])
def test_trial_division_undecided(num):
    assert keygen._trial_division(num) is None


@pytest.mark.parametrize("n,expected", [case for case in base_primetest_cases if case[0] > 1000], ids=id_generator)
def test_miller_rabin(n, expected):
    assert keygen._miller_rabin(n, 20) == expected


@pytest.mark.parametrize("n,expected", base_primetest_cases + extreme_primetest_cases, ids=id_generator)
def test_check_prime(n, expected):
    assert keygen.check_prime(n) == expected
    assert sympy.isprime(n) == expected


def test_check_prime_large(large_primes):
    p, q = large_primes
    assert keygen.check_prime(p)
    assert keygen.check_prime(q)
    assert not keygen.check_prime(p * q)
    assert not keygen.check_prime(p * 3)


def test_check_prime_uses_engine(mocker):
    spy = mocker.spy(keygen, "mod_exp")
    assert keygen.check_prime(2**61 - 1, iters=3)
    assert spy.call_count >= 3


def test_derive_keys_concrete():
    pub, priv = keygen.derive_keys(61, 53, 65537)
    assert isinstance(pub, RSAPubKey)
    assert isinstance(priv, RSAPrivKey)
    assert pub.n == priv.n == 3233
    assert pub.e == 65537
    assert priv.d == 2753
    assert (pub.e * priv.d) % 3120 == 1


def test_derive_keys_default_exponent():
    pub, _ = keygen.derive_keys(61, 53)
    assert pub.e == keygen.DEFAULT_PUBLIC_EXPONENT == 65537


@pytest.mark.parametrize("e", [2, 3, 4, 5, 6, 10, 3120])
def test_derive_keys_not_coprime(e):
    with pytest.raises(modmath.KeyDerivationError):
        keygen.derive_keys(61, 53, e)


def test_derive_keys_degenerate_totient():
    with pytest.raises(modmath.KeyDerivationError):
        keygen.derive_keys(2, 2, 3)


@pytest.mark.parametrize("p,q,e", [(1, 53, 17), (61, 0, 17), (-61, 53, 17), (61, 53, 0), (61, 53, -17)])
def test_derive_keys_validates(p, q, e):
    with pytest.raises(ValueError):
        keygen.derive_keys(p, q, e)


def test_derive_keys_does_not_check_primality(mocker):
    spy = mocker.spy(keygen, "check_prime")
    pub, priv = keygen.derive_keys(15, 77, 5)
    assert pub.n == 15 * 77
    assert (5 * priv.d) % (14 * 76) == 1
    spy.assert_not_called()


def test_derive_keys_large(large_primes):
    p, q = large_primes
    pub, priv = keygen.derive_keys(p, q)
    assert pub.n == p * q
    assert priv.d == pow(65537, -1, (p - 1) * (q - 1))
    message = 17092025232642
    assert pow(pow(message, pub.e, pub.n), priv.d, priv.n) == message


def test_derive_keys_checks_inverse(mocker):
    mocker.patch("rsasim.keygen.mod_inverse", return_value=5)
    with pytest.raises(modmath.KeyDerivationError, match="not an inverse"):
        keygen.derive_keys(61, 53, 17)


def test_derive_from_source(mocker):
    source = mocker.Mock()
    source.primes.return_value = (61, 53)
    pub, priv = keygen.derive_from_source(source, 17)
    source.primes.assert_called_once_with()
    assert pub == RSAPubKey(3233, 17)
    assert priv == RSAPrivKey(3233, 2753)


def test_static_prime_source():
    source = keygen.StaticPrimeSource(61, 53)
    assert source.primes() == (61, 53)
    pub, _ = keygen.derive_from_source(source)
    assert pub.n == 3233


@pytest.mark.parametrize("p,q", [(61, 61), (61, 55), (3233, 53), (1, 53)])
def test_static_prime_source_validates(p, q):
    with pytest.raises(ValueError):
        keygen.StaticPrimeSource(p, q)


def test_static_prime_source_unverified():
    source = keygen.StaticPrimeSource(15, 77, verify=False)
    assert source.primes() == (15, 77)

# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pytest

from rsasim import placeholders
from rsasim import RSAPrivKey
from rsasim import RSAPubKey

pub = RSAPubKey(3233, 17)
priv = RSAPrivKey(3233, 2753)


@pytest.mark.parametrize("action,args", [
    (placeholders.generate_primes, (2048,)),
    (placeholders.oaep_encode, (b"RUST", pub)),
    (placeholders.oaep_decode, (2790, priv)),
    (placeholders.crt_decrypt, (2790, priv, 61, 53)),
])
def test_unimplemented(action, args):
    with pytest.raises(NotImplementedError):
        action(*args)


def test_no_euclid_alias():
    assert not hasattr(placeholders, "eea")

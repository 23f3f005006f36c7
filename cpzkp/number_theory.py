#!/usr/bin/env python3

# Copyright (C) 2025 The cpzkp developers
#
# This file is part of cpzkp. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cpzkp including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Number theory and modular arithmetic functions.

All moduli used by cpzkp are primes,
so inversion relies on Fermat's little theorem.
"""

from cpzkp.exceptions import InvalidArguments
from cpzkp.utils import short_repr


def mod_inv(a: int, p: int) -> int:
    """Return the inverse of a (mod p), p being a prime.

    Fermat's little theorem: a^(p-1) = 1 (mod p),
    hence a^(p-2) is the inverse of a.
    """

    a %= p
    if a == 0:
        raise InvalidArguments(f"No inverse for 0 mod {short_repr(p)}")
    return pow(a, p - 2, p)


def is_probable_prime(p: int) -> bool:
    """Return True if p passes a base-2 Fermat test.

    Fermat test will do as _probabilistic_ primality test
    for the fixed, public group parameters it is used for.
    """

    if p == 2:
        return True
    return p > 2 and p % 2 == 1 and pow(2, p - 1, p) == 1

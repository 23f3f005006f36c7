#!/usr/bin/env python3

# Copyright (C) 2025 The cpzkp developers
#
# This file is part of cpzkp. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cpzkp including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Secure randomness.

Secrets, nonces, and challenges are drawn from a RandomSource,
a thin wrapper around a random-bytes provider.
The provider is an injected capability:
the default one is the operating system CSPRNG (secrets.token_bytes),
while DeterministicSource makes protocol runs reproducible in tests.

Integers below a bound are obtained by rejection sampling,
so they are uniformly distributed.
"""

import secrets
import string
from hashlib import sha256
from typing import Optional

from cpzkp.alias import RandomBytes
from cpzkp.exceptions import InvalidArguments, RandomGenerationError
from cpzkp.utils import int_from_bytes

ALPHANUMERIC = string.ascii_letters + string.digits

# size in bytes of random_number() output
NUMBER_SIZE = 32


class RandomSource:
    "Cryptographically secure random values from a random-bytes provider."

    def __init__(self, provider: Optional[RandomBytes] = None) -> None:
        self._provider = secrets.token_bytes if provider is None else provider

    def random_bytes(self, size: int) -> bytes:
        "Return size random bytes."

        if size < 0:
            raise InvalidArguments(f"negative size: {size}")
        try:
            data = self._provider(size)
        except (OSError, NotImplementedError) as e:
            raise RandomGenerationError(f"random source unavailable: {e}") from e
        if len(data) != size:
            err_msg = f"random source returned {len(data)} bytes instead of {size}"
            raise RandomGenerationError(err_msg)
        return data

    def random_number(self) -> int:
        "Return a random 256-bit integer."
        return int_from_bytes(self.random_bytes(NUMBER_SIZE))

    def random_below(self, n: int) -> int:
        "Return a uniformly distributed integer in [0, n)."

        if n < 1:
            raise InvalidArguments(f"non positive upper bound: {n}")
        nbits = n.bit_length()
        size = (nbits + 7) // 8
        excess_bits = size * 8 - nbits
        while True:
            candidate = int_from_bytes(self.random_bytes(size)) >> excess_bits
            if candidate < n:
                return candidate

    def random_range(self, low: int, high: int) -> int:
        "Return a uniformly distributed integer in [low, high)."

        if high <= low:
            raise InvalidArguments(f"empty range: [{low}, {high})")
        return low + self.random_below(high - low)

    def random_string(self, size: int) -> str:
        """Return a random alphanumeric string.

        Useful for user or session identifiers.
        """

        n = len(ALPHANUMERIC)
        return "".join(ALPHANUMERIC[self.random_below(n)] for _ in range(size))


class DeterministicSource(RandomSource):
    """Reproducible pseudo-random source.

    The byte stream is sha256(seed || counter) for counter = 0, 1, ...
    It is meant for tests and test vectors only:
    never use it to generate real secrets.
    """

    def __init__(self, seed: bytes) -> None:
        super().__init__(self._next_bytes)
        self._seed = seed
        self._counter = 0
        self._buffer = b""

    def _next_bytes(self, size: int) -> bytes:
        while len(self._buffer) < size:
            counter = self._counter.to_bytes(8, byteorder="big", signed=False)
            self._buffer += sha256(self._seed + counter).digest()
            self._counter += 1
        data, self._buffer = self._buffer[:size], self._buffer[size:]
        return data


DEFAULT_SOURCE = RandomSource()


def random_bytes(size: int) -> bytes:
    "Return size bytes from the operating system CSPRNG."
    return DEFAULT_SOURCE.random_bytes(size)


def random_number() -> int:
    "Return a random 256-bit integer from the operating system CSPRNG."
    return DEFAULT_SOURCE.random_number()


def random_below(n: int) -> int:
    "Return a uniformly distributed integer in [0, n)."
    return DEFAULT_SOURCE.random_below(n)


def random_string(size: int) -> str:
    "Return a random alphanumeric string of the given size."
    return DEFAULT_SOURCE.random_string(size)

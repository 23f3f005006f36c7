#!/usr/bin/env python3

# Copyright (C) 2025 The cpzkp developers
#
# This file is part of cpzkp. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cpzkp including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Aliases

mypy aliases, documenting also coding input conventions.
"""

from typing import Callable, Tuple, Union

# Octets are a sequence of eight-bit bytes or a hex-string (not text string)
#
# hex-strings are strings that can be converted to bytes using bytes.fromhex,
# e.g.:
# "fee8211b"
# "0000fee8 050115f2"
#
# use cpzkp.utils.bytes_from_octets to convert Octets to bytes
#
# Octets are used for wire-encoded group elements
Octets = Union[bytes, str]

# hex-string or bytes representation of an int
Integer = Union[bytes, str, int]

# Elliptic curve point in affine coordinates.
# Warning: to make Point a NamedTuple would slow down the code
Point = Tuple[int, int]

# The infinity point of a short Weierstrass curve
# is represented in affine coordinates as INF = (5, 0)
# (no affine point has y=0 coordinate in a group of odd order).
# Only this exact pair is the infinity point:
# a curve having (5, 0) as finite point is rejected.
# 5 is preferred because it is not a valid x-coordinate in secp256k1
# (and even 5 + secp256k1.n is not a valid x-coordinate)
INF = 5, 0

# The neutral element of a twisted Edwards curve is an ordinary
# affine point
INF_EDWARDS = 0, 1

# Random bytes provider: given a size, return that many random bytes.
# secrets.token_bytes is the default one.
RandomBytes = Callable[[int], bytes]

#!/usr/bin/env python3

# Copyright (C) 2025 The cpzkp developers
#
# This file is part of cpzkp. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cpzkp including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Twisted Edwards curves.

The curve is the set of points (x, y) in Fp that are solutions to
a*x^2 + y^2 = 1 + d*x^2*y^2.

When a is a square and d is not (as for edwards25519)
the addition law below is complete:
it has no exceptional cases, doubling and the neutral element included.
The neutral element (0, 1) is an ordinary affine point.

Scalar multiplication is cpzkp.curve_group.mult_aff.
"""

from cpzkp.alias import INF_EDWARDS, Integer, Point
from cpzkp.curve_group import AffineGroup
from cpzkp.exceptions import EllipticCurveError, InvalidArguments
from cpzkp.number_theory import is_probable_prime, mod_inv
from cpzkp.utils import int_from_integer, short_repr


class EdwardsCurve(AffineGroup):
    "Finite group of the points of a twisted Edwards curve over Fp."

    identity: Point = INF_EDWARDS

    def __init__(self, p: Integer, a: Integer, d: Integer) -> None:

        p = int_from_integer(p)
        a = int_from_integer(a) % p
        d = int_from_integer(d) % p

        if not is_probable_prime(p):
            raise InvalidArguments(f"p is not prime: {short_repr(p)}")
        if a == 0 or d == 0 or a == d:
            err_msg = "degenerate curve: a, d must be distinct and nonzero"
            raise InvalidArguments(err_msg)
        self.p = p
        self._a = a
        self._d = d

    def __repr__(self) -> str:
        params = ", ".join(short_repr(i) for i in (self.p, self._a, self._d))
        return f"EdwardsCurve({params})"

    def add_aff(self, Q: Point, R: Point) -> Point:
        # points are assumed to be on curve

        x1x2 = Q[0] * R[0] % self.p
        y1y2 = Q[1] * R[1] % self.p
        dxy = self._d * x1x2 * y1y2 % self.p
        x_den = (1 + dxy) % self.p
        y_den = (1 - dxy) % self.p
        # complete law: denominators vanish only for off-curve inputs
        if x_den == 0 or y_den == 0:
            raise EllipticCurveError("exceptional Edwards addition")
        x = (Q[0] * R[1] + Q[1] * R[0]) * mod_inv(x_den, self.p)
        y = (y1y2 - self._a * x1x2) * mod_inv(y_den, self.p)
        return x % self.p, y % self.p

    def double_aff(self, Q: Point) -> Point:
        return self.add_aff(Q, Q)

    def is_on_curve(self, Q: Point) -> bool:
        "Return True if the point is on the curve."
        if len(Q) != 2:
            raise InvalidArguments("point must be a tuple[int, int]")
        x, y = Q
        if not (0 <= x < self.p and 0 <= y < self.p):
            return False
        xx = x * x % self.p
        yy = y * y % self.p
        return (self._a * xx + yy) % self.p == (1 + self._d * xx * yy) % self.p

#!/usr/bin/env python3

# Copyright (C) 2025 The cpzkp developers
#
# This file is part of cpzkp. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cpzkp including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic CurveGroup class and functions.

Short Weierstrass curves in affine coordinates.
For the twisted Edwards curve used by the Curve25519 group
see the cpzkp.edwards module.
"""

from cpzkp.alias import INF, Integer, Point
from cpzkp.exceptions import InvalidArguments
from cpzkp.number_theory import is_probable_prime, mod_inv
from cpzkp.utils import int_from_integer, short_repr


class AffineGroup:
    """Group of curve points in affine coordinates.

    Subclasses provide the group law (add_aff, double_aff),
    the neutral element, and the curve equation.
    """

    identity: Point = INF
    p: int

    def add_aff(self, Q: Point, R: Point) -> Point:
        raise NotImplementedError

    def double_aff(self, Q: Point) -> Point:
        raise NotImplementedError

    def is_on_curve(self, Q: Point) -> bool:
        raise NotImplementedError

    def is_identity(self, Q: Point) -> bool:
        return Q == self.identity

    def require_on_curve(self, Q: Point) -> None:
        """Require the input curve Point to be on the curve.

        An Error is raised if not.
        """
        if not self.is_on_curve(Q):
            raise InvalidArguments("point not on curve")


class CurveGroup(AffineGroup):
    """Finite group of the points of an elliptic curve over Fp.

    The elliptic curve is the set of points (x, y)
    that are solutions to a Weierstrass equation y^2 = x^3 + a*x + b,
    with x, y, a, and b in Fp (p being a prime),
    together with a point at infinity INF.
    The constants a, b must satisfy the relationship
    4 a^3 + 27 b^2 ≠ 0.

    The group is defined by the point addition group law.
    """

    def __init__(self, p: Integer, a: Integer, b: Integer) -> None:
        # Parameters are checked according to SEC 1 v.2 3.1.1.2.1

        p = int_from_integer(p)
        a = int_from_integer(a)
        b = int_from_integer(b)

        # 1) check that p is a prime
        if not is_probable_prime(p):
            raise InvalidArguments(f"p is not prime: {short_repr(p)}")

        self.p = p

        # 2. check that a and b are integers in the interval [0, p−1]
        if not 0 <= a < p:
            raise InvalidArguments(f"a not in 0..p-1: {short_repr(a)}")
        if not 0 <= b < p:
            raise InvalidArguments(f"b not in 0..p-1: {short_repr(b)}")

        # 3. Check that 4*a^3 + 27*b^2 ≠ 0 (mod p)
        d = 4 * a * a * a + 27 * b * b
        if d % p == 0:
            raise InvalidArguments("zero discriminant")
        self._a = a
        self._b = b

        # 4. INF must not be confused with a finite curve point
        if INF[0] < p and self._y2(INF[0]) == 0:
            raise InvalidArguments(f"INF {INF} is a curve point")

    def __repr__(self) -> str:
        params = ", ".join(short_repr(i) for i in (self.p, self._a, self._b))
        return f"CurveGroup({params})"

    def add_aff(self, Q: Point, R: Point) -> Point:
        # points are assumed to be on curve

        if R == INF:
            return Q
        if Q == INF:
            return R

        if R[0] == Q[0]:
            if R[1] == Q[1]:  # point doubling
                return self.double_aff(R)
            # opposite points
            return INF

        lam = (R[1] - Q[1]) * mod_inv(R[0] - Q[0], self.p)
        x = lam * lam - Q[0] - R[0]
        y = lam * (Q[0] - x) - Q[1]
        return x % self.p, y % self.p

    def double_aff(self, Q: Point) -> Point:
        """Return the tangent-rule double of the point.

        The point is assumed to be on curve.
        A finite point with y=0 has a vertical tangent:
        its double is INF, as the double of INF.
        """

        if Q[1] == 0:
            return INF

        lam = (3 * Q[0] * Q[0] + self._a) * mod_inv(2 * Q[1], self.p)
        x = lam * lam - Q[0] - Q[0]
        y = lam * (Q[0] - x) - Q[1]
        return x % self.p, y % self.p

    def _y2(self, x: int) -> int:
        return ((x ** 2 + self._a) * x + self._b) % self.p

    def is_on_curve(self, Q: Point) -> bool:
        "Return True if the point is on the curve."
        if len(Q) != 2:
            raise InvalidArguments("point must be a tuple[int, int]")
        if Q == INF:
            return True
        if not (0 <= Q[0] < self.p and 0 <= Q[1] < self.p):
            return False
        return self._y2(Q[0]) == (Q[1] * Q[1] % self.p)


def mult_aff(m: int, Q: Point, ec: AffineGroup) -> Point:
    """Scalar multiplication of a curve point in affine coordinates.

    This implementation uses
    'double & add' algorithm,
    'right-to-left' binary decomposition of the m coefficient,
    affine coordinates.

    The input point is assumed to be on curve and
    the m coefficient is assumed to have been reduced mod n
    if appropriate (e.g. cyclic groups of order n).
    """

    if m < 0:
        raise InvalidArguments(f"negative m: {hex(m)}")

    # R[0] is the running result, R[1] = R[0] + Q is an ancillary variable
    R = [ec.identity, Q]
    # if least significant bit of m is 1, then add Q to R[0]
    R[0] = R[m & 1]
    # remove the bit just accounted for
    m >>= 1
    while m > 0:
        # the doubling part of 'double & add'
        Q = ec.double_aff(Q)
        # always perform the 'add', even if useless
        R[1] = ec.add_aff(R[0], Q)
        # if least significant bit of m is 1, then add Q to R[0]
        R[0] = R[m & 1]
        m >>= 1
    return R[0]

#!/usr/bin/env python3

# Copyright (C) 2025 The cpzkp developers
#
# This file is part of cpzkp. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cpzkp including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Cyclic groups for the Chaum-Pedersen protocol.

A group provides its public constants
(prime p, order q, generator g, second generator h)
and the arithmetic of its element variant:

* ScalarGroup: multiplicative group of integers modulo a prime,
  Scalar elements, the group law is modular multiplication
* CurveBasedGroup: prime order subgroup of an elliptic curve,
  Coordinate elements, the group law is point addition;
  the secp256k1 (short Weierstrass) and
  edwards25519 (twisted Edwards) curves are available

The built-in groups are loaded from the data/groups.json file;
they are immutable and can be shared by any number of sessions.
For a curve group the second generator is derived
by scaling the base point by a fixed public constant,
so that callers fix both generators once per deployment.
"""

import json
import logging
from os import path
from typing import Dict, Optional, Sequence, Type

from cpzkp import codec
from cpzkp.alias import Integer, Octets, Point
from cpzkp.curve_group import AffineGroup, CurveGroup, mult_aff
from cpzkp.edwards import EdwardsCurve
from cpzkp.element import Coordinate, GroupElement, Scalar, require_variant, variant_of
from cpzkp.entropy import DEFAULT_SOURCE, RandomSource
from cpzkp.exceptions import (
    EllipticCurveError,
    InvalidArguments,
    InvalidGroupType,
    PointTypeMismatch,
)
from cpzkp.kind import GroupKind
from cpzkp.number_theory import is_probable_prime
from cpzkp.params import GroupParameters, VerificationParams
from cpzkp.utils import int_from_integer, short_repr

logger = logging.getLogger(__name__)


def solve_challenge(x: int, k: int, c: int, q: int) -> int:
    """Return the response s = (k - c*x) mod q.

    * x: the prover secret
    * k: the random nonce of the commitment
    * c: the verifier challenge
    * q: the order of the group

    The computation never goes below zero:
    if k < c*x the result is q - ((c*x - k) mod q),
    the final reduction maps q to 0 so that 0 <= s < q.
    """

    if q < 1:
        raise InvalidArguments(f"non positive order: {q}")
    if min(x, k, c) < 0:
        raise InvalidArguments("negative protocol input")
    cx = c * x
    if k >= cx:
        s = (k - cx) % q
    else:
        s = q - (cx - k) % q
    return s % q


def verify_scalar(params: VerificationParams) -> bool:
    """Return True if the Scalar proof verifies.

    Accept iff r1 = g^s * y1^c (mod p) and r2 = h^s * y2^c (mod p).
    The elements are assumed to be Scalar.
    """

    if params.c < 0 or params.s < 0:
        raise InvalidArguments("negative challenge or response")
    r1, r2, y1, y2, g, h = (e.value for e in params.elements)  # type: ignore
    p, c, s = params.p, params.c, params.s
    condition_1 = r1 == pow(g, s, p) * pow(y1, c, p) % p
    condition_2 = r2 == pow(h, s, p) * pow(y2, c, p) % p
    return condition_1 and condition_2


class Group:
    """Cyclic group of order q with two independent generators g and h.

    Subclasses implement the group law for their element variant.
    Elements of a different variant are rejected with PointTypeMismatch.
    """

    kind: GroupKind
    variant: Type[GroupElement]

    def __init__(self, p: int, q: int, g: GroupElement, h: GroupElement) -> None:
        self.p = p
        self.q = q
        self.g = g
        self.h = h

    def __repr__(self) -> str:
        return f"{type(self).__name__}(p={short_repr(self.p)}, q={short_repr(self.q)})"

    @property
    def prime(self) -> int:
        return self.p

    @property
    def order(self) -> int:
        return self.q

    @property
    def generator(self) -> GroupElement:
        return self.g

    @property
    def second_generator(self) -> GroupElement:
        return self.h

    @property
    def params(self) -> GroupParameters:
        return GroupParameters(self.kind, self.p, self.q, self.g, self.h)

    @property
    def identity(self) -> GroupElement:
        raise NotImplementedError

    def is_on_curve(self, element: GroupElement) -> bool:
        raise NotImplementedError

    def double(self, element: GroupElement) -> GroupElement:
        raise NotImplementedError

    def add(self, element1: GroupElement, element2: GroupElement) -> GroupElement:
        raise NotImplementedError

    def scale(self, element: GroupElement, m: int) -> GroupElement:
        raise NotImplementedError

    def verify_proof(self, params: VerificationParams) -> bool:
        raise NotImplementedError

    def serialize(self, element: GroupElement) -> bytes:
        require_variant(element, self.variant)
        return codec.serialize(element)

    def deserialize(self, data: Octets) -> GroupElement:
        return codec.deserialize(data, self.kind)

    def generate_challenge(self, source: Optional[RandomSource] = None) -> int:
        "Return a uniformly random challenge in [0, q)."
        source = DEFAULT_SOURCE if source is None else source
        return source.random_below(self.q)

    def solve_challenge(self, x: int, k: int, c: int) -> int:
        return solve_challenge(x, k, c, self.q)

    def _require_variant(self, elements: Sequence[GroupElement]) -> None:
        if variant_of(*elements) is not self.variant:
            err_msg = f"{self.variant.__name__} elements required"
            raise PointTypeMismatch(err_msg)


class ScalarGroup(Group):
    """Multiplicative group of integers modulo a prime p.

    g and h must generate the same subgroup of order q,
    i.e. g^q = h^q = 1 (mod p):
    exponents, and so the protocol response, are reduced mod q.
    """

    kind = GroupKind.SCALAR
    variant = Scalar

    def __init__(self, p: Integer, q: Integer, g: Integer, h: Integer) -> None:

        p = int_from_integer(p)
        q = int_from_integer(q)
        g = int_from_integer(g)
        h = int_from_integer(h)

        if not is_probable_prime(p):
            raise InvalidArguments(f"p is not prime: {short_repr(p)}")
        if not 1 < q < p:
            raise InvalidArguments(f"q not in 2..p-1: {short_repr(q)}")
        for name, gen in (("g", g), ("h", h)):
            if not 1 < gen < p:
                raise InvalidArguments(f"{name} not in 2..p-1: {short_repr(gen)}")
            if pow(gen, q, p) != 1:
                raise InvalidArguments(f"the order of {name} does not divide q")
        if g == h:
            raise InvalidArguments("g and h are not independent generators")

        super().__init__(p, q, Scalar(g), Scalar(h))

    @property
    def identity(self) -> Scalar:
        return Scalar(1)

    def is_on_curve(self, element: GroupElement) -> bool:
        "Return True for any Scalar element: there is no curve equation."
        return isinstance(element, Scalar)

    def double(self, element: GroupElement) -> Scalar:
        """Return the element unchanged.

        Doubling has no meaning in a multiplicative group:
        repeated squaring is handled by scale.
        """
        require_variant(element, Scalar)
        return element  # type: ignore

    def add(self, element1: GroupElement, element2: GroupElement) -> Scalar:
        "Return the group law of the two elements, i.e. their modular product."
        self._require_variant((element1, element2))
        return Scalar(element1.value * element2.value % self.p)  # type: ignore

    def scale(self, element: GroupElement, m: int) -> Scalar:
        "Return element^m (mod p)."
        require_variant(element, Scalar)
        if m < 0:
            raise InvalidArguments(f"negative m: {hex(m)}")
        return Scalar(pow(element.value, m, self.p))  # type: ignore

    def verify_proof(self, params: VerificationParams) -> bool:
        self._require_variant(params.elements)
        return verify_scalar(params)


class CurveBasedGroup(Group):
    """Prime order subgroup of the points of an elliptic curve.

    The generator G has order n;
    the second generator is h_scalar * G.
    """

    variant = Coordinate

    def __init__(
        self,
        kind: GroupKind,
        curve: AffineGroup,
        G: Sequence[Integer],
        n: Integer,
        h_scalar: int,
        name: str = "",
    ) -> None:

        if kind is GroupKind.SCALAR:
            raise InvalidArguments("a curve group cannot be of Scalar kind")

        if len(G) != 2:
            raise InvalidArguments("Generator must a be a sequence[int, int]")
        G = int_from_integer(G[0]), int_from_integer(G[1])
        if not curve.is_on_curve(G):
            raise InvalidArguments("Generator is not on the curve")
        if curve.is_identity(G):
            raise InvalidArguments("INF point cannot be a generator")

        # a prime n with n*G = INF is exactly the order of G
        n = int_from_integer(n)
        if not is_probable_prime(n):
            raise InvalidArguments(f"n is not prime: {short_repr(n)}")
        if not curve.is_identity(mult_aff(n, G, curve)):
            raise InvalidArguments(f"n is not the generator order: {short_repr(n)}")

        H = mult_aff(h_scalar % n, G, curve)
        if curve.is_identity(H):
            raise EllipticCurveError("the second generator is the identity")
        if H == G:
            raise InvalidArguments("g and h are not independent generators")

        self.kind = kind
        self.curve = curve
        self.name = name
        super().__init__(curve.p, n, Coordinate.from_point(G), Coordinate.from_point(H))

    def __repr__(self) -> str:
        return f"CurveBasedGroup({self.name or self.curve!r}, n={short_repr(self.q)})"

    @property
    def identity(self) -> Coordinate:
        return Coordinate.from_point(self.curve.identity)

    def is_on_curve(self, element: GroupElement) -> bool:
        "Return True if the element is a point satisfying the curve equation."
        if not isinstance(element, Coordinate):
            return False
        return self.curve.is_on_curve(element.point)

    def _point(self, element: GroupElement) -> Point:
        require_variant(element, Coordinate)
        Q = element.point  # type: ignore
        self.curve.require_on_curve(Q)
        return Q

    def equal(self, element1: GroupElement, element2: GroupElement) -> bool:
        "Return True if the two on-curve points are the same group element."
        return self._point(element1) == self._point(element2)

    def double(self, element: GroupElement) -> Coordinate:
        return Coordinate.from_point(self.curve.double_aff(self._point(element)))

    def add(self, element1: GroupElement, element2: GroupElement) -> Coordinate:
        self._require_variant((element1, element2))
        Q1 = self._point(element1)
        Q2 = self._point(element2)
        return Coordinate.from_point(self.curve.add_aff(Q1, Q2))

    def scale(self, element: GroupElement, m: int) -> Coordinate:
        """Return m * element, using 'double & add'.

        m = 0 and the identity element both give the identity.
        """

        if m < 0:
            raise InvalidArguments(f"negative m: {hex(m)}")
        return Coordinate.from_point(mult_aff(m, self._point(element), self.curve))

    def verify_proof(self, params: VerificationParams) -> bool:
        """Return True if the proof verifies.

        Accept iff r1 = s*g + c*y1 and r2 = s*h + c*y2.
        A point not on the curve makes the proof fail.
        """

        self._require_variant(params.elements)
        if params.c < 0 or params.s < 0:
            raise InvalidArguments("negative challenge or response")
        if not all(self.is_on_curve(e) for e in params.elements):
            logger.debug("proof rejected: point not on curve")
            return False

        s, c = params.s, params.c
        rhs_1 = self.add(self.scale(params.g, s), self.scale(params.y1, c))
        rhs_2 = self.add(self.scale(params.h, s), self.scale(params.y2, c))
        return self.equal(params.r1, rhs_1) and self.equal(params.r2, rhs_2)


def _curve_group(kind: GroupKind, data: Dict) -> CurveBasedGroup:
    if data["model"] == "weierstrass":
        curve: AffineGroup = CurveGroup(data["p"], data["a"], data["b"])
    elif data["model"] == "edwards":
        curve = EdwardsCurve(data["p"], data["a"], data["d"])
    else:
        raise InvalidArguments(f"unknown curve model: {data['model']}")
    return CurveBasedGroup(
        kind, curve, data["G"], data["n"], data["h_scalar"], data["name"]
    )


datadir = path.join(path.dirname(__file__), "data")
filename = path.join(datadir, "groups.json")
with open(filename, "r", encoding="ascii") as file_:
    _groups_data = json.load(file_)

GROUPS: Dict[GroupKind, Group] = {
    GroupKind.SCALAR: ScalarGroup(**_groups_data[GroupKind.SCALAR.value]),
}
for _kind in (GroupKind.ELLIPTIC_CURVE, GroupKind.CURVE25519):
    GROUPS[_kind] = _curve_group(_kind, _groups_data[_kind.value])

secp256k1: CurveBasedGroup = GROUPS[GroupKind.ELLIPTIC_CURVE]  # type: ignore
ed25519: CurveBasedGroup = GROUPS[GroupKind.CURVE25519]  # type: ignore


def get_group(kind: GroupKind) -> Group:
    "Return the built-in group of the given kind."
    try:
        return GROUPS[kind]
    except KeyError:
        raise InvalidGroupType(f"invalid group type: {kind!r}") from None


def get_constants(kind: GroupKind) -> GroupParameters:
    """Return (prime, order, g, h) of the built-in group of the given kind.

    Both protocol participants must use the same parameters.
    """
    return get_group(kind).params


def curve_group_from_prime(p: int) -> CurveBasedGroup:
    "Return the built-in curve group whose field prime is p."
    for group in (secp256k1, ed25519):
        if group.p == p:
            return group
    raise InvalidArguments(f"no built-in curve group for p = {short_repr(p)}")

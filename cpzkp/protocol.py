#!/usr/bin/env python3

# Copyright (C) 2025 The cpzkp developers
#
# This file is part of cpzkp. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cpzkp including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Chaum-Pedersen protocol functions.

The prover knows a secret x such that y1 = g^x and y2 = h^x
(y1 = x*g and y2 = x*h in a curve group)
and proves it without revealing x:

* commitment: the prover draws a random k
  and sends (r1, r2) = (g^k, h^k)
* challenge: the verifier replies with a random c
* response: the prover sends s = k - c*x (mod q)
* verification: the verifier accepts if
  r1 = g^s * y1^c and r2 = h^s * y2^c

Functions dispatch on the variant of the group elements:
Scalar elements only need the prime p,
Coordinate elements are handled by the built-in curve group
with field prime p, unless a group is explicitly provided.
Mixing variants in a single call raises PointTypeMismatch.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from cpzkp.element import Coordinate, GroupElement, Scalar, variant_of
from cpzkp.entropy import DEFAULT_SOURCE, RandomSource
from cpzkp.exceptions import EllipticCurveError, InvalidArguments
from cpzkp.groups import Group, curve_group_from_prime, solve_challenge, verify_scalar
from cpzkp.params import GroupParameters, VerificationParams
from cpzkp.utils import short_repr


@dataclass(frozen=True)
class Proof:
    "Commitment and response of a proof for a given challenge."
    r1: GroupElement
    r2: GroupElement
    s: int


def _group_for(p: int, group: Optional[Group]) -> Group:
    if group is None:
        return curve_group_from_prime(p)
    if group.p != p:
        err_msg = f"prime mismatch: {short_repr(p)} vs {short_repr(group.p)}"
        raise InvalidArguments(err_msg)
    return group


def commit(
    exp: int,
    g: GroupElement,
    h: GroupElement,
    p: int,
    group: Optional[Group] = None,
) -> Tuple[GroupElement, GroupElement]:
    """Exponentiate the two generators by the same exponent.

    * Scalar group: (g^exp mod p, h^exp mod p)
    * curve group: (exp*g, exp*h)

    A curve commitment must be a finite point:
    reaching the identity raises EllipticCurveError.
    """

    if exp < 0:
        raise InvalidArguments(f"negative exponent: {hex(exp)}")

    if variant_of(g, h) is Scalar:
        return (
            Scalar(pow(g.value, exp, p)),  # type: ignore
            Scalar(pow(h.value, exp, p)),  # type: ignore
        )

    group = _group_for(p, group)
    g_exp = group.scale(g, exp)
    h_exp = group.scale(h, exp)
    if g_exp == group.identity or h_exp == group.identity:
        raise EllipticCurveError("zero point reached in multiplication")
    return g_exp, h_exp


def verify(params: VerificationParams, group: Optional[Group] = None) -> bool:
    """Return True if the proof verifies.

    False means the proof is rejected;
    an error means the proof could not be evaluated,
    e.g. PointTypeMismatch when the six elements
    are not of the same variant.
    """

    if variant_of(*params.elements) is Coordinate:
        return _group_for(params.p, group).verify_proof(params)
    return verify_scalar(params)


def generate_nonce(
    params: GroupParameters, source: Optional[RandomSource] = None
) -> int:
    "Return a random exponent in [1, q)."
    source = DEFAULT_SOURCE if source is None else source
    return source.random_range(1, params.order)


def public_values(
    x: int, params: GroupParameters, group: Optional[Group] = None
) -> Tuple[GroupElement, GroupElement]:
    "Return the public values (y1, y2) of the secret x."
    return commit(x, params.g, params.h, params.prime, group)


def generate_keys(
    params: GroupParameters,
    source: Optional[RandomSource] = None,
    group: Optional[Group] = None,
) -> Tuple[int, GroupElement, GroupElement]:
    "Return a fresh secret x and its public values (y1, y2)."
    x = generate_nonce(params, source)
    y1, y2 = public_values(x, params, group)
    return x, y1, y2


def prove(
    x: int,
    c: int,
    params: GroupParameters,
    source: Optional[RandomSource] = None,
    group: Optional[Group] = None,
) -> Proof:
    """Return a proof of knowledge of x for the challenge c.

    A fresh nonce k is drawn for every proof:
    reusing k for two different challenges reveals x.
    """

    k = generate_nonce(params, source)
    r1, r2 = commit(k, params.g, params.h, params.prime, group)
    s = solve_challenge(x, k, c, params.order)
    return Proof(r1, r2, s)


def verify_proof(
    proof: Proof,
    c: int,
    y1: GroupElement,
    y2: GroupElement,
    params: GroupParameters,
    group: Optional[Group] = None,
) -> bool:
    "Return True if the proof verifies for the challenge c and public values."
    verification_params = VerificationParams(
        proof.r1, proof.r2, y1, y2, params.g, params.h, c, proof.s, params.prime
    )
    return verify(verification_params, group)

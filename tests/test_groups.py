#!/usr/bin/env python3

# Copyright (C) 2025 The cpzkp developers
#
# This file is part of cpzkp. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cpzkp including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `cpzkp.groups` module."

import secrets

import pytest

from cpzkp.curve_group import CurveGroup
from cpzkp.element import Coordinate, Scalar
from cpzkp.entropy import DeterministicSource
from cpzkp.exceptions import (
    EllipticCurveError,
    InvalidArguments,
    InvalidGroupType,
    PointTypeMismatch,
)
from cpzkp.groups import (
    GROUPS,
    CurveBasedGroup,
    ScalarGroup,
    curve_group_from_prime,
    ed25519,
    get_constants,
    get_group,
    secp256k1,
    solve_challenge,
)
from cpzkp.kind import GroupKind
from cpzkp.params import GroupParameters, VerificationParams
from tests.test_curve_group import low_card_curves

ec23_31, G23_31, n23_31 = low_card_curves["ec23_31"]

toy_group = ScalarGroup(23, 11, 4, 9)


def test_builtin_groups() -> None:
    params = get_constants(GroupKind.SCALAR)
    assert params == GroupParameters(GroupKind.SCALAR, 10009, 5004, Scalar(3), Scalar(2892))

    assert get_group(GroupKind.ELLIPTIC_CURVE) is secp256k1
    assert get_group(GroupKind.CURVE25519) is ed25519
    assert secp256k1.p == 2 ** 256 - 2 ** 32 - 977
    assert ed25519.p == 2 ** 255 - 19
    assert ed25519.q == 2 ** 252 + 27742317777372353535851937790883648493

    for kind, group in GROUPS.items():
        assert group.kind is kind
        params = get_constants(kind)
        assert params.prime == group.prime == group.p
        assert params.order == group.order == group.q
        assert params.g == group.generator
        assert params.h == group.second_generator
        assert group.g != group.h
        assert group.is_on_curve(group.g)
        assert group.is_on_curve(group.h)
        assert group.scale(group.g, group.q) == group.identity
        assert group.scale(group.h, group.q) == group.identity

    # second generators
    assert secp256k1.h == secp256k1.scale(secp256k1.g, 13)
    assert ed25519.h == ed25519.double(ed25519.g)

    with pytest.raises(InvalidGroupType, match="invalid group type: "):
        get_group("scalar")  # type: ignore

    assert curve_group_from_prime(secp256k1.p) is secp256k1
    assert curve_group_from_prime(ed25519.p) is ed25519
    with pytest.raises(InvalidArguments, match="no built-in curve group for p = "):
        curve_group_from_prime(10009)


def test_scalar_group() -> None:
    with pytest.raises(InvalidArguments, match="p is not prime: "):
        ScalarGroup(15, 7, 4, 9)
    with pytest.raises(InvalidArguments, match="q not in 2..p-1: "):
        ScalarGroup(23, 23, 4, 9)
    with pytest.raises(InvalidArguments, match="g not in 2..p-1: "):
        ScalarGroup(23, 11, 1, 9)
    with pytest.raises(InvalidArguments, match="h not in 2..p-1: "):
        ScalarGroup(23, 11, 4, 23)
    # 5 is not a quadratic residue mod 23
    with pytest.raises(InvalidArguments, match="the order of g does not divide q"):
        ScalarGroup(23, 11, 5, 9)
    with pytest.raises(InvalidArguments, match="g and h are not independent generators"):
        ScalarGroup(23, 11, 4, 4)

    group = toy_group
    assert group.identity == Scalar(1)
    assert group.add(Scalar(4), Scalar(9)) == Scalar(13)
    assert group.add(Scalar(4), group.identity) == Scalar(4)
    assert group.double(Scalar(4)) == Scalar(4)
    assert group.scale(Scalar(4), 6) == Scalar(2)
    assert group.scale(Scalar(9), 6) == Scalar(3)
    assert group.scale(Scalar(4), 0) == group.identity
    assert group.scale(group.identity, 5) == group.identity
    assert group.is_on_curve(Scalar(22))
    assert not group.is_on_curve(Coordinate(0, 1))

    with pytest.raises(InvalidArguments, match="negative m: "):
        group.scale(Scalar(4), -1)
    with pytest.raises(PointTypeMismatch, match="Scalar elements required"):
        group.add(Coordinate(0, 1), Coordinate(0, 1))
    with pytest.raises(PointTypeMismatch, match="mismatched element variants"):
        group.add(Coordinate(0, 1), Scalar(4))
    with pytest.raises(PointTypeMismatch, match="Scalar required, got Coordinate"):
        group.scale(Coordinate(0, 1), 2)
    with pytest.raises(PointTypeMismatch, match="Scalar required, got Coordinate"):
        group.serialize(Coordinate(0, 1))

    assert group.serialize(Scalar(22)) == b"\x16"
    assert group.deserialize(b"\x16") == Scalar(22)


def test_curve_based_group() -> None:
    kind = GroupKind.ELLIPTIC_CURVE
    group = CurveBasedGroup(kind, ec23_31, G23_31, n23_31, 3, "ec23_31")
    assert group.p == 23
    assert group.q == 31
    assert group.g == Coordinate(0, 1)
    assert group.h == group.scale(group.g, 3)
    assert group.identity == Coordinate(5, 0)
    assert "ec23_31" in repr(group)

    for i in range(n23_31):
        P = group.scale(group.g, i)
        assert group.is_on_curve(P)
        assert group.add(P, group.identity) == P
        assert group.add(P, group.scale(group.g, n23_31 - i)) == group.identity
        assert group.double(P) == group.scale(group.g, 2 * i)
        assert group.equal(group.scale(P, n23_31), group.identity)

    with pytest.raises(InvalidArguments, match="a curve group cannot be of Scalar kind"):
        CurveBasedGroup(GroupKind.SCALAR, ec23_31, G23_31, n23_31, 3)
    with pytest.raises(InvalidArguments, match="Generator must a be a sequence"):
        CurveBasedGroup(kind, ec23_31, (0, 1, 1), n23_31, 3)
    with pytest.raises(InvalidArguments, match="Generator is not on the curve"):
        CurveBasedGroup(kind, ec23_31, (0, 2), n23_31, 3)
    with pytest.raises(InvalidArguments, match="INF point cannot be a generator"):
        CurveBasedGroup(kind, ec23_31, (5, 0), n23_31, 3)
    with pytest.raises(InvalidArguments, match="n is not prime: "):
        CurveBasedGroup(kind, ec23_31, G23_31, 30, 3)
    with pytest.raises(InvalidArguments, match="n is not the generator order: "):
        CurveBasedGroup(kind, ec23_31, G23_31, 29, 3)
    with pytest.raises(InvalidArguments, match="g and h are not independent generators"):
        CurveBasedGroup(kind, ec23_31, G23_31, n23_31, 1)
    with pytest.raises(EllipticCurveError, match="the second generator is the identity"):
        CurveBasedGroup(kind, ec23_31, G23_31, n23_31, n23_31)

    with pytest.raises(InvalidArguments, match="negative m: "):
        group.scale(group.g, -1)
    with pytest.raises(InvalidArguments, match="point not on curve"):
        group.scale(Coordinate(0, 2), 2)
    with pytest.raises(PointTypeMismatch, match="Coordinate required, got Scalar"):
        group.scale(Scalar(4), 2)
    with pytest.raises(PointTypeMismatch, match="Coordinate elements required"):
        group.add(Scalar(4), Scalar(4))
    assert not group.is_on_curve(Scalar(4))  # type: ignore


def test_identity() -> None:
    for group in (secp256k1, ed25519):
        assert group.scale(group.g, 0) == group.identity
        assert group.scale(group.identity, 7) == group.identity
        assert group.add(group.g, group.identity) == group.g
        assert group.add(group.identity, group.g) == group.g
        minus_g = group.scale(group.g, group.q - 1)
        assert group.add(group.g, minus_g) == group.identity
    assert secp256k1.identity == Coordinate(5, 0)
    assert ed25519.identity == Coordinate(0, 1)
    # only Coordinate(5, 0) is the identity, other y = 0 pairs are off curve
    with pytest.raises(InvalidArguments, match="point not on curve"):
        secp256k1.equal(Coordinate(0, 0), secp256k1.identity)
    zero_y = secp256k1.deserialize(b"\xff" * 32 + b"\x00" * 32)
    assert not secp256k1.is_on_curve(zero_y)
    assert zero_y != secp256k1.identity
    g, h = secp256k1.g, secp256k1.h
    params = VerificationParams(zero_y, zero_y, g, h, g, h, 1, 1, secp256k1.p)
    assert not secp256k1.verify_proof(params)
    assert not secp256k1.equal(secp256k1.g, secp256k1.identity)


def test_two_torsion() -> None:
    # y^2 = x^3 + x mod 11: (9, 1) has order 6, 3*(9, 1) = (0, 0)
    ec = CurveGroup(11, 1, 0)
    kind = GroupKind.ELLIPTIC_CURVE
    with pytest.raises(InvalidArguments, match="n is not the generator order: "):
        CurveBasedGroup(kind, ec, (9, 1), 3, 2)
    with pytest.raises(InvalidArguments, match="n is not prime: "):
        CurveBasedGroup(kind, ec, (9, 1), 6, 2)

    # (5, 3) = 2*(9, 1) generates the subgroup of order 3
    group = CurveBasedGroup(kind, ec, (5, 3), 3, 2)
    assert group.scale(group.g, 3) == group.identity
    assert group.add(group.g, group.h) == group.identity
    T = Coordinate(0, 0)
    assert group.is_on_curve(T)
    assert group.double(T) == group.identity
    assert not group.equal(T, group.identity)

    g, h = group.g, group.h
    r1, r2 = group.double(g), group.double(h)
    for c in range(6):
        s = group.solve_challenge(1, 2, c)
        params = VerificationParams(r1, r2, g, h, g, h, c, s, group.p)
        assert group.verify_proof(params)


def test_serialization() -> None:
    for group in (secp256k1, ed25519):
        data = group.serialize(group.g)
        assert len(data) == 64
        assert group.deserialize(data) == group.g
        assert group.deserialize(data.hex()) == group.g
        with pytest.raises(PointTypeMismatch, match="Coordinate required, got Scalar"):
            group.serialize(Scalar(1))


def test_solve_challenge() -> None:
    # k >= c*x and k < c*x
    assert solve_challenge(6, 30, 4, 11) == 6
    assert solve_challenge(6, 7, 4, 11) == 5
    # c*x - k multiple of q
    assert solve_challenge(6, 2, 4, 11) == 0
    assert solve_challenge(0, 0, 0, 11) == 0

    for q in (2, 11, 5004, secp256k1.q):
        for _ in range(20):
            x = secrets.randbelow(q)
            k = secrets.randbelow(q)
            c = secrets.randbelow(q)
            s = solve_challenge(x, k, c, q)
            assert 0 <= s < q
            assert (s + c * x) % q == k % q

    with pytest.raises(InvalidArguments, match="non positive order: "):
        solve_challenge(1, 1, 1, 0)
    with pytest.raises(InvalidArguments, match="negative protocol input"):
        solve_challenge(-1, 1, 1, 11)
    with pytest.raises(InvalidArguments, match="negative protocol input"):
        solve_challenge(1, 1, -1, 11)

    assert toy_group.solve_challenge(6, 7, 4) == 5


def test_generate_challenge() -> None:
    for group in GROUPS.values():
        for _ in range(10):
            assert 0 <= group.generate_challenge() < group.q

    source1 = DeterministicSource(b"challenge")
    source2 = DeterministicSource(b"challenge")
    c1 = secp256k1.generate_challenge(source1)
    assert c1 == secp256k1.generate_challenge(source2)


def test_verify_proof() -> None:
    group = toy_group
    g, h = group.g, group.h
    y1, y2 = Scalar(2), Scalar(3)
    r1, r2 = Scalar(8), Scalar(4)
    params = VerificationParams(r1, r2, y1, y2, g, h, 4, 5, 23)
    assert group.verify_proof(params)
    for delta in range(1, group.q):
        params = VerificationParams(r1, r2, y1, y2, g, h, 4, (5 + delta) % 11, 23)
        assert not group.verify_proof(params)
    params = VerificationParams(r1, r2, y1, y2, g, h, 4, -5, 23)
    with pytest.raises(InvalidArguments, match="negative challenge or response"):
        group.verify_proof(params)

    for group in (secp256k1, ed25519):
        x, k, c = 3, 11, 5
        y1, y2 = group.scale(group.g, x), group.scale(group.h, x)
        r1, r2 = group.scale(group.g, k), group.scale(group.h, k)
        s = group.solve_challenge(x, k, c)
        params = VerificationParams(r1, r2, y1, y2, group.g, group.h, c, s, group.p)
        assert group.verify_proof(params)
        # s = q - 4 here, so that no delta below gives a zero response
        for delta in (1, 2, 3, group.q - 1):
            wrong_s = (s + delta) % group.q
            params = VerificationParams(
                r1, r2, y1, y2, group.g, group.h, c, wrong_s, group.p
            )
            assert not group.verify_proof(params)
            params = VerificationParams(
                r1, r2, y1, y2, group.g, group.h, c + delta, s, group.p
            )
            assert not group.verify_proof(params)
        params = VerificationParams(r2, r1, y1, y2, group.g, group.h, c, s, group.p)
        assert not group.verify_proof(params)

        # not on curve
        off_curve = Coordinate(group.g.x, group.g.y + 1)  # type: ignore
        params = VerificationParams(
            off_curve, r2, y1, y2, group.g, group.h, c, s, group.p
        )
        assert not group.verify_proof(params)

        params = VerificationParams(Scalar(1), r2, y1, y2, group.g, group.h, c, s, group.p)
        with pytest.raises(PointTypeMismatch, match="mismatched element variants"):
            group.verify_proof(params)


def test_scale_homomorphism() -> None:
    for group in (secp256k1, ed25519):
        for _ in range(2):
            a = secrets.randbelow(group.q)
            b = secrets.randbelow(group.q)
            P = group.scale(group.g, a)
            Q = group.scale(group.g, b)
            assert group.scale(group.g, a + b) == group.add(P, Q)
            assert group.scale(P, 0) == group.identity

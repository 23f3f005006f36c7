#!/usr/bin/env python3

# Copyright (C) 2025 The cpzkp developers
#
# This file is part of cpzkp. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cpzkp including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `cpzkp.codec` module."

import secrets

import pytest

from cpzkp.codec import deserialize, serialize
from cpzkp.element import Coordinate, Scalar
from cpzkp.exceptions import InvalidSerialization, PointTypeMismatch
from cpzkp.kind import GroupKind


def test_coordinate_vectors() -> None:
    Q = Coordinate(65256, 8475)
    assert serialize(Q).hex() == "fee8211b"
    assert deserialize("fee8211b", GroupKind.ELLIPTIC_CURVE) == Q

    # the shorter coordinate is left-padded to the longer one
    Q = Coordinate(65256, 83957234)
    assert serialize(Q).hex() == "0000fee8050115f2"
    assert deserialize("0000fee8050115f2", GroupKind.CURVE25519) == Q

    Q = Coordinate(5, 0)
    assert serialize(Q) == b"\x05\x00"
    assert deserialize(b"\x05\x00", GroupKind.ELLIPTIC_CURVE) == Q

    Q = Coordinate(0, 1)
    assert serialize(Q) == b"\x00\x01"


def test_scalar_vectors() -> None:
    assert serialize(Scalar(0)) == b"\x00"
    assert serialize(Scalar(255)) == b"\xff"
    assert serialize(Scalar(10008)) == b"\x27\x18"
    assert deserialize(b"\x27\x18", GroupKind.SCALAR) == Scalar(10008)
    # leading zero bytes and empty buffers are accepted for scalars
    assert deserialize(b"\x00\x00\x27\x18", GroupKind.SCALAR) == Scalar(10008)
    assert deserialize(b"", GroupKind.SCALAR) == Scalar(0)


def test_round_trip() -> None:
    for _ in range(10):
        element = Scalar(secrets.randbits(256))
        assert deserialize(serialize(element), GroupKind.SCALAR) == element
        element = Coordinate(secrets.randbits(256), secrets.randbits(128))
        data = serialize(element)
        assert len(data) % 2 == 0
        assert deserialize(data, GroupKind.ELLIPTIC_CURVE) == element


def test_invalid_encodings() -> None:
    err_msg = "the length of the serialized object must be even: 3"
    with pytest.raises(InvalidSerialization, match=err_msg):
        deserialize(b"\x01\x02\x03", GroupKind.ELLIPTIC_CURVE)
    with pytest.raises(InvalidSerialization, match=err_msg):
        deserialize("010203", GroupKind.CURVE25519)
    with pytest.raises(InvalidSerialization, match="empty coordinate encoding"):
        deserialize(b"", GroupKind.ELLIPTIC_CURVE)
    with pytest.raises(InvalidSerialization, match="invalid hex-string: "):
        deserialize("zz", GroupKind.SCALAR)

    with pytest.raises(PointTypeMismatch, match="not a group element: "):
        serialize(5)  # type: ignore

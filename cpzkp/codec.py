#!/usr/bin/env python3

# Copyright (C) 2025 The cpzkp developers
#
# This file is part of cpzkp. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cpzkp including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Wire encoding of group elements.

* Scalar: the big-endian unsigned encoding of the integer,
  with no padding beyond what its magnitude requires
  (zero is a single zero byte).
* Coordinate: the big-endian encodings of x and y,
  each left-padded with zero bytes to the length of the longer one,
  concatenated.
  The total length is always even and
  decoding splits the buffer exactly in half.

The encoding does not carry the group kind:
the decoder must be told which kind to expect.
"""

from cpzkp.alias import Octets
from cpzkp.element import Coordinate, GroupElement, Scalar
from cpzkp.exceptions import InvalidSerialization, PointTypeMismatch
from cpzkp.kind import GroupKind
from cpzkp.utils import bytes_from_int, bytes_from_octets, int_from_bytes


def serialize(element: GroupElement) -> bytes:
    "Return the wire encoding of a group element."

    if isinstance(element, Scalar):
        return bytes_from_int(element.value)
    if isinstance(element, Coordinate):
        x = bytes_from_int(element.x)
        y = bytes_from_int(element.y)
        size = max(len(x), len(y))
        return x.rjust(size, b"\x00") + y.rjust(size, b"\x00")
    raise PointTypeMismatch(f"not a group element: {type(element).__name__}")


def deserialize(data: Octets, kind: GroupKind) -> GroupElement:
    """Return the group element of the given kind encoded in data.

    Scalar kind parses the whole buffer as one integer;
    curve kinds require an even-length buffer
    and parse each half as one coordinate.
    """

    data = bytes_from_octets(data)
    if kind is GroupKind.SCALAR:
        return Scalar(int_from_bytes(data))

    size = len(data)
    if size == 0:
        raise InvalidSerialization("empty coordinate encoding")
    if size % 2 != 0:
        err_msg = f"the length of the serialized object must be even: {size}"
        raise InvalidSerialization(err_msg)
    half = size // 2
    return Coordinate(int_from_bytes(data[:half]), int_from_bytes(data[half:]))

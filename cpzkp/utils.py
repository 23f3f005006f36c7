#!/usr/bin/env python3

# Copyright (C) 2025 The cpzkp developers
#
# This file is part of cpzkp. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cpzkp including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Assorted conversion utilities.

Integers travel on the wire as big-endian unsigned byte strings.
"""

from cpzkp.alias import Integer, Octets
from cpzkp.exceptions import InvalidArguments, InvalidSerialization

HEX_THRESHOLD = 0xFFFFFFFF


def bytes_from_octets(octets: Octets) -> bytes:
    """Return bytes from a hex-string, stripping leading/trailing spaces.

    If the input is not a string, then it goes untouched.
    """

    if isinstance(octets, str):  # hex string
        try:
            return bytes.fromhex(octets)
        except ValueError as e:
            raise InvalidSerialization(f"invalid hex-string: {octets!r}") from e
    return bytes(octets)


def int_from_integer(i: Integer) -> int:
    """Return an int from many possible integer representations.

    Allowed integer representations are:

    * 3735928559
    * -3735928559
    * "0xdeadbeef"
    * "-0xdeadbeef"
    * "deadbeef"
    * b'\xde\xad\xbe\xef'

    The binary representation is not allowed because there is no way to
    discriminate it from a valid hex-string
    (e.g. "0b11011110101011011011111011101111").
    """

    if isinstance(i, int):
        return i

    if isinstance(i, str):
        i = i.strip().lower()
        if i.startswith("0x") or i.startswith("-0x"):
            return int(i, 16)
        i = bytes.fromhex(i)

    # must be bytes
    return int.from_bytes(i, "big", signed=False)


def hex_string(i: Integer) -> str:
    """Return a hex-string from many positive integer representations.

    Negative integers are not allowed.

    The resulting hex-string has an even number of hex-digits and
    includes a space every four bytes (i.e. every eight hex-digits).
    """

    int_ = int_from_integer(i)
    if int_ < 0:
        raise InvalidArguments(f"negative integer: {int_}")
    a_str = hex(int_)[2:]
    if len(a_str) % 2 != 0:
        a_str = "0" + a_str

    indx = list(reversed(range(len(a_str), 0, -8)))
    lresult = [(a_str[max(0, i - 8) : i]) for i in indx]
    result = " ".join(lresult)
    return result.upper()


def short_repr(i: int) -> str:
    "Return a compact representation, hex-string for big integers."
    return f"'{hex_string(i)}'" if i > HEX_THRESHOLD else f"{i}"


def bytes_from_int(i: int) -> bytes:
    """Return the minimal big-endian encoding of a non-negative int.

    Zero is encoded as a single zero byte.
    """

    if i < 0:
        raise InvalidArguments(f"negative integer: {i}")
    return i.to_bytes(max(1, (i.bit_length() + 7) // 8), byteorder="big", signed=False)


def int_from_bytes(data: bytes) -> int:
    "Return the int of a big-endian encoding (zero for an empty buffer)."
    return int.from_bytes(data, byteorder="big", signed=False)

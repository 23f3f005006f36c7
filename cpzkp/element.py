#!/usr/bin/env python3

# Copyright (C) 2025 The cpzkp developers
#
# This file is part of cpzkp. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cpzkp including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Group elements.

A group element is either a Scalar,
i.e. a single integer of a multiplicative group modulo a prime,
or a Coordinate,
i.e. the (x, y) affine coordinates of an elliptic curve point.

Elements are immutable values.
Operands of a single operation must be of the same variant:
variant_of and require_variant enforce it at runtime.
"""

from dataclasses import dataclass
from typing import Type, Union

from cpzkp.alias import Point
from cpzkp.exceptions import InvalidArguments, PointTypeMismatch


@dataclass(frozen=True)
class Scalar:
    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise InvalidArguments(f"negative scalar: {self.value}")

    def __str__(self) -> str:
        return f"Scalar({self.value})"


@dataclass(frozen=True)
class Coordinate:
    x: int
    y: int

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise InvalidArguments(f"negative coordinate: ({self.x}, {self.y})")

    def __str__(self) -> str:
        return f"Coordinate({self.x}, {self.y})"

    @property
    def point(self) -> Point:
        "Return the coordinates as a tuple."
        return self.x, self.y

    @classmethod
    def from_point(cls, Q: Point) -> "Coordinate":
        return cls(Q[0], Q[1])


GroupElement = Union[Scalar, Coordinate]


def variant_of(*elements: GroupElement) -> Type[GroupElement]:
    """Return the common variant of the elements.

    PointTypeMismatch is raised if they are not all of the same variant.
    """

    if not elements:
        raise InvalidArguments("no elements")
    variants = {type(e) for e in elements}
    if len(variants) != 1:
        names = ", ".join(sorted(v.__name__ for v in variants))
        raise PointTypeMismatch(f"mismatched element variants: {names}")
    variant = variants.pop()
    if variant not in (Scalar, Coordinate):
        raise PointTypeMismatch(f"not a group element: {variant.__name__}")
    return variant


def require_variant(element: GroupElement, variant: Type[GroupElement]) -> None:
    "Require the element to be of the given variant."

    if not isinstance(element, variant):
        err_msg = f"{variant.__name__} required, got {type(element).__name__}"
        raise PointTypeMismatch(err_msg)

#!/usr/bin/env python3

# Copyright (C) 2025 The cpzkp developers
#
# This file is part of cpzkp. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cpzkp including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Protocol parameter bundles.

GroupParameters are the public constants both protocol participants
must share: prover and verifier using different parameters
cannot agree on any proof.

VerificationParams are the complete input of one verification.
"""

from dataclasses import dataclass
from typing import Tuple

from cpzkp.element import GroupElement
from cpzkp.kind import GroupKind


@dataclass(frozen=True)
class GroupParameters:
    kind: GroupKind
    # field prime (the modulus of the Scalar group)
    prime: int
    # order of the cyclic subgroup generated by g
    order: int
    g: GroupElement
    h: GroupElement


@dataclass(frozen=True)
class VerificationParams:
    # commitment
    r1: GroupElement
    r2: GroupElement
    # public values
    y1: GroupElement
    y2: GroupElement
    # generators
    g: GroupElement
    h: GroupElement
    # challenge
    c: int
    # response
    s: int
    # prime modulus
    p: int

    @property
    def elements(self) -> Tuple[GroupElement, ...]:
        "Return the six group elements, commitment first."
        return self.r1, self.r2, self.y1, self.y2, self.g, self.h

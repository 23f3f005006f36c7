#!/usr/bin/env python3

# Copyright (C) 2025 The cpzkp developers
#
# This file is part of cpzkp. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cpzkp including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Group kinds.

The kind selects arithmetic and encoding rules
and it is fixed for a whole operation or session.
"""

from enum import Enum
from typing import Dict, Optional

from cpzkp.exceptions import InvalidGroupType


class GroupKind(Enum):
    SCALAR = "scalar"
    ELLIPTIC_CURVE = "elliptic_curve"
    CURVE25519 = "curve25519"


DEFAULT_KIND = GroupKind.SCALAR

_SELECTORS: Dict[str, GroupKind] = {
    "scalar": GroupKind.SCALAR,
    "elliptic": GroupKind.ELLIPTIC_CURVE,
    "elliptic_curve": GroupKind.ELLIPTIC_CURVE,
    "elliptic-curve": GroupKind.ELLIPTIC_CURVE,
    "ec": GroupKind.ELLIPTIC_CURVE,
    "secp256k1": GroupKind.ELLIPTIC_CURVE,
    "curve25519": GroupKind.CURVE25519,
    "ed25519": GroupKind.CURVE25519,
}


def group_kind_from_str(selector: Optional[str]) -> GroupKind:
    """Return the GroupKind named by a free-form selector.

    Matching is case-insensitive and a leading '--' is ignored,
    so that command line flags like '--elliptic' are accepted.
    Absent (None or blank) input selects the default Scalar kind;
    any other unrecognized value, a bare '--' included, is an error.
    """

    if selector is None:
        return DEFAULT_KIND
    key = selector.strip().lower()
    if not key:
        return DEFAULT_KIND
    if key.startswith("--"):
        key = key[2:]
    try:
        return _SELECTORS[key]
    except KeyError:
        raise InvalidGroupType(f"invalid group type: {selector!r}") from None

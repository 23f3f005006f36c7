#!/usr/bin/env python3

# Copyright (C) 2025 The cpzkp developers
#
# This file is part of cpzkp. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cpzkp including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exception classes.

Every error raised by cpzkp is one of the six kinds below.
They derive from the regular ValueError, TypeError, and RuntimeError,
so users may catch either the specific kind or the builtin one.

A proof that does not verify is not an error:
verification returns False in that case.
"""


class InvalidArguments(ValueError):
    "Structurally invalid call, e.g. an unknown round index."


class PointTypeMismatch(TypeError):
    "Operands of a single operation are not of the same element variant."


class InvalidSerialization(ValueError):
    "Malformed encoding, e.g. an odd-length coordinate buffer."


class EllipticCurveError(RuntimeError):
    "Curve arithmetic reached an unrepresentable state."


class InvalidGroupType(ValueError):
    "Unrecognized group kind selector."


class RandomGenerationError(RuntimeError):
    "The secure random source is unavailable."

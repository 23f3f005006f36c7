#!/usr/bin/env python3

# Copyright (C) 2025 The cpzkp developers
#
# This file is part of cpzkp. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cpzkp including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Multi-round Chaum-Pedersen sessions.

A Session proves knowledge of one fixed secret x
over any number of challenge-response rounds:

    session = Session(GroupKind.ELLIPTIC_CURVE)
    r1, r2 = session.start_round()            # send r1, r2 to the verifier
    s = session.record_response(0, c)         # c is the verifier challenge
    assert session.verify_round(0)
    session.finalize()
    data = session.serialize()

States are INITIAL -> ACTIVE -> FINALIZED;
FINALIZED is terminal and can be reached from any other state.
Rounds are indexed 0, 1, 2, ... in the order they are started;
each round has its own fresh nonce k,
while the secret x is the same for the whole session.

Only finalized sessions can be serialized:
the JSON document holds the public transcript
(group, public values, commitments, challenges, responses)
and never the secret x nor the nonces.

A Session is not thread-safe:
callers must serialize access, e.g. with one lock per session.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Tuple, Type, TypeVar

from dataclasses_json import DataClassJsonMixin, config

from cpzkp.element import GroupElement
from cpzkp.entropy import DEFAULT_SOURCE, RandomSource
from cpzkp.exceptions import InvalidArguments, InvalidSerialization
from cpzkp.groups import Group, get_group
from cpzkp.kind import DEFAULT_KIND, GroupKind
from cpzkp.params import GroupParameters, VerificationParams
from cpzkp.protocol import commit, generate_nonce, public_values, verify
from cpzkp.utils import int_from_integer

logger = logging.getLogger(__name__)

_Session = TypeVar("_Session", bound="Session")


class SessionState(Enum):
    INITIAL = "initial"
    ACTIVE = "active"
    FINALIZED = "finalized"


def _hex_from_int(i: Optional[int]) -> Optional[str]:
    return None if i is None else hex(i)


def _int_from_hex(i: Optional[str]) -> Optional[int]:
    return None if i is None else int_from_integer(i)


_HEX_INT = config(encoder=_hex_from_int, decoder=_int_from_hex)
_HEX_BYTES = config(encoder=lambda v: v.hex(), decoder=bytes.fromhex)


@dataclass
class Round(DataClassJsonMixin):
    "Public transcript of a round: wire-encoded commitment, challenge, response."

    index: int
    r1: bytes = field(metadata=_HEX_BYTES)
    r2: bytes = field(metadata=_HEX_BYTES)
    challenge: Optional[int] = field(default=None, metadata=_HEX_INT)
    response: Optional[int] = field(default=None, metadata=_HEX_INT)


@dataclass
class SessionTranscript(DataClassJsonMixin):
    "Persisted form of a finalized session."

    kind: GroupKind
    state: SessionState
    p: int = field(metadata=_HEX_INT)
    q: int = field(metadata=_HEX_INT)
    g: bytes = field(metadata=_HEX_BYTES)
    h: bytes = field(metadata=_HEX_BYTES)
    y1: bytes = field(metadata=_HEX_BYTES)
    y2: bytes = field(metadata=_HEX_BYTES)
    rounds: List[Round] = field(default_factory=list)


def _select_group(kind: Optional[GroupKind], group: Optional[Group]) -> Group:
    if group is None:
        return get_group(DEFAULT_KIND if kind is None else kind)
    if kind is not None and kind is not group.kind:
        err_msg = f"group kind mismatch: {kind.value} vs {group.kind.value}"
        raise InvalidArguments(err_msg)
    return group


def _is_response(i: Optional[int]) -> bool:
    return i is None or (isinstance(i, int) and i >= 0)


def _check_transcript(transcript: SessionTranscript) -> None:
    "Require the decoded transcript fields to be of the expected types."

    t = transcript
    well_formed = (
        isinstance(t.kind, GroupKind)
        and isinstance(t.state, SessionState)
        and all(isinstance(i, int) for i in (t.p, t.q))
        and all(isinstance(b, bytes) for b in (t.g, t.h, t.y1, t.y2))
        and isinstance(t.rounds, list)
    )
    if not well_formed:
        raise InvalidSerialization("invalid session transcript: malformed fields")
    for r in t.rounds:
        if not (
            isinstance(r, Round)
            and isinstance(r.index, int)
            and isinstance(r.r1, bytes)
            and isinstance(r.r2, bytes)
            and _is_response(r.challenge)
            and _is_response(r.response)
            and (r.challenge is None) == (r.response is None)
        ):
            raise InvalidSerialization("invalid session transcript: malformed round")


class Session:
    """Chaum-Pedersen prover session for one secret.

    The group is the built-in one of the given kind (Scalar by default)
    unless a group is explicitly provided.
    Randomness is drawn from source, the operating system CSPRNG by default.
    """

    def __init__(
        self,
        kind: Optional[GroupKind] = None,
        source: Optional[RandomSource] = None,
        group: Optional[Group] = None,
    ) -> None:

        self._group = _select_group(kind, group)
        self._source = DEFAULT_SOURCE if source is None else source
        params = self._group.params
        self._x: Optional[int] = generate_nonce(params, self._source)
        self._y1, self._y2 = public_values(self._x, params, self._group)
        self._state = SessionState.INITIAL
        self._rounds: List[Round] = []
        # per-round nonce, discarded once the response is computed
        self._nonces: List[Optional[int]] = []
        logger.debug("session created: %s group", self._group.kind.value)

    def __repr__(self) -> str:
        kind, state = self._group.kind.value, self._state.value
        return f"Session({kind}, {state}, rounds={len(self._rounds)})"

    @property
    def kind(self) -> GroupKind:
        return self._group.kind

    @property
    def group(self) -> Group:
        return self._group

    @property
    def params(self) -> GroupParameters:
        return self._group.params

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def y1(self) -> GroupElement:
        return self._y1

    @property
    def y2(self) -> GroupElement:
        return self._y2

    @property
    def round_count(self) -> int:
        return len(self._rounds)

    @property
    def rounds(self) -> Tuple[Round, ...]:
        "Return a copy of the round transcripts."
        return tuple(replace(r) for r in self._rounds)

    def _require_not_finalized(self) -> None:
        if self._state is SessionState.FINALIZED:
            raise InvalidArguments("session is finalized")

    def _round(self, index: int) -> Round:
        if not 0 <= index < len(self._rounds):
            raise InvalidArguments(f"invalid round index: {index}")
        return self._rounds[index]

    def start_round(self) -> Tuple[GroupElement, GroupElement]:
        """Start the next round and return its commitment (r1, r2).

        A fresh nonce k is drawn and (r1, r2) = (g^k, h^k).
        """

        self._require_not_finalized()
        params = self.params
        k = generate_nonce(params, self._source)
        r1, r2 = commit(k, params.g, params.h, params.prime, self._group)

        index = len(self._rounds)
        self._rounds.append(
            Round(index, self._group.serialize(r1), self._group.serialize(r2))
        )
        self._nonces.append(k)
        self._state = SessionState.ACTIVE
        logger.debug("round %d started", index)
        return r1, r2

    def record_response(self, index: int, challenge: int) -> int:
        """Return the response s to the verifier challenge for a round.

        The response is computed with the round nonce
        and the session secret; it can be recorded only once per round.
        """

        self._require_not_finalized()
        round_ = self._round(index)
        if round_.response is not None:
            raise InvalidArguments(f"response already recorded for round {index}")
        if challenge < 0:
            raise InvalidArguments(f"negative challenge: {hex(challenge)}")

        k = self._nonces[index]
        s = self._group.solve_challenge(self._x, k, challenge)  # type: ignore
        round_.challenge = challenge
        round_.response = s
        self._nonces[index] = None
        logger.debug("round %d response recorded", index)
        return s

    def verify_round(self, index: int, challenge: Optional[int] = None) -> bool:
        """Return True if the round proof verifies.

        The challenge the response was computed for is used,
        unless a different one is provided:
        any other challenge makes the verification fail.
        """

        round_ = self._round(index)
        if round_.response is None:
            raise InvalidArguments(f"no response recorded for round {index}")

        params = self.params
        c = round_.challenge if challenge is None else challenge
        verification_params = VerificationParams(
            self._group.deserialize(round_.r1),
            self._group.deserialize(round_.r2),
            self._y1,
            self._y2,
            params.g,
            params.h,
            c,  # type: ignore
            round_.response,
            params.prime,
        )
        result = verify(verification_params, self._group)
        logger.debug("round %d verification: %s", index, result)
        return result

    def finalize(self) -> None:
        """Finalize the session: no more rounds or responses.

        The secret and any unused nonce are discarded.
        """

        self._state = SessionState.FINALIZED
        self._x = None
        self._nonces = [None] * len(self._nonces)
        logger.debug("session finalized after %d rounds", len(self._rounds))

    def serialize(self) -> str:
        "Return the JSON transcript of a finalized session."

        if self._state is not SessionState.FINALIZED:
            raise InvalidArguments("session not finalized")
        group = self._group
        transcript = SessionTranscript(
            kind=group.kind,
            state=self._state,
            p=group.p,
            q=group.q,
            g=group.serialize(group.g),
            h=group.serialize(group.h),
            y1=group.serialize(self._y1),
            y2=group.serialize(self._y2),
            rounds=list(self.rounds),
        )
        return transcript.to_json()

    @classmethod
    def deserialize(
        cls: Type[_Session], data: str, group: Optional[Group] = None
    ) -> _Session:
        """Return the finalized session of a JSON transcript.

        The restored session can verify its rounds,
        but it cannot start new ones.
        """

        try:
            transcript = SessionTranscript.from_json(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise InvalidSerialization(f"invalid session transcript: {e}") from e

        _check_transcript(transcript)
        if transcript.state is not SessionState.FINALIZED:
            raise InvalidArguments("session not finalized")
        group = _select_group(transcript.kind, group)
        if (
            transcript.p != group.p
            or transcript.q != group.q
            or group.deserialize(transcript.g) != group.g
            or group.deserialize(transcript.h) != group.h
        ):
            raise InvalidSerialization("group parameters mismatch")
        indexes = [r.index for r in transcript.rounds]
        if indexes != list(range(len(indexes))):
            raise InvalidSerialization(f"invalid round indexes: {indexes}")

        session = cls.__new__(cls)
        session._group = group
        session._source = DEFAULT_SOURCE
        session._x = None
        session._y1 = group.deserialize(transcript.y1)
        session._y2 = group.deserialize(transcript.y2)
        session._state = SessionState.FINALIZED
        session._rounds = transcript.rounds
        session._nonces = [None] * len(transcript.rounds)
        logger.debug("session restored: %d rounds", len(transcript.rounds))
        return session

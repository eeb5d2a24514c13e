"""
Operation lifecycle states and workflow stages.

An operation moves strictly forward:

    INIT -> BUILT -> SIGNED -> SUBMITTED -> CONFIRMED

and any non-terminal state may fall into FAILED.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet


class OperationState(str, Enum):
    INIT = "INIT"
    BUILT = "BUILT"
    SIGNED = "SIGNED"
    SUBMITTED = "SUBMITTED"
    CONFIRMED = "CONFIRMED"
    FAILED = "FAILED"


class Stage(str, Enum):
    """Workflow stage at which the account client is invoked."""

    INIT = "init"
    BUILD = "build"
    SIGN = "sign"
    EXECUTE = "execute"
    CONFIRM = "confirm"


STATE_TRANSITIONS: Dict[OperationState, FrozenSet[OperationState]] = {
    OperationState.INIT: frozenset({OperationState.BUILT, OperationState.FAILED}),
    OperationState.BUILT: frozenset({OperationState.SIGNED, OperationState.FAILED}),
    OperationState.SIGNED: frozenset({OperationState.SUBMITTED, OperationState.FAILED}),
    OperationState.SUBMITTED: frozenset({OperationState.CONFIRMED, OperationState.FAILED}),
    OperationState.CONFIRMED: frozenset(),
    OperationState.FAILED: frozenset(),
}

# Stages after which the operation may already be on its way on-chain.
SUBMISSION_STAGES: FrozenSet[Stage] = frozenset({Stage.EXECUTE, Stage.CONFIRM})


def is_valid_transition(current: OperationState, new: OperationState) -> bool:
    return new in STATE_TRANSITIONS[current]


def is_terminal_state(state: OperationState) -> bool:
    return not STATE_TRANSITIONS[state]

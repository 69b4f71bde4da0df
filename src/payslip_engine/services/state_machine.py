"""Payroll run state machine with transition validation."""

from __future__ import annotations

from enum import Enum


class PayrollRunState(str, Enum):
    """States of a single payroll run."""

    IDLE = "idle"
    VALIDATING = "validating"
    ZERO_WORKING_DAYS = "zero_working_days"
    COMPUTING = "computing"
    COMMITTING = "committing"
    DONE = "done"
    REJECTED = "rejected"
    FAILED = "failed"


class InvalidTransitionError(Exception):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, from_state: str, to_state: str, reason: str | None = None):
        self.from_state = from_state
        self.to_state = to_state
        self.reason = reason
        msg = f"Invalid transition from '{from_state}' to '{to_state}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class PayrollRunStateMachine:
    """State machine for one payroll run.

    Allowed transitions:
    - idle → validating
    - validating → zero_working_days | computing | rejected
    - zero_working_days → done
    - computing → committing
    - committing → done
    - any non-terminal state → failed
    """

    VALID_TRANSITIONS: dict[str, list[str]] = {
        PayrollRunState.IDLE: [PayrollRunState.VALIDATING],
        PayrollRunState.VALIDATING: [
            PayrollRunState.ZERO_WORKING_DAYS,
            PayrollRunState.COMPUTING,
            PayrollRunState.REJECTED,
        ],
        PayrollRunState.ZERO_WORKING_DAYS: [PayrollRunState.DONE],
        PayrollRunState.COMPUTING: [PayrollRunState.COMMITTING],
        PayrollRunState.COMMITTING: [PayrollRunState.DONE, PayrollRunState.REJECTED],
        PayrollRunState.DONE: [],
        PayrollRunState.REJECTED: [],
        PayrollRunState.FAILED: [],
    }

    TERMINAL_STATES = {
        PayrollRunState.DONE,
        PayrollRunState.REJECTED,
        PayrollRunState.FAILED,
    }

    def __init__(self, state: PayrollRunState = PayrollRunState.IDLE):
        self.state = state
        self.history: list[PayrollRunState] = [state]

    @classmethod
    def can_transition(cls, from_state: str, to_state: str) -> bool:
        """Check if a transition is valid."""
        if to_state == PayrollRunState.FAILED:
            return from_state not in cls.TERMINAL_STATES
        return to_state in cls.VALID_TRANSITIONS.get(from_state, [])

    @classmethod
    def validate_transition(cls, from_state: str, to_state: str) -> None:
        """Validate a transition, raising InvalidTransitionError if invalid."""
        if not cls.can_transition(from_state, to_state):
            raise InvalidTransitionError(from_state, to_state)

    @classmethod
    def is_terminal(cls, state: str) -> bool:
        return state in cls.TERMINAL_STATES

    def transition_to(self, to_state: PayrollRunState) -> PayrollRunState:
        self.validate_transition(self.state, to_state)
        self.state = to_state
        self.history.append(to_state)
        return to_state

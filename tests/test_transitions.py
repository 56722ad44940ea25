"""Tests for the status transition table."""

import itertools

import pytest

from policy_flow.exceptions import InvalidStateTransition
from policy_flow.models.policy import PolicyRequestStatus as S
from policy_flow.workflow.transitions import (
    ALLOWED_TRANSITIONS,
    TERMINAL_STATUSES,
    can_transition,
    ensure_transition,
    is_terminal,
)

EXPECTED = {
    (None, S.RECEIVED),
    (S.RECEIVED, S.VALIDATED),
    (S.RECEIVED, S.REJECTED),
    (S.RECEIVED, S.CANCELLED),
    (S.VALIDATED, S.PENDING),
    (S.VALIDATED, S.REJECTED),
    (S.VALIDATED, S.CANCELLED),
    (S.PENDING, S.APPROVED),
    (S.PENDING, S.REJECTED),
    (S.PENDING, S.CANCELLED),
}

ALL_PAIRS = list(itertools.product([None, *S], list(S)))


class TestTransitionTable:
    """Exhaustive checks over every (from, to) pair."""

    @pytest.mark.parametrize("from_status,to_status", ALL_PAIRS)
    def test_can_transition_matches_table(self, from_status, to_status) -> None:
        assert can_transition(from_status, to_status) == ((from_status, to_status) in EXPECTED)

    @pytest.mark.parametrize("status", list(S))
    def test_no_self_loops(self, status: S) -> None:
        assert can_transition(status, status) is False

    def test_every_status_has_an_entry(self) -> None:
        assert set(ALLOWED_TRANSITIONS) == {None, *S}

    def test_missing_target_never_allowed(self) -> None:
        assert can_transition(S.RECEIVED, None) is False


class TestTerminalStatuses:
    """Tests for terminal status handling."""

    def test_terminal_set(self) -> None:
        assert TERMINAL_STATUSES == {S.APPROVED, S.REJECTED, S.CANCELLED}

    @pytest.mark.parametrize("status", [S.APPROVED, S.REJECTED, S.CANCELLED])
    def test_terminal_has_no_exits(self, status: S) -> None:
        assert is_terminal(status)
        assert not any(can_transition(status, target) for target in S)

    @pytest.mark.parametrize("status", [S.RECEIVED, S.VALIDATED, S.PENDING])
    def test_non_terminal(self, status: S) -> None:
        assert not is_terminal(status)


class TestEnsureTransition:
    """Tests for ensure_transition."""

    def test_allowed_passes(self) -> None:
        ensure_transition(S.VALIDATED, S.PENDING)

    def test_forbidden_raises(self) -> None:
        with pytest.raises(InvalidStateTransition) as exc_info:
            ensure_transition(S.RECEIVED, S.APPROVED)

        assert exc_info.value.from_status == S.RECEIVED
        assert exc_info.value.to_status == S.APPROVED

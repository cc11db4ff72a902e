"""
Unit tests for the request lifecycle rules.

Tests:
- Allowed and rejected status edges
- Who may perform each transition
- Status helper properties
"""

import pytest

from db.enums import RequestStatus
from api.services.request_service import (
    ALLOWED_TRANSITIONS,
    can_actor_transition,
    is_allowed_transition,
)
from tests.factories import ServiceRequestFactory


class TestAllowedTransitions:
    """Edge set of the lifecycle state machine."""

    @pytest.mark.parametrize(
        "current,target",
        [
            (RequestStatus.CLAIMED, RequestStatus.IN_PROGRESS),
            (RequestStatus.CLAIMED, RequestStatus.COMPLETED),
            (RequestStatus.IN_PROGRESS, RequestStatus.COMPLETED),
            (RequestStatus.OPEN, RequestStatus.CANCELLED),
            (RequestStatus.CLAIMED, RequestStatus.CANCELLED),
            (RequestStatus.IN_PROGRESS, RequestStatus.CANCELLED),
        ],
    )
    def test_allowed_edges(self, current, target):
        assert is_allowed_transition(current, target)

    @pytest.mark.parametrize(
        "current,target",
        [
            (RequestStatus.OPEN, RequestStatus.IN_PROGRESS),
            (RequestStatus.OPEN, RequestStatus.COMPLETED),
            (RequestStatus.COMPLETED, RequestStatus.IN_PROGRESS),
            (RequestStatus.COMPLETED, RequestStatus.CANCELLED),
            (RequestStatus.CANCELLED, RequestStatus.IN_PROGRESS),
            (RequestStatus.IN_PROGRESS, RequestStatus.CLAIMED),
            (RequestStatus.IN_PROGRESS, RequestStatus.IN_PROGRESS),
        ],
    )
    def test_rejected_edges(self, current, target):
        assert not is_allowed_transition(current, target)

    def test_terminal_states_have_no_outgoing_edges(self):
        for current, _ in ALLOWED_TRANSITIONS:
            assert not current.is_terminal

    def test_claim_is_not_a_status_update_edge(self):
        assert not is_allowed_transition(RequestStatus.OPEN, RequestStatus.CLAIMED)


class TestActorRules:
    """Who may move a request."""

    def _claimed(self):
        return ServiceRequestFactory.create(
            pilot_id="pilot-1",
            status=RequestStatus.CLAIMED,
            ground_crew_id="crew-1",
        )

    def test_assigned_crew_can_progress_and_complete(self):
        request = self._claimed()
        assert can_actor_transition(request, "crew-1", RequestStatus.IN_PROGRESS)
        assert can_actor_transition(request, "crew-1", RequestStatus.COMPLETED)

    def test_pilot_cannot_progress_own_request(self):
        request = self._claimed()
        assert not can_actor_transition(request, "pilot-1", RequestStatus.IN_PROGRESS)
        assert not can_actor_transition(request, "pilot-1", RequestStatus.COMPLETED)

    def test_other_crew_cannot_touch_request(self):
        request = self._claimed()
        for target in (RequestStatus.IN_PROGRESS, RequestStatus.COMPLETED, RequestStatus.CANCELLED):
            assert not can_actor_transition(request, "crew-2", target)

    def test_pilot_and_crew_can_cancel(self):
        request = self._claimed()
        assert can_actor_transition(request, "pilot-1", RequestStatus.CANCELLED)
        assert can_actor_transition(request, "crew-1", RequestStatus.CANCELLED)

    def test_unassigned_request_only_cancellable_by_pilot(self):
        request = ServiceRequestFactory.create(pilot_id="pilot-1")
        assert can_actor_transition(request, "pilot-1", RequestStatus.CANCELLED)
        assert not can_actor_transition(request, "crew-1", RequestStatus.CANCELLED)
        assert not can_actor_transition(request, "crew-1", RequestStatus.IN_PROGRESS)


class TestStatusProperties:
    def test_chat_only_while_work_is_active(self):
        active = {s for s in RequestStatus if s.accepts_chat}
        assert active == {RequestStatus.CLAIMED, RequestStatus.IN_PROGRESS}

    def test_terminal_statuses(self):
        terminal = {s for s in RequestStatus if s.is_terminal}
        assert terminal == {RequestStatus.COMPLETED, RequestStatus.CANCELLED}

"""
Unit Tests for Contact Triage

Tests priority routing of contact-form submissions.
"""

import pytest

from counselcare.domain.enums.classification import RiskLevel
from counselcare.domain.enums.conversation import ChatSurface
from counselcare.services.safety import (
    ContactTriageService,
    CrisisEventLogger,
    TriagePriority,
)
from counselcare.services.safety.contact_triage import ROUTINE_NOTICE, URGENT_NOTICE


@pytest.fixture
def crisis_logger(memory_store):
    return CrisisEventLogger(memory_store)


@pytest.fixture
def triage_service(classifier, risk_assessor, crisis_logger):
    return ContactTriageService(classifier, risk_assessor, crisis_logger)


class TestUrgentSubmissions:

    def test_crisis_message_is_urgent(self, triage_service):
        result = triage_service.triage("I can't take it anymore and want to end it all")

        assert result.priority == TriagePriority.URGENT
        assert result.is_urgent
        assert result.risk.level == RiskLevel.HIGH
        assert result.notice == URGENT_NOTICE

    def test_urgent_submission_logged_as_crisis_event(self, triage_service, crisis_logger):
        triage_service.triage("I want to end my life", submission_id="contact-42")

        events = crisis_logger.get_events()
        assert len(events) == 1
        assert events[0].session_id == "contact-42"
        assert events[0].source == ChatSurface.CONTACT_FORM
        assert events[0].triggering_context[0].text == "I want to end my life"

    def test_high_risk_phrase_is_urgent(self, triage_service):
        assert triage_service.triage("I have a plan").is_urgent

    def test_urgent_without_logger(self, classifier, risk_assessor):
        service = ContactTriageService(classifier, risk_assessor)

        assert service.triage("I want to die").is_urgent


class TestRoutineSubmissions:

    @pytest.mark.parametrize("message", [
        "I'd like to know more about couples counseling",
        "I've been feeling anxious and stressed",
        "",
        None,
    ])
    def test_routine_messages(self, triage_service, crisis_logger, message):
        result = triage_service.triage(message)

        assert result.priority == TriagePriority.ROUTINE
        assert result.notice == ROUTINE_NOTICE
        assert crisis_logger.get_events() == []

    def test_medium_risk_stays_routine(self, triage_service):
        result = triage_service.triage("I've been having panic attacks")

        assert result.risk.level == RiskLevel.MEDIUM
        assert not result.is_urgent


def test_to_dict(triage_service):
    data = triage_service.triage("I want to die").to_dict()

    assert data == {
        "sentiment": "crisis",
        "risk_level": "high",
        "priority": "urgent",
        "notice": URGENT_NOTICE,
    }


def test_default_collaborators():
    assert ContactTriageService().triage("hello").priority == TriagePriority.ROUTINE

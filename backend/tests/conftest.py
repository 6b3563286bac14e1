"""
Shared pytest fixtures for episode ledger tests.
"""
import pytest
from fastapi.testclient import TestClient

import main
from access import AccessController
from ledger import EpisodeLedger

ADMIN = "admin-1"
PATIENT_1 = "patient-1"
PATIENT_2 = "patient-2"


def episode_fields(**overrides):
    """Valid submission (sleep attack, severity 7, 30 min warning) with optional overrides."""
    fields = dict(
        episodeType=1,
        episodeSeverity=7,
        stressLevel=8,
        sleepQuality=6,
        timeOfDayHour=14,
        warningTimeMinutes=30,
        confidence=8,
        ageRangeCode=2,
        yearsSinceDiagnosis=5,
        overallSeverity=7,
        hadCaffeine=True,
        hadRecentMeal=False,
        suddenTempChange=True,
        dizziness=True,
        nausea=False,
        tingling=True,
        headache=False,
        blurredVision=False,
        moodChange=True,
        cognitiveSlowing=True,
        muscleWeakness=False,
        restlessness=False,
    )
    fields.update(overrides)
    return fields


def second_episode_fields(**overrides):
    """Cataplexy episode with a 45 min warning and a different symptom mix."""
    return episode_fields(
        episodeType=2,
        episodeSeverity=5,
        stressLevel=5,
        sleepQuality=8,
        timeOfDayHour=10,
        warningTimeMinutes=45,
        confidence=6,
        ageRangeCode=3,
        yearsSinceDiagnosis=2,
        overallSeverity=6,
        hadCaffeine=False,
        hadRecentMeal=True,
        suddenTempChange=False,
        dizziness=True,
        nausea=True,
        tingling=False,
        headache=True,
        blurredVision=False,
        moodChange=False,
        cognitiveSlowing=False,
        muscleWeakness=True,
        restlessness=False,
        **overrides,
    )


@pytest.fixture
def ledger():
    """Fresh empty ledger accepting submissions, administered by ADMIN."""
    return EpisodeLedger(AccessController(ADMIN))


@pytest.fixture
def two_episode_ledger(ledger):
    """Ledger holding one episode from each of two patients."""
    ledger.submit_episode(PATIENT_1, **episode_fields())
    ledger.submit_episode(PATIENT_2, **second_episode_fields())
    return ledger


@pytest.fixture
def client(ledger):
    """FastAPI TestClient serving the fresh ledger fixture."""
    original = main.ledger
    main.ledger = ledger
    yield TestClient(main.app)
    main.ledger = original


def as_caller(identity):
    """Request headers carrying the caller identity."""
    return {"X-Participant-Id": identity}

# Data models - episode records, participants, field bounds and error kinds
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict, Optional, Tuple

# Closed set of episode type codes
EPISODE_TYPES: Dict[int, str] = {
    1: "sleep attack",
    2: "cataplexy",
    3: "sleep paralysis",
    4: "hypnagogic hallucination",
}

# Bounded integer fields in validation order: (name, low, high). high=None is unbounded.
INT_FIELDS: Tuple[Tuple[str, int, Optional[int]], ...] = (
    ("episodeType", min(EPISODE_TYPES), max(EPISODE_TYPES)),
    ("episodeSeverity", 1, 10),
    ("stressLevel", 1, 10),
    ("sleepQuality", 1, 10),
    ("timeOfDayHour", 0, 23),
    ("warningTimeMinutes", 0, None),
    ("confidence", 1, 10),
    ("ageRangeCode", 0, None),
    ("yearsSinceDiagnosis", 0, None),
    ("overallSeverity", 1, 10),
)


class LedgerError(Exception):
    """Base class for every failure the ledger reports to a caller."""

    code = "ledger_error"


class Unauthorized(LedgerError):
    code = "unauthorized"

    def __init__(self, caller: str):
        self.caller = caller
        super().__init__(f"{caller!r} is not the admin")


class SubmissionsClosed(LedgerError):
    code = "submissions_closed"

    def __init__(self):
        super().__init__("Submissions are currently closed")


class InvalidField(LedgerError):
    code = "invalid_field"

    def __init__(self, field_name: str):
        self.field = field_name
        super().__init__(f"Invalid {field_name}")


class NotFound(LedgerError):
    code = "not_found"

    def __init__(self, episode_id):
        self.episode_id = episode_id
        super().__init__(f"Episode {episode_id} not found")


@dataclass(frozen=True)
class SymptomFlags:
    """Symptom and context flags reported with an episode"""
    hadCaffeine: bool
    hadRecentMeal: bool
    suddenTempChange: bool
    dizziness: bool
    nausea: bool
    tingling: bool
    headache: bool
    blurredVision: bool
    moodChange: bool
    cognitiveSlowing: bool
    muscleWeakness: bool
    restlessness: bool

    def as_dict(self) -> Dict[str, bool]:
        return {name: getattr(self, name) for name in SYMPTOM_FIELDS}


SYMPTOM_FIELDS: Tuple[str, ...] = tuple(f.name for f in fields(SymptomFlags))

# All 22 caller-supplied fields, in submission order
SUBMISSION_FIELDS: Tuple[str, ...] = tuple(name for name, _, _ in INT_FIELDS) + SYMPTOM_FIELDS


@dataclass(frozen=True)
class Episode:
    """One immutable ledger entry"""
    episodeId: int
    participant: str
    timestamp: str  # UTC ISO-8601
    episodeType: int
    episodeSeverity: int
    stressLevel: int
    sleepQuality: int
    timeOfDayHour: int
    warningTimeMinutes: int
    confidence: int
    ageRangeCode: int
    yearsSinceDiagnosis: int
    overallSeverity: int
    symptoms: SymptomFlags

    def as_dict(self) -> Dict:
        data = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "symptoms"}
        data["episodeTypeLabel"] = EPISODE_TYPES[self.episodeType]
        data["symptoms"] = self.symptoms.as_dict()
        return data


@dataclass
class Participant:
    """Registration state for one submitting identity"""
    identity: str
    registered: bool = False
    episodeCount: int = 0


def _is_int(value) -> bool:
    # bool is a subclass of int but is not a valid numeric field
    return isinstance(value, int) and not isinstance(value, bool)


def validate_fields(submitted: Dict) -> Dict:
    """
    Check submitted fields in submission order and return them unchanged.
    Raises InvalidField naming the first field that is missing, mistyped or out of range,
    or any unexpected extra field.
    """
    for name, low, high in INT_FIELDS:
        value = submitted.get(name)
        if not _is_int(value) or value < low or (high is not None and value > high):
            raise InvalidField(name)
    for name in SYMPTOM_FIELDS:
        if not isinstance(submitted.get(name), bool):
            raise InvalidField(name)
    for name in submitted:
        if name not in SUBMISSION_FIELDS:
            raise InvalidField(name)
    return submitted

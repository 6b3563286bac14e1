# Backend main entry point - HTTP surface over the episode ledger
import logging
from typing import List, Optional

from fastapi import FastAPI, Header, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, StrictBool, StrictInt

import analytics
from ledger import EpisodeLedger
from models import InvalidField, LedgerError, NotFound, SubmissionsClosed, Unauthorized
from seed import build_ledger, seed_data
from settings import is_demo_mode, load_settings

settings = load_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Single owned store; replaced only by /demo/reset
ledger: EpisodeLedger = seed_data(settings) if is_demo_mode() else build_ledger(settings)

app = FastAPI(title="Episode Ledger API")

# Configure CORS - allow local dev and deployed frontend
_allowed_origins = [
    "http://localhost:5173",
    "http://localhost:5174",
]
if settings.frontend_url:
    _allowed_origins.append(settings.frontend_url)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_ERROR_STATUS = {
    Unauthorized: 403,
    SubmissionsClosed: 409,
    InvalidField: 400,
    NotFound: 404,
}


def _http_error(exc: LedgerError) -> HTTPException:
    """Translate a ledger failure into an HTTP error with a machine-readable code."""
    detail = {"message": str(exc), "code": exc.code}
    if isinstance(exc, InvalidField):
        detail["field"] = exc.field
    return HTTPException(status_code=_ERROR_STATUS.get(type(exc), 400), detail=detail)


def _require_caller(x_participant_id: Optional[str]) -> str:
    """Caller identity is authenticated upstream and forwarded in X-Participant-Id."""
    if not x_participant_id or not x_participant_id.strip():
        raise HTTPException(status_code=401, detail="X-Participant-Id header is required")
    return x_participant_id.strip()


# Request/Response models
class EpisodeSubmission(BaseModel):
    """Strict types: "7" or 7.0 is rejected here, ranges are checked by the ledger"""
    model_config = ConfigDict(extra="forbid")

    episodeType: StrictInt
    episodeSeverity: StrictInt
    stressLevel: StrictInt
    sleepQuality: StrictInt
    timeOfDayHour: StrictInt
    warningTimeMinutes: StrictInt
    confidence: StrictInt
    ageRangeCode: StrictInt
    yearsSinceDiagnosis: StrictInt
    overallSeverity: StrictInt
    hadCaffeine: StrictBool
    hadRecentMeal: StrictBool
    suddenTempChange: StrictBool
    dizziness: StrictBool
    nausea: StrictBool
    tingling: StrictBool
    headache: StrictBool
    blurredVision: StrictBool
    moodChange: StrictBool
    cognitiveSlowing: StrictBool
    muscleWeakness: StrictBool
    restlessness: StrictBool


class SubmissionResponse(BaseModel):
    episodeId: int


class RegistrationResponse(BaseModel):
    identity: str
    registered: bool
    newlyRegistered: bool
    totalParticipants: int


class ParticipantResponse(BaseModel):
    identity: str
    registered: bool
    episodeCount: int
    episodeIds: List[int]


class StatusResponse(BaseModel):
    admin: str
    acceptingSubmissions: bool
    totalEpisodes: int
    totalParticipants: int


def _status() -> StatusResponse:
    total_episodes, total_participants = ledger.totals()
    return StatusResponse(
        admin=ledger.access.admin,
        acceptingSubmissions=ledger.access.accepting_submissions,
        totalEpisodes=total_episodes,
        totalParticipants=total_participants,
    )


@app.get("/")
def read_root():
    return {"message": "Episode Ledger API"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}


@app.get("/status", response_model=StatusResponse)
def get_status():
    """Accepting flag, admin identity and global counters"""
    return _status()


@app.post("/participants/register", response_model=RegistrationResponse)
def register_participant(x_participant_id: Optional[str] = Header(None)):
    caller = _require_caller(x_participant_id)
    newly = ledger.register(caller)
    return RegistrationResponse(
        identity=caller,
        registered=True,
        newlyRegistered=newly,
        totalParticipants=ledger.total_participants(),
    )


@app.get("/participants/{identity}", response_model=ParticipantResponse)
def get_participant(identity: str):
    participant, episode_ids = ledger.participant_summary(identity)
    return ParticipantResponse(
        identity=participant.identity,
        registered=participant.registered,
        episodeCount=participant.episodeCount,
        episodeIds=episode_ids,
    )


@app.post("/episodes", response_model=SubmissionResponse, status_code=201)
def submit_episode(submission: EpisodeSubmission, x_participant_id: Optional[str] = Header(None)):
    """Validate and append one episode for the caller"""
    caller = _require_caller(x_participant_id)
    try:
        episode_id = ledger.submit_episode(caller, **submission.model_dump())
    except LedgerError as exc:
        raise _http_error(exc)
    return SubmissionResponse(episodeId=episode_id)


@app.get("/episodes/count")
def get_total_episodes():
    return {"totalEpisodes": ledger.total_episodes()}


@app.get("/episodes/{episode_id}")
def get_episode(episode_id: int):
    try:
        return ledger.get_episode(episode_id).as_dict()
    except LedgerError as exc:
        raise _http_error(exc)


@app.get("/episodes/{episode_id}/symptoms")
def get_episode_symptoms(episode_id: int):
    try:
        return ledger.get_episode_symptoms(episode_id).as_dict()
    except LedgerError as exc:
        raise _http_error(exc)


@app.get("/analytics/symptoms")
def get_symptom_frequencies():
    return analytics.symptom_frequencies(ledger)


@app.get("/analytics/warning-time")
def get_warning_time_stats():
    return analytics.warning_time_stats(ledger)


@app.get("/analytics/episode-types")
def get_episode_type_breakdown():
    return analytics.episode_type_breakdown(ledger)


@app.get("/analytics/time-of-day")
def get_time_of_day_distribution():
    return analytics.time_of_day_distribution(ledger)


@app.post("/admin/toggle-accepting", response_model=StatusResponse)
def toggle_accepting(x_participant_id: Optional[str] = Header(None)):
    """Admin only: open or close the ledger for new submissions"""
    caller = _require_caller(x_participant_id)
    try:
        ledger.access.toggle_accepting(caller)
    except LedgerError as exc:
        raise _http_error(exc)
    return _status()


@app.get("/demo/status")
def demo_status():
    """Returns whether demo mode is enabled. Only for frontend visibility gate."""
    return {"demoMode": is_demo_mode()}


@app.post("/demo/reset", response_model=StatusResponse)
def demo_reset(x_participant_id: Optional[str] = Header(None)):
    """
    Replace the store with a freshly seeded one. Only available when DEMO_MODE=true,
    and only to the admin. Existing records are never edited; the old store is dropped as a whole.
    """
    global ledger
    if not is_demo_mode():
        raise HTTPException(status_code=404, detail="Demo reset not available")
    caller = _require_caller(x_participant_id)
    if caller != ledger.access.admin:
        logger.warning("Refused demo reset from non-admin %r", caller)
        raise _http_error(Unauthorized(caller))
    ledger = seed_data(settings)
    logger.info("Demo store reset")
    return _status()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

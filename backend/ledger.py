# Episode ledger - validation, append-only storage and participant registration
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Dict, List, Tuple

from access import AccessController
from models import (
    INT_FIELDS,
    SYMPTOM_FIELDS,
    Episode,
    InvalidField,
    NotFound,
    Participant,
    SubmissionsClosed,
    SymptomFlags,
    validate_fields,
)

logger = logging.getLogger(__name__)


class EpisodeLedger:
    """
    Append-only store of episode records plus per-participant registration and counts.

    The append path (id assignment, record storage, counters, registration) runs as one
    critical section; readers take a snapshot under the same lock.
    """

    def __init__(self, access: AccessController):
        self.access = access
        self._episodes: List[Episode] = []
        self._participants: Dict[str, Participant] = {}
        self._total_participants = 0
        self._lock = access.lock

    def _register_locked(self, caller: str) -> bool:
        participant = self._participants.get(caller)
        if participant is None:
            participant = self._participants[caller] = Participant(identity=caller)
        if participant.registered:
            return False
        participant.registered = True
        self._total_participants += 1
        return True

    def register(self, caller: str) -> bool:
        """Mark caller registered. Idempotent; returns True only on the first registration."""
        with self._lock:
            newly = self._register_locked(caller)
        if newly:
            logger.info("Registered participant %r", caller)
        return newly

    def submit_episode(self, caller: str, **submitted) -> int:
        """
        Validate and append one episode for caller. Returns the assigned episode id.
        Raises SubmissionsClosed or InvalidField; on failure nothing is changed.
        """
        with self._lock:
            if not self.access.check_accepting():
                logger.warning("Rejected submission from %r: submissions closed", caller)
                raise SubmissionsClosed()
            try:
                validate_fields(submitted)
            except InvalidField as exc:
                logger.warning("Rejected submission from %r: invalid %s", caller, exc.field)
                raise

            episode_id = len(self._episodes)
            episode = Episode(
                episodeId=episode_id,
                participant=caller,
                timestamp=datetime.now(timezone.utc).isoformat(),
                symptoms=SymptomFlags(**{name: submitted[name] for name in SYMPTOM_FIELDS}),
                **{name: submitted[name] for name, _, _ in INT_FIELDS},
            )
            self._register_locked(caller)
            self._episodes.append(episode)
            self._participants[caller].episodeCount += 1

        logger.info("Recorded episode %d from %r", episode_id, caller)
        return episode_id

    def get_episode(self, episode_id: int) -> Episode:
        # bool ids and non-int ids address nothing
        if isinstance(episode_id, bool) or not isinstance(episode_id, int):
            raise NotFound(episode_id)
        with self._lock:
            if not 0 <= episode_id < len(self._episodes):
                raise NotFound(episode_id)
            return self._episodes[episode_id]

    def get_episode_symptoms(self, episode_id: int) -> SymptomFlags:
        return self.get_episode(episode_id).symptoms

    def total_episodes(self) -> int:
        with self._lock:
            return len(self._episodes)

    def total_participants(self) -> int:
        with self._lock:
            return self._total_participants

    def is_registered(self, identity: str) -> bool:
        with self._lock:
            participant = self._participants.get(identity)
            return participant is not None and participant.registered

    def episode_count_of(self, identity: str) -> int:
        with self._lock:
            participant = self._participants.get(identity)
            return participant.episodeCount if participant else 0

    def participant(self, identity: str) -> Participant:
        """Copy of a participant's state; unknown identities come back unregistered."""
        with self._lock:
            participant = self._participants.get(identity)
            if participant is None:
                return Participant(identity=identity)
            return Participant(participant.identity, participant.registered, participant.episodeCount)

    def episodes_of(self, identity: str) -> List[int]:
        """Ids of a participant's episodes in submission order."""
        return [ep.episodeId for ep in self.snapshot() if ep.participant == identity]

    def snapshot(self) -> Tuple[Episode, ...]:
        """Consistent view of the ledger: strictly before or after any append."""
        with self._lock:
            return tuple(self._episodes)

    def participant_summary(self, identity: str) -> Tuple[Participant, List[int]]:
        """Participant state and episode ids read together, so count == len(ids)."""
        with self._lock:
            return self.participant(identity), self.episodes_of(identity)

    def totals(self) -> Tuple[int, int]:
        """(totalEpisodes, totalParticipants) from one consistent state."""
        with self._lock:
            return len(self._episodes), self._total_participants

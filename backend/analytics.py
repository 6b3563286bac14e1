# Analytics - aggregates recomputed from a ledger snapshot on every call
# Simple counts and averages only; nothing is cached between calls.
from __future__ import annotations

from collections import Counter
from typing import Dict

from ledger import EpisodeLedger
from models import EPISODE_TYPES, SYMPTOM_FIELDS


def symptom_frequencies(ledger: EpisodeLedger) -> Dict:
    """
    Count how many episodes report each symptom flag.
    Empty ledger -> totalEpisodes 0 and every count 0.
    """
    snapshot = ledger.snapshot()
    counts = {name: 0 for name in SYMPTOM_FIELDS}
    for ep in snapshot:
        for name in SYMPTOM_FIELDS:
            if getattr(ep.symptoms, name):
                counts[name] += 1
    return {"totalEpisodes": len(snapshot), "counts": counts}


def warning_time_stats(ledger: EpisodeLedger) -> Dict:
    """
    Warning-time statistics across all episodes.
    averageWarningMinutes is the truncated mean over ALL episodes (30 and 45 -> 37),
    including the ones with no warning.
    """
    snapshot = ledger.snapshot()
    total = len(snapshot)
    if total == 0:
        return {"totalEpisodes": 0, "episodesWithWarning": 0, "averageWarningMinutes": 0}

    with_warning = sum(1 for ep in snapshot if ep.warningTimeMinutes > 0)
    total_minutes = sum(ep.warningTimeMinutes for ep in snapshot)
    return {
        "totalEpisodes": total,
        "episodesWithWarning": with_warning,
        "averageWarningMinutes": total_minutes // total,
    }


def episode_type_breakdown(ledger: EpisodeLedger) -> Dict:
    """Episodes per type code; every valid code is present."""
    snapshot = ledger.snapshot()
    counter = Counter(ep.episodeType for ep in snapshot)
    return {
        "totalEpisodes": len(snapshot),
        "types": [
            {"episodeType": code, "label": label, "count": counter.get(code, 0)}
            for code, label in sorted(EPISODE_TYPES.items())
        ],
    }


def time_of_day_distribution(ledger: EpisodeLedger) -> Dict:
    """Episodes per hour of day (24 buckets, index = hour)."""
    snapshot = ledger.snapshot()
    counter = Counter(ep.timeOfDayHour for ep in snapshot)
    return {
        "totalEpisodes": len(snapshot),
        "hourly": [counter.get(hour, 0) for hour in range(24)],
    }

# Seed data - build a fresh store and load demo episodes
from access import AccessController
from ledger import EpisodeLedger
from settings import Settings

DEMO_EPISODES = [
    (
        "demo-patient-1",
        dict(
            episodeType=1,  # sleep attack
            episodeSeverity=7,
            stressLevel=8,
            sleepQuality=6,
            timeOfDayHour=14,  # 2 PM
            warningTimeMinutes=30,
            confidence=8,
            ageRangeCode=2,  # 26-35
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
        ),
    ),
    (
        "demo-patient-2",
        dict(
            episodeType=2,  # cataplexy
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
        ),
    ),
]


def build_ledger(settings: Settings) -> EpisodeLedger:
    """Fresh, empty ledger with the configured admin and accepting flag"""
    return EpisodeLedger(AccessController(settings.admin_id, settings.accepting))


def seed_data(settings: Settings) -> EpisodeLedger:
    """Build a fresh ledger holding the demo episodes"""
    ledger = EpisodeLedger(AccessController(settings.admin_id, accepting=True))
    for participant, fields in DEMO_EPISODES:
        ledger.submit_episode(participant, **fields)
    if not settings.accepting:
        ledger.access.toggle_accepting(settings.admin_id)

    print("Seed data initialized:")
    print(f"  - admin: {ledger.access.admin}")
    print(f"  - accepting submissions: {ledger.access.accepting_submissions}")
    print(f"  - {ledger.total_episodes()} episodes from {ledger.total_participants()} participants")
    return ledger


if __name__ == "__main__":
    from settings import load_settings
    seed_data(load_settings())

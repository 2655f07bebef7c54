from datetime import datetime
from app.models.session import PracticeHistory, PracticeSession, PracticeStatus

def finalize_practice_session(live: PracticeSession) -> PracticeHistory:
    if live.status != PracticeStatus.COMPLETE:
        raise ValueError(f"Session {live.session_id} is not complete")

    ended_at = live.updated_at or datetime.utcnow()
    duration = int((ended_at - live.created_at).total_seconds())

    return PracticeHistory(
        session_id=live.session_id,
        scenario_id=live.scenario_id,
        persona=live.persona,
        objective=live.objective,
        transcript=live.transcript,
        objective_met=live.objective_met,
        evaluation=live.evaluation,
        duration_seconds=duration,
        started_at=live.created_at,
        ended_at=ended_at
    )

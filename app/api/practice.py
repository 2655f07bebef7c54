from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel
from typing import Optional
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

from app.models.session import PracticeSession, PracticeStatus
from app.services.content_repository import ContentRepository, get_content_repository
from app.services.session_finalizer import finalize_practice_session
from app.services.session_store import MongoSessionStore, get_session_store
from app.services.vocabulary import list_vocabulary
from practice.errors import GenerationFailure, InputValidationFailure, InvalidSessionState
from practice.orchestrator import FALLBACK_REPLY, ConversationOrchestrator
from practice.scenarios import get_scenario, list_scenarios

router = APIRouter(prefix="/practice", tags=["Practice"])

# ================= MODELS =================
class StartRequest(BaseModel):
    scenario_id: str

class MessageRequest(BaseModel):
    text: Optional[str] = None

# ================= DEPENDENCIES =================
_orchestrator = ConversationOrchestrator()

def get_orchestrator() -> ConversationOrchestrator:
    return _orchestrator

# ================= HELPERS =================
async def get_session_or_404(session_id: str, store: MongoSessionStore) -> PracticeSession:
    session = await store.get(session_id)
    if not session:
        raise HTTPException(404, "Session not found")
    return session

async def claim_session(
    session_id: str,
    status: PracticeStatus,
    action: str,
    store: MongoSessionStore,
) -> PracticeSession:
    session = await store.claim(session_id, status)
    if session:
        return session
    current = await get_session_or_404(session_id, store)
    if current.status != status:
        raise practice_error(InvalidSessionState(action, current.status.value))
    logger.warning(f"⚠️ Session {session_id} is busy, rejecting '{action}'")
    raise HTTPException(409, "Session is busy with another request")

def practice_error(e: Exception, session: Optional[PracticeSession] = None) -> HTTPException:
    if isinstance(e, InvalidSessionState):
        return HTTPException(409, str(e))
    if isinstance(e, InputValidationFailure):
        return HTTPException(422, str(e))
    detail = {"message": str(e)}
    if session is not None:
        detail["status"] = session.status.value
        if session.status == PracticeStatus.EVALUATING:
            # the closing turn was committed, only the evaluation is missing
            detail["reply"] = session.transcript[-1].model_dump()
        else:
            detail["fallback"] = FALLBACK_REPLY.model_dump()
    return HTTPException(502, detail)

async def archive_if_complete(session: PracticeSession, store: MongoSessionStore):
    if session.status == PracticeStatus.COMPLETE:
        await store.archive(finalize_practice_session(session))
        logger.info(f"✅ Session {session.session_id} archived")

def session_view(session: PracticeSession) -> dict:
    data = session.model_dump(exclude={"vocabulary"})
    data["status"] = session.status.value
    return data

# ================= SCENARIOS =================
@router.get("/scenarios")
async def scenarios():
    return [
        {
            "id": s.id,
            "title": s.title,
            "description": s.description,
            "persona": s.persona.model_dump(),
            "objectives": [v.objective for v in s.objectives],
        }
        for s in list_scenarios()
    ]

@router.get("/history")
async def history(store: MongoSessionStore = Depends(get_session_store)):
    records = await store.list_history()
    return [r.model_dump() for r in records]

# ================= SESSION =================
@router.post("/start")
async def start(
    req: StartRequest,
    store: MongoSessionStore = Depends(get_session_store),
    repo: ContentRepository = Depends(get_content_repository),
    orchestrator: ConversationOrchestrator = Depends(get_orchestrator),
):
    if get_scenario(req.scenario_id) is None:
        raise HTTPException(404, "Scenario not found")

    vocabulary = await list_vocabulary(repo)
    logger.info(f"Loaded {len(vocabulary)} vocabulary entries")

    session = orchestrator.start_session(req.scenario_id, vocabulary)
    await store.save(session)
    return {
        "session_id": session.session_id,
        "persona": session.persona.model_dump(),
        "intro": session.intro,
        "objective": session.objective,
        "status": session.status.value,
    }

@router.get("/{session_id}")
async def fetch_session(session_id: str, store: MongoSessionStore = Depends(get_session_store)):
    session = await get_session_or_404(session_id, store)
    return session_view(session)

@router.post("/{session_id}/begin")
async def begin(
    session_id: str,
    store: MongoSessionStore = Depends(get_session_store),
    orchestrator: ConversationOrchestrator = Depends(get_orchestrator),
):
    session = await claim_session(session_id, PracticeStatus.NOT_STARTED, "begin", store)
    try:
        orchestrator.begin(session)
    except InvalidSessionState as e:
        raise practice_error(e)
    finally:
        await store.save(session)
    return {
        "session_id": session.session_id,
        "transcript": [m.model_dump() for m in session.transcript],
        "status": session.status.value,
    }

# ================= TURNS =================
@router.post("/{session_id}/message")
async def message(
    session_id: str,
    req: MessageRequest,
    store: MongoSessionStore = Depends(get_session_store),
    orchestrator: ConversationOrchestrator = Depends(get_orchestrator),
):
    session = await claim_session(session_id, PracticeStatus.ACTIVE, "send a message", store)
    logger.info(f"User message in session {session_id}: {req.text}")

    try:
        outcome = await orchestrator.send_message(session, req.text or "")
    except GenerationFailure as e:
        logger.error(f"❌ Turn failed in session {session_id}: {e}")
        raise practice_error(e, session)
    except (InvalidSessionState, InputValidationFailure) as e:
        raise practice_error(e)
    finally:
        # releases the claim; a failed turn saves the unchanged transcript
        await store.save(session)

    await archive_if_complete(session, store)
    return {
        "session_id": session.session_id,
        "response": {"farsi": outcome.reply.content, "finglish": outcome.reply.finglish},
        "is_complete": outcome.is_complete,
        "objective_met": outcome.objective_met,
        "status": session.status.value,
        "evaluation": outcome.evaluation.model_dump() if outcome.evaluation else None,
    }

# ================= EVALUATION =================
@router.post("/{session_id}/give-up")
async def give_up(
    session_id: str,
    store: MongoSessionStore = Depends(get_session_store),
    orchestrator: ConversationOrchestrator = Depends(get_orchestrator),
):
    session = await claim_session(session_id, PracticeStatus.ACTIVE, "give up", store)
    try:
        evaluation = await orchestrator.give_up(session)
    except GenerationFailure as e:
        logger.error(f"❌ Evaluation failed in session {session_id}: {e}")
        raise practice_error(e, session)
    except (InvalidSessionState, InputValidationFailure) as e:
        raise practice_error(e)
    finally:
        await store.save(session)

    await archive_if_complete(session, store)
    return {
        "session_id": session.session_id,
        "objective_met": False,
        "status": session.status.value,
        "evaluation": evaluation.model_dump(),
    }

@router.post("/{session_id}/evaluate")
async def evaluate(
    session_id: str,
    store: MongoSessionStore = Depends(get_session_store),
    orchestrator: ConversationOrchestrator = Depends(get_orchestrator),
):
    session = await claim_session(session_id, PracticeStatus.EVALUATING, "retry the evaluation", store)
    try:
        evaluation = await orchestrator.retry_evaluation(session)
    except GenerationFailure as e:
        raise practice_error(e, session)
    except (InvalidSessionState, InputValidationFailure) as e:
        raise practice_error(e)
    finally:
        await store.save(session)

    await archive_if_complete(session, store)
    return {
        "session_id": session.session_id,
        "objective_met": session.objective_met,
        "status": session.status.value,
        "evaluation": evaluation.model_dump(),
    }

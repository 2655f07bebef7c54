# practice/orchestrator.py
"""
Conversation practice state machine.

    not_started -> active -> (evaluating) -> complete

The orchestrator holds no state of its own. Every operation takes the
caller's PracticeSession and advances it; the generators are injected so
the HTTP layer can use the Groq-backed ones and tests can use fakes.
"""
import asyncio
import logging
import os
import random
import uuid
from datetime import datetime
from typing import Callable, List, Optional

from pydantic import BaseModel

from app.models.session import (
    DialogueMessage,
    Evaluation,
    PracticeSession,
    PracticeStatus,
)
from practice.dialogue.turn_generator import generate_turn
from practice.errors import GenerationFailure, InputValidationFailure, InvalidSessionState, PracticeError
from practice.evaluator.evaluation import generate_evaluation
from practice.scenarios import get_scenario, pick_objective

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = float(os.getenv("LLM_TIMEOUT_SECONDS", "30"))

FALLBACK_REPLY = DialogueMessage(
    role="model",
    content="متاسفم، مشکلی پیش آمد.",
    finglish="Motasefam, moshkeli pish amad.",
)


class TurnOutcome(BaseModel):
    reply: DialogueMessage
    objective_met: bool
    evaluation: Optional[Evaluation] = None

    @property
    def is_complete(self) -> bool:
        return self.evaluation is not None


class ConversationOrchestrator:
    def __init__(
        self,
        turn_generator: Callable = generate_turn,
        evaluation_generator: Callable = generate_evaluation,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.turn_generator = turn_generator
        self.evaluation_generator = evaluation_generator
        self.timeout = timeout

    # ================= SETUP =================
    def start_session(
        self,
        scenario_id: str,
        vocabulary: List[str],
        rng: Optional[random.Random] = None,
    ) -> PracticeSession:
        scenario = get_scenario(scenario_id)
        if scenario is None:
            raise InputValidationFailure(f"Unknown scenario '{scenario_id}'")

        variant = pick_objective(scenario, rng)
        logger.info(f"Starting '{scenario_id}' session, objective: {variant.objective}")

        return PracticeSession(
            session_id=uuid.uuid4().hex,
            scenario_id=scenario.id,
            persona=scenario.persona,
            intro=variant.intro,
            objective=variant.objective,
            opening_message=variant.opening_message,
            vocabulary=list(vocabulary),
        )

    def begin(self, session: PracticeSession) -> PracticeSession:
        self._require(session, PracticeStatus.NOT_STARTED, "begin")
        session.transcript = [session.opening_message]
        session.evaluation = None
        session.objective_met = False
        self._set_status(session, PracticeStatus.ACTIVE)
        return session

    # ================= TURNS =================
    async def send_message(self, session: PracticeSession, text: str) -> TurnOutcome:
        self._require(session, PracticeStatus.ACTIVE, "send a message")
        if not text or not text.strip():
            raise InputValidationFailure("message is empty")

        pending = session.transcript + [DialogueMessage(role="user", content=text.strip())]

        # transcript is only replaced once the reply exists, so a failed
        # turn leaves it exactly as it was
        result = await self._call(
            self.turn_generator,
            session.persona,
            session.objective,
            session.vocabulary,
            pending,
        )

        reply = result.to_message()
        session.transcript = pending + [reply]
        session.updated_at = datetime.utcnow()

        if not result.objective_met:
            return TurnOutcome(reply=reply, objective_met=False)

        logger.info(f"Objective met in session {session.session_id}")
        session.objective_met = True
        self._set_status(session, PracticeStatus.EVALUATING)
        evaluation = await self._evaluate(session)
        return TurnOutcome(reply=reply, objective_met=True, evaluation=evaluation)

    async def give_up(self, session: PracticeSession) -> Evaluation:
        self._require(session, PracticeStatus.ACTIVE, "give up")
        logger.info(f"User gave up session {session.session_id}")

        session.objective_met = False
        self._set_status(session, PracticeStatus.EVALUATING)
        try:
            return await self._evaluate(session)
        except Exception:
            self._set_status(session, PracticeStatus.ACTIVE)
            raise

    async def retry_evaluation(self, session: PracticeSession) -> Evaluation:
        """Re-run a post-success evaluation that failed."""
        self._require(session, PracticeStatus.EVALUATING, "retry the evaluation")
        return await self._evaluate(session)

    # ================= HELPERS =================
    async def _evaluate(self, session: PracticeSession) -> Evaluation:
        evaluation = await self._call(
            self.evaluation_generator,
            list(session.transcript),
            session.persona.name,
            session.objective,
            session.objective_met,
        )
        session.evaluation = evaluation
        self._set_status(session, PracticeStatus.COMPLETE)
        return evaluation

    async def _call(self, fn: Callable, *args):
        try:
            return await asyncio.wait_for(asyncio.to_thread(fn, *args), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"{getattr(fn, '__name__', fn)} timed out after {self.timeout}s")
            raise GenerationFailure(f"Generation timed out after {self.timeout}s") from e
        except PracticeError:
            raise
        except Exception as e:
            logger.exception(f"{getattr(fn, '__name__', fn)} failed")
            raise GenerationFailure(str(e)) from e

    @staticmethod
    def _require(session: PracticeSession, status: PracticeStatus, action: str) -> None:
        if session.status != status:
            raise InvalidSessionState(action, session.status.value)

    @staticmethod
    def _set_status(session: PracticeSession, status: PracticeStatus) -> None:
        session.status = status
        session.updated_at = datetime.utcnow()

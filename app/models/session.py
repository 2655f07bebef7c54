# backend/app/models/session.py

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional
from datetime import datetime
from enum import Enum


class Persona(BaseModel):
    """
    The character the AI plays in a practice scenario.
    name: e.g. "Alireza"
    role: e.g. "a friendly waiter"
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    role: str = Field(min_length=1)


class DialogueMessage(BaseModel):
    """
    A single turn in the practice transcript.
    role: user | model
    content: Farsi script (or whatever mix the learner typed)
    finglish: transliteration, only set on model turns
    """
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "model"]
    content: str
    finglish: Optional[str] = None


class FeedbackOnly(BaseModel):
    feedback: str


class ScoredFeedback(BaseModel):
    score: int = Field(ge=1, le=5)
    feedback: str


class Evaluation(BaseModel):
    """
    Post-session evaluation. formality and grammar are scored 1-5,
    the other dimensions are feedback only.
    """
    objective: FeedbackOnly
    formality: ScoredFeedback
    grammar: ScoredFeedback
    taarof: FeedbackOnly
    overall: FeedbackOnly


class PracticeStatus(str, Enum):
    NOT_STARTED = "not_started"
    ACTIVE = "active"
    EVALUATING = "evaluating"
    COMPLETE = "complete"


class PracticeSession(BaseModel):
    session_id: str
    scenario_id: str
    persona: Persona
    intro: str
    objective: str
    opening_message: DialogueMessage
    transcript: List[DialogueMessage] = Field(default_factory=list)
    vocabulary: List[str] = Field(default_factory=list)
    status: PracticeStatus = PracticeStatus.NOT_STARTED
    objective_met: bool = False
    evaluation: Optional[Evaluation] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class PracticeHistory(BaseModel):
    session_id: str
    scenario_id: str
    persona: Persona
    objective: str

    transcript: List[DialogueMessage]
    objective_met: bool
    evaluation: Optional[Evaluation]

    duration_seconds: Optional[int]

    started_at: datetime
    ended_at: datetime

    created_at: datetime = Field(default_factory=datetime.utcnow)

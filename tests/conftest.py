import json
import time
from datetime import datetime
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.models.content import Category, Lesson, Tag
from app.models.session import Evaluation
from app.services.content_repository import get_content_repository, parse_content_docs
from app.services.session_store import get_session_store
from practice.dialogue.turn_generator import TurnResult
from practice.llm import groq_client
from practice.orchestrator import ConversationOrchestrator


EVALUATION_JSON = {
    "objective": {"feedback": "You ordered a main course and a drink."},
    "formality": {"score": 4, "feedback": "Use 'lotfan' when ordering."},
    "grammar": {"score": 5, "feedback": "No errors, well done."},
    "taarof": {"feedback": "No taarof occurred."},
    "overall": {"feedback": "Great job!"},
}


def make_evaluation() -> Evaluation:
    return Evaluation.model_validate(EVALUATION_JSON)


# ================= LLM STUB =================
class StubCompletions:
    def __init__(self, responder):
        self.responder = responder
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        content = self.responder(kwargs)
        if isinstance(content, Exception):
            raise content
        if isinstance(content, dict):
            content = json.dumps(content, ensure_ascii=False)
        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class StubGroq:
    def __init__(self, responder):
        self.completions = StubCompletions(responder)
        self.chat = SimpleNamespace(completions=self.completions)


@pytest.fixture
def stub_llm():
    """Install a stub Groq client; call it with a responder(kwargs) -> str | dict | Exception."""
    installed = []

    def install(responder):
        stub = StubGroq(responder)
        groq_client.set_client(stub)
        installed.append(stub)
        return stub.completions

    yield install
    groq_client.set_client(None)


# ================= GENERATOR FAKES =================
class ScriptedGenerators:
    """
    Turn generator decides objectiveMet from the last user message only:
    met when it mentions every keyword in `required`.
    """

    def __init__(self, required=("kabab", "doogh")):
        self.required = required
        self.turn_calls = []
        self.evaluation_calls = []
        self.fail_turn = False
        self.fail_evaluation = False
        self.delay = 0

    def turn(self, persona, objective, vocabulary, transcript):
        self.turn_calls.append(list(transcript))
        time.sleep(self.delay)
        if self.fail_turn:
            raise RuntimeError("turn generator exploded")
        last = transcript[-1].content.lower()
        met = all(word in last for word in self.required)
        if met:
            return TurnResult(farsi="نوش جان!", finglish="Noosh-e jaan!", objectiveMet=True)
        return TurnResult(farsi="چی میل دارید؟", finglish="Chi meyl daarid?", objectiveMet=False)

    def evaluate(self, transcript, persona_name, objective, objective_met):
        self.evaluation_calls.append(
            {
                "transcript": list(transcript),
                "persona_name": persona_name,
                "objective": objective,
                "objective_met": objective_met,
            }
        )
        time.sleep(self.delay)
        if self.fail_evaluation:
            from practice.errors import GenerationFailure
            raise GenerationFailure("no structured output")
        return make_evaluation()


@pytest.fixture
def generators():
    return ScriptedGenerators()


@pytest.fixture
def orchestrator(generators):
    return ConversationOrchestrator(
        turn_generator=generators.turn,
        evaluation_generator=generators.evaluate,
        timeout=5,
    )


# ================= STORES =================
class InMemorySessionStore:
    def __init__(self):
        self.sessions = {}
        self.archived = {}
        self.busy = set()

    async def get(self, session_id):
        session = self.sessions.get(session_id)
        return session.model_copy(deep=True) if session else None

    async def claim(self, session_id, status):
        session = self.sessions.get(session_id)
        if session is None or session.status != status or session_id in self.busy:
            return None
        self.busy.add(session_id)
        return session.model_copy(deep=True)

    async def save(self, session):
        self.sessions[session.session_id] = session.model_copy(deep=True)
        self.busy.discard(session.session_id)

    async def archive(self, record):
        self.archived[record.session_id] = record

    async def list_history(self, limit=100):
        return list(self.archived.values())[:limit]


CONTENT_DOCS = [
    {"_id": "w1", "type": "word", "english": "Water", "finglish": "Aab", "farsi": "آب",
     "category": "c1", "tags": ["t1"], "status": "published", "audio_url": "https://audio/aab.mp3",
     "created_at": datetime(2024, 1, 3)},
    {"_id": "w2", "type": "word", "english": "Bread", "finglish": "Naan", "farsi": "نان",
     "category": "c1", "tags": ["t2"], "status": "published", "lesson_ids": ["l1"],
     "created_at": datetime(2024, 1, 2)},
    {"_id": "p1", "type": "phrase", "english": "Thank you", "finglish": "Mersi", "farsi": "مرسی",
     "tags": ["t1"], "status": "published", "created_at": datetime(2024, 1, 1)},
    {"_id": "v1", "type": "verb", "english": "To go", "finglish": "Raftan", "farsi": "رفتن",
     "category": "c2", "conjugations": [], "status": "published", "lesson_ids": ["l1"]},
    {"_id": "n1", "type": "cultural_note", "title": "Taarof basics", "content": "...",
     "status": "published"},
    {"_id": "d1", "type": "dialogue", "title": "At the bakery",
     "dialogue": [{"english": "Hi", "finglish": "Salaam", "farsi": "سلام"}], "status": "published"},
    {"_id": "bad", "type": "word", "english": "Missing fields", "status": "published"},
]

CATEGORIES = [Category(id="c1", name="Food"), Category(id="c2", name="Verbs")]
TAGS = [Tag(id="t1", name="basics"), Tag(id="t2", name="bakery")]
LESSONS = [
    Lesson(id="l1", name="Lesson one", date=datetime(2024, 2, 1), notes="first"),
    Lesson(id="l2", name="Lesson two", date=datetime(2024, 3, 1)),
]


class InMemoryContentRepository:
    def __init__(self, docs=None):
        self.docs = CONTENT_DOCS if docs is None else docs

    def _items(self, docs):
        return parse_content_docs(
            docs,
            {c.id: c.name for c in CATEGORIES},
            {t.id: t.name for t in TAGS},
        )

    async def get_categories(self):
        return CATEGORIES

    async def get_tags(self):
        return TAGS

    async def get_published_items(self, search_query=None, category=None, tag=None):
        from app.services.content_repository import filter_items

        docs = [d for d in self.docs if d.get("status") == "published"]
        if category:
            docs = [d for d in docs if d.get("category") == category]
        if tag:
            docs = [d for d in docs if tag in d.get("tags", [])]
        return filter_items(self._items(docs), search_query)

    async def get_lessons(self):
        return sorted(LESSONS, key=lambda l: l.date, reverse=True)

    async def get_lesson(self, lesson_id):
        return next((l for l in LESSONS if l.id == lesson_id), None)

    async def get_lesson_items(self, lesson_id):
        return self._items([d for d in self.docs if lesson_id in d.get("lesson_ids", [])])


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest.fixture
def content_repo():
    return InMemoryContentRepository()


@pytest.fixture
def client(session_store, content_repo, orchestrator):
    from main import app
    from app.api.practice import get_orchestrator

    app.dependency_overrides[get_session_store] = lambda: session_store
    app.dependency_overrides[get_content_repository] = lambda: content_repo
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()

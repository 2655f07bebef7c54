# app/services/session_store.py
from typing import Any, Dict, List, Optional

from pymongo import ReturnDocument

from app.database.mongodb import practice_history_collection, practice_sessions_collection
from app.models.session import PracticeHistory, PracticeSession, PracticeStatus


def session_to_doc(session: PracticeSession) -> Dict[str, Any]:
    doc = session.model_dump()
    doc["status"] = session.status.value
    doc["_id"] = session.session_id
    doc["busy"] = False
    return doc


def doc_to_session(doc: Dict[str, Any]) -> PracticeSession:
    data = {k: v for k, v in doc.items() if k not in ("_id", "busy")}
    return PracticeSession.model_validate(data)


class MongoSessionStore:
    def __init__(self, sessions=practice_sessions_collection, history=practice_history_collection):
        self.sessions = sessions
        self.history = history

    async def get(self, session_id: str) -> Optional[PracticeSession]:
        doc = await self.sessions.find_one({"_id": session_id})
        return doc_to_session(doc) if doc else None

    async def claim(self, session_id: str, status: PracticeStatus) -> Optional[PracticeSession]:
        """
        Mark a session busy if it is in `status` and no other request holds it.
        Returns None when the claim fails. The next save() releases it.
        """
        doc = await self.sessions.find_one_and_update(
            {"_id": session_id, "status": status.value, "busy": {"$ne": True}},
            {"$set": {"busy": True}},
            return_document=ReturnDocument.AFTER,
        )
        return doc_to_session(doc) if doc else None

    async def save(self, session: PracticeSession) -> None:
        await self.sessions.replace_one({"_id": session.session_id}, session_to_doc(session), upsert=True)

    async def archive(self, record: PracticeHistory) -> None:
        doc = record.model_dump()
        doc["_id"] = record.session_id
        await self.history.replace_one({"_id": record.session_id}, doc, upsert=True)

    async def list_history(self, limit: int = 100) -> List[PracticeHistory]:
        docs = await self.history.find().sort("ended_at", -1).to_list(length=limit)
        return [PracticeHistory.model_validate({k: v for k, v in d.items() if k != "_id"}) for d in docs]


def get_session_store() -> MongoSessionStore:
    return MongoSessionStore()

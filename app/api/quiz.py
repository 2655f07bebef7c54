from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel
from typing import List

from app.models.content import ContentItem
from app.services.content_repository import ContentRepository, get_content_repository
from app.services.quiz import QuizAnswer, QuizConfig, grade_answer, select_questions, summarize

router = APIRouter(prefix="/quiz", tags=["Quiz"])


class GradeRequest(BaseModel):
    config: QuizConfig
    question: ContentItem
    answer: str
    used_hint: bool = False


class SummaryRequest(BaseModel):
    answers: List[QuizAnswer]


@router.post("/start")
async def start_quiz(config: QuizConfig, repo: ContentRepository = Depends(get_content_repository)):
    items = await repo.get_published_items()
    questions = select_questions(items, config)
    if not questions:
        raise HTTPException(404, "No questions match this quiz configuration")
    return {"config": config.model_dump(), "questions": [q.model_dump() for q in questions]}


@router.post("/grade")
async def grade(req: GradeRequest):
    try:
        result = grade_answer(req.question, req.answer, req.config, used_hint=req.used_hint)
    except ValueError as e:
        raise HTTPException(422, str(e))
    return result.model_dump()


@router.post("/summary")
async def summary(req: SummaryRequest):
    return summarize(req.answers).model_dump()

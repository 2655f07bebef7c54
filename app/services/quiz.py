# app/services/quiz.py
"""
Flashcard quiz engine.

Quiz state lives with the caller: the server builds a question list and
grades single answers, it does not remember quizzes between requests.
"""
import random
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

from app.models.content import TRANSLATABLE_TYPES, ContentItem


class QuizConfig(BaseModel):
    question_count: Union[int, Literal["all"]] = 10
    tags: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    direction: Literal["en-fa", "fa-en"] = "en-fa"
    answer_format: Optional[Literal["farsi", "finglish"]] = "farsi"
    question_format: Literal["reading", "listening"] = "reading"


class QuizAnswer(BaseModel):
    question_id: str
    user_answer: str
    expected_answer: str
    is_correct: bool
    used_hint: bool = False


class QuizSummary(BaseModel):
    total: int
    correct: int
    hinted: int
    score_percent: int


def _matches_filters(item: ContentItem, config: QuizConfig) -> bool:
    if config.tags and not set(config.tags) & set(item.tags):
        return False
    if config.categories and getattr(item, "category", None) not in config.categories:
        return False
    return True


def select_questions(
    items: List[ContentItem],
    config: QuizConfig,
    rng: Optional[random.Random] = None,
) -> List[ContentItem]:
    rng = rng or random
    selected = [i for i in items if i.type in TRANSLATABLE_TYPES and _matches_filters(i, config)]

    if config.question_format == "listening":
        selected = [i for i in selected if i.audio_url or i.recording_id]

    rng.shuffle(selected)

    if config.question_count != "all":
        selected = selected[: config.question_count]
    return selected


def expected_answer(item: ContentItem, config: QuizConfig) -> str:
    if config.direction == "en-fa":
        return item.finglish if config.answer_format == "finglish" else item.farsi
    return item.english


def grade_answer(item: ContentItem, answer: str, config: QuizConfig, used_hint: bool = False) -> QuizAnswer:
    if item.type not in TRANSLATABLE_TYPES:
        raise ValueError(f"Item {item.id} of type '{item.type}' cannot be quizzed")

    expected = expected_answer(item, config)
    is_correct = answer.strip().lower() == expected.strip().lower()
    return QuizAnswer(
        question_id=item.id,
        user_answer=answer,
        expected_answer=expected,
        is_correct=is_correct,
        used_hint=used_hint,
    )


def summarize(answers: List[QuizAnswer]) -> QuizSummary:
    total = len(answers)
    correct = sum(1 for a in answers if a.is_correct)
    hinted = sum(1 for a in answers if a.used_hint)
    score = round(correct * 100 / total) if total else 0
    return QuizSummary(total=total, correct=correct, hinted=hinted, score_percent=score)

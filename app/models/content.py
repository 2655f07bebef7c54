# backend/app/models/content.py

from pydantic import BaseModel, Field
from typing import Annotated, List, Literal, Optional, Union
from datetime import datetime


class Category(BaseModel):
    id: str
    name: str


class Tag(BaseModel):
    id: str
    name: str


class Lesson(BaseModel):
    id: str
    name: str
    date: datetime
    notes: Optional[str] = ""


class VerbConjugation(BaseModel):
    person: Optional[int] = None   # 1, 2, 3 or None for imperative
    formal: bool = False
    plural: bool = False
    tense: str
    farsi: str
    english: str
    finglish: str
    stem: Optional[str] = None


class DialogueLine(BaseModel):
    speaker: Optional[str] = None
    english: str
    finglish: str
    farsi: str


class BaseContentItem(BaseModel):
    id: str
    created_at: datetime = Field(default_factory=datetime.utcnow)
    tags: List[str] = Field(default_factory=list)        # tag ids
    tag_names: List[str] = Field(default_factory=list)   # resolved names
    status: Literal["draft", "published"] = "published"
    lesson_ids: List[str] = Field(default_factory=list)


class TranslatableItem(BaseContentItem):
    english: str
    finglish: str
    farsi: str
    audio_url: Optional[str] = None
    recording_id: Optional[str] = None


class Word(TranslatableItem):
    type: Literal["word"]
    category: str = ""
    category_name: Optional[str] = None
    notes: Optional[str] = None


class Phrase(TranslatableItem):
    type: Literal["phrase"]
    notes: Optional[str] = None


class Verb(TranslatableItem):
    type: Literal["verb"]
    conjugations: List[VerbConjugation] = Field(default_factory=list)
    category: str = ""
    category_name: Optional[str] = None
    notes: Optional[str] = None


class CulturalNote(BaseContentItem):
    type: Literal["cultural_note"]
    title: str
    content: str


class Dialogue(BaseContentItem):
    type: Literal["dialogue"]
    title: str
    dialogue: List[DialogueLine]
    notes: Optional[str] = None


ContentItem = Annotated[
    Union[Word, Phrase, Verb, CulturalNote, Dialogue],
    Field(discriminator="type"),
]

TRANSLATABLE_TYPES = ("word", "phrase", "verb")

# app/services/vocabulary.py
from typing import List

from app.models.content import TRANSLATABLE_TYPES, ContentItem
from app.services.content_repository import ContentRepository


def format_vocabulary_entry(item: ContentItem) -> str:
    return f"English: {item.english} - Farsi: {item.farsi} - Finglish: {item.finglish}"


def build_vocabulary(items: List[ContentItem]) -> List[str]:
    """Words, phrases and verbs only; notes and dialogues carry no single term."""
    return [format_vocabulary_entry(i) for i in items if i.type in TRANSLATABLE_TYPES]


async def list_vocabulary(repo: ContentRepository) -> List[str]:
    items = await repo.get_published_items()
    return build_vocabulary(items)

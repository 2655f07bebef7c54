# app/services/content_repository.py
import logging
from typing import Any, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from app.database.mongodb import (
    categories_collection,
    content_collection,
    lessons_collection,
    tags_collection,
)
from app.models.content import Category, ContentItem, Lesson, Tag

logger = logging.getLogger(__name__)

content_item_adapter = TypeAdapter(ContentItem)


def parse_content_docs(
    docs: List[Dict[str, Any]],
    category_map: Dict[str, str],
    tag_map: Dict[str, str],
) -> List[ContentItem]:
    """Attach ids and resolved category/tag names; documents that fail validation are skipped."""
    items = []
    for doc in docs:
        data = {k: v for k, v in doc.items() if k != "_id"}
        data["id"] = str(doc.get("_id", data.get("id", "")))
        tag_ids = data.get("tags") or []
        data["tag_names"] = [tag_map[t] for t in tag_ids if t in tag_map]
        if "category" in data:
            data["category_name"] = category_map.get(data["category"], "")
        try:
            items.append(content_item_adapter.validate_python(data))
        except ValidationError as e:
            logger.warning(f"Skipping invalid content document {data['id']}: {e.error_count()} errors")
    return items


def _lesson_from_doc(doc: Dict[str, Any]) -> Lesson:
    data = {k: v for k, v in doc.items() if k not in ("_id", "id")}
    return Lesson(id=str(doc["_id"]), **data)


def filter_items(items: List[ContentItem], search_query: Optional[str]) -> List[ContentItem]:
    if not search_query:
        return items
    q = search_query.lower()
    matched = []
    for item in items:
        if hasattr(item, "english"):
            if q in item.english.lower() or q in item.finglish.lower() or q in item.farsi.lower():
                matched.append(item)
        elif hasattr(item, "title"):
            if q in item.title.lower():
                matched.append(item)
    return matched


class ContentRepository:
    """Read-only access to the content library."""

    def __init__(
        self,
        content=content_collection,
        categories=categories_collection,
        tags=tags_collection,
        lessons=lessons_collection,
    ):
        self.content = content
        self.categories = categories
        self.tags = tags
        self.lessons = lessons

    async def get_categories(self) -> List[Category]:
        docs = await self.categories.find().sort("name", 1).to_list(length=None)
        return [Category(id=str(d["_id"]), name=d["name"]) for d in docs]

    async def get_tags(self) -> List[Tag]:
        docs = await self.tags.find().sort("name", 1).to_list(length=None)
        return [Tag(id=str(d["_id"]), name=d["name"]) for d in docs]

    async def _lookup_maps(self):
        categories = await self.get_categories()
        tags = await self.get_tags()
        return {c.id: c.name for c in categories}, {t.id: t.name for t in tags}

    async def get_published_items(
        self,
        search_query: Optional[str] = None,
        category: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> List[ContentItem]:
        query: Dict[str, Any] = {"status": "published"}
        if category:
            query["category"] = category
        if tag:
            query["tags"] = tag

        category_map, tag_map = await self._lookup_maps()
        docs = await self.content.find(query).sort("created_at", -1).to_list(length=None)
        return filter_items(parse_content_docs(docs, category_map, tag_map), search_query)

    async def get_lessons(self) -> List[Lesson]:
        docs = await self.lessons.find().sort("date", -1).to_list(length=None)
        return [_lesson_from_doc(d) for d in docs]

    async def get_lesson(self, lesson_id: str) -> Optional[Lesson]:
        doc = await self.lessons.find_one({"_id": lesson_id})
        if not doc:
            return None
        return _lesson_from_doc(doc)

    async def get_lesson_items(self, lesson_id: str) -> List[ContentItem]:
        category_map, tag_map = await self._lookup_maps()
        docs = await self.content.find({"lesson_ids": lesson_id}).sort("created_at", -1).to_list(length=None)
        return parse_content_docs(docs, category_map, tag_map)


def get_content_repository() -> ContentRepository:
    return ContentRepository()

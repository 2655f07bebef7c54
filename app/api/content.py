from fastapi import APIRouter, HTTPException, Depends
from typing import Optional

from app.services.content_repository import ContentRepository, get_content_repository
from app.services.vocabulary import list_vocabulary

router = APIRouter(tags=["Content"])

# =========================
# PUBLISHED CONTENT
# =========================
@router.get("/content")
async def get_content(
    q: Optional[str] = None,
    category: Optional[str] = None,
    tag: Optional[str] = None,
    repo: ContentRepository = Depends(get_content_repository),
):
    items = await repo.get_published_items(search_query=q, category=category, tag=tag)
    return [item.model_dump() for item in items]


@router.get("/vocabulary")
async def get_vocabulary(repo: ContentRepository = Depends(get_content_repository)):
    return await list_vocabulary(repo)


@router.get("/categories")
async def get_categories(repo: ContentRepository = Depends(get_content_repository)):
    return [c.model_dump() for c in await repo.get_categories()]


@router.get("/tags")
async def get_tags(repo: ContentRepository = Depends(get_content_repository)):
    return [t.model_dump() for t in await repo.get_tags()]


# =========================
# LESSONS
# =========================
@router.get("/lessons")
async def get_lessons(repo: ContentRepository = Depends(get_content_repository)):
    return [lesson.model_dump() for lesson in await repo.get_lessons()]


@router.get("/lessons/{lesson_id}")
async def get_lesson(lesson_id: str, repo: ContentRepository = Depends(get_content_repository)):
    # Clean the ID: remove accidental quotes from URL param
    clean_id = lesson_id.strip("'\"")
    lesson = await repo.get_lesson(clean_id)
    if not lesson:
        raise HTTPException(status_code=404, detail="Lesson not found")
    return lesson.model_dump()


@router.get("/lessons/{lesson_id}/items")
async def get_lesson_items(lesson_id: str, repo: ContentRepository = Depends(get_content_repository)):
    clean_id = lesson_id.strip("'\"")
    items = await repo.get_lesson_items(clean_id)
    return [item.model_dump() for item in items]

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import List
import asyncio
import logging
import os

logger = logging.getLogger(__name__)

LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT_SECONDS", "30"))

from practice.authoring import generate_conjugations, generate_farsi, suggest_category
from practice.errors import GenerationFailure, InputValidationFailure

router = APIRouter(prefix="/ai", tags=["Authoring"])

# ================= MODELS =================
class FarsiRequest(BaseModel):
    english: str
    finglish: str

class ConjugationRequest(BaseModel):
    verb_english: str
    verb_finglish: str

class CategoryRequest(BaseModel):
    english: str
    available_categories: List[str]

# ================= HELPERS =================
async def run_generation(fn, *args):
    try:
        return await asyncio.wait_for(asyncio.to_thread(fn, *args), timeout=LLM_TIMEOUT)
    except asyncio.TimeoutError:
        logger.error(f"❌ {fn.__name__} timed out after {LLM_TIMEOUT}s")
        raise HTTPException(502, f"Generation timed out after {LLM_TIMEOUT}s")
    except InputValidationFailure as e:
        raise HTTPException(422, str(e))
    except GenerationFailure as e:
        logger.error(f"❌ {fn.__name__} failed: {e}")
        raise HTTPException(502, str(e))

# ================= ENDPOINTS =================
@router.post("/farsi")
async def farsi(req: FarsiRequest):
    result = await run_generation(generate_farsi, req.english, req.finglish)
    return result.model_dump()

@router.post("/conjugations")
async def conjugations(req: ConjugationRequest):
    result = await run_generation(generate_conjugations, req.verb_english, req.verb_finglish)
    return result.model_dump()

@router.post("/category")
async def category(req: CategoryRequest):
    result = await run_generation(suggest_category, req.english, req.available_categories)
    return {"categoryName": result.category_name}

# practice/authoring.py
"""
LLM helpers used while writing content: Farsi script from English + Finglish,
conversational verb conjugations, and category suggestions.
"""
import logging
from typing import List

from pydantic import BaseModel, ValidationError

from app.models.content import VerbConjugation
from practice.errors import GenerationFailure, InputValidationFailure
from practice.llm.groq_client import call_llm_json

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are an expert in Farsi linguistics. Reply only with JSON."

CONJUGATION_TENSES = [
    "Present Simple",
    "Past Simple",
    "Present Continuous",
    "Future",
    "Present Subjunctive",
    "Imperative",
]

FALLBACK_CATEGORY = "Other"


class FarsiTranslation(BaseModel):
    farsi: str


class ConjugationSet(BaseModel):
    conjugations: List[VerbConjugation]


class CategorySuggestion(BaseModel):
    category_name: str


def _require(**fields: str) -> None:
    for name, value in fields.items():
        if not value or not value.strip():
            raise InputValidationFailure(f"{name} is required")


def generate_farsi(english: str, finglish: str) -> FarsiTranslation:
    _require(english=english, finglish=finglish)

    prompt = f"""
Translate the following English text and Finglish transliteration into Farsi script.

English: {english}
Finglish: {finglish}

Return ONLY this JSON object:
{{ "farsi": "" }}
"""
    raw = call_llm_json(prompt, system=SYSTEM_PROMPT, temperature=0, max_tokens=200)
    try:
        result = FarsiTranslation.model_validate(raw)
    except ValidationError as e:
        raise GenerationFailure("Failed to generate Farsi translation.") from e
    if not result.farsi.strip():
        raise GenerationFailure("Failed to generate Farsi translation.")
    return result


def generate_conjugations(verb_english: str, verb_finglish: str) -> ConjugationSet:
    _require(verb_english=verb_english, verb_finglish=verb_finglish)

    tenses = "\n".join(f"- {t}" for t in CONJUGATION_TENSES)
    prompt = f"""
You specialize in the modern, conversational Tehrani dialect. Given the infinitive
form of a Farsi verb in English and Finglish, generate a comprehensive list of its
conjugations.

IMPORTANT: conjugations must be informal and conversational, not formal or written style.
- Use "man mikhaam" not "man mikhaaham".
- Use "shoma mikhaain" not "shoma mikhaahid".
- Prefer suffixes like '-in' instead of '-id'.

Verb (English): {verb_english}
Verb (Finglish): {verb_finglish}

Tenses (all persons, 1st/2nd/3rd singular and plural; imperative singular and plural only):
{tenses}

For each conjugation give: tense, person (1, 2, 3, or null for imperative), plural,
formal (true for 2nd person plural, false otherwise), farsi, english, finglish, and
stem (present or past stem as appropriate).

Return ONLY this JSON object:
{{ "conjugations": [ {{ "tense": "", "person": 1, "plural": false, "formal": false,
   "farsi": "", "english": "", "finglish": "", "stem": "" }} ] }}
"""
    logger.info(f"Generating conjugations for '{verb_english}'")
    raw = call_llm_json(prompt, system=SYSTEM_PROMPT, temperature=0.2, max_tokens=4000)
    try:
        result = ConjugationSet.model_validate(raw)
    except ValidationError as e:
        raise GenerationFailure("Failed to generate conjugations.") from e
    if not result.conjugations:
        raise GenerationFailure("Failed to generate conjugations.")
    return result


def suggest_category(english: str, available_categories: List[str]) -> CategorySuggestion:
    _require(english=english)
    if not available_categories:
        return CategorySuggestion(category_name=FALLBACK_CATEGORY)

    options = "\n".join(f"- {c}" for c in available_categories)
    prompt = f"""
Categorize an English word or phrase into one of the following available categories.

Available Categories:
{options}

Word/Phrase to categorize: "{english}"

If none fit well, choose '{FALLBACK_CATEGORY}'.
Return ONLY this JSON object:
{{ "categoryName": "" }}
"""
    raw = call_llm_json(prompt, system=SYSTEM_PROMPT, temperature=0, max_tokens=100)
    name = str(raw.get("categoryName") or "").strip()
    if not name:
        raise GenerationFailure("Failed to generate a category suggestion.")

    # normalise casing against the offered list
    by_lower = {c.lower(): c for c in available_categories}
    return CategorySuggestion(category_name=by_lower.get(name.lower(), FALLBACK_CATEGORY))

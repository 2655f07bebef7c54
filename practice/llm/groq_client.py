# llm/groq_client.py
import os
import json
import logging
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from groq import Groq

from practice.errors import GenerationFailure

load_dotenv()
logger = logging.getLogger(__name__)

DEFAULT_MODEL = os.getenv("GROQ_MODEL", "llama-3.1-8b-instant")

_client: Optional[Groq] = None


def get_client() -> Groq:
    global _client
    if _client is None:
        _client = Groq(api_key=os.getenv("GROQ_API_KEY"))
    return _client


def set_client(client) -> None:
    """Swap the Groq client (tests pass a stub exposing chat.completions.create)."""
    global _client
    _client = client


def call_llm_json(
    prompt: str,
    system: str,
    temperature: float = 0.2,
    max_tokens: int = 1200,
    model: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Run one chat completion in JSON mode and return the decoded object.
    Raises GenerationFailure on transport errors or when the reply is not a JSON object.
    """
    try:
        res = get_client().chat.completions.create(
            model=model or DEFAULT_MODEL,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            response_format={"type": "json_object"},
            max_tokens=max_tokens,
            temperature=temperature,
        )
    except Exception as e:
        logger.exception("LLM call failed")
        raise GenerationFailure(f"LLM call failed: {e}") from e

    message = res.choices[0].message.content if res.choices else None
    if not message:
        raise GenerationFailure("LLM returned an empty response")

    logger.info(f"LLM response received, content length={len(message)}")

    try:
        data = json.loads(message)
    except json.JSONDecodeError as e:
        raise GenerationFailure(f"LLM did not return valid JSON: {message[:300]}") from e

    if not isinstance(data, dict):
        raise GenerationFailure("LLM returned JSON that is not an object")
    return data

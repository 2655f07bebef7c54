# dialogue/turn_generator.py
import logging
from typing import List

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from app.models.session import DialogueMessage, Persona
from practice.dialogue.prompt_builder import build_turn_prompt
from practice.errors import GenerationFailure, InputValidationFailure
from practice.llm.groq_client import call_llm_json

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a Farsi conversation partner. Stay in character and reply only with JSON."


class TurnResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    farsi: str = Field(min_length=1)
    finglish: str = ""
    objective_met: bool = Field(alias="objectiveMet")

    def to_message(self) -> DialogueMessage:
        return DialogueMessage(role="model", content=self.farsi, finglish=self.finglish)


def validate_turn_input(persona, objective: str, transcript: List[DialogueMessage]) -> None:
    if not isinstance(persona, Persona):
        raise InputValidationFailure("persona must be a Persona")
    if not objective or not objective.strip():
        raise InputValidationFailure("objective is empty")
    if not transcript:
        raise InputValidationFailure("transcript is empty")
    if transcript[-1].role != "user":
        raise InputValidationFailure("last transcript message must come from the user")


def generate_turn(
    persona: Persona,
    objective: str,
    vocabulary: List[str],
    transcript: List[DialogueMessage],
) -> TurnResult:
    """
    Produce the next in-character reply and decide whether the user's latest
    message met the objective.
    """
    validate_turn_input(persona, objective, transcript)

    prompt = build_turn_prompt(persona, objective, vocabulary, transcript)
    logger.info(f"Generating turn for persona={persona.name}, history length={len(transcript)}")

    raw = call_llm_json(prompt, system=SYSTEM_PROMPT, temperature=0.4, max_tokens=600)

    try:
        result = TurnResult.model_validate(raw)
    except ValidationError as e:
        raise GenerationFailure(f"Failed to generate a conversation response: {e}") from e

    logger.info(f"Turn generated, objectiveMet={result.objective_met}")
    return result

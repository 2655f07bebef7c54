import logging
from typing import List

from pydantic import ValidationError

from app.models.session import DialogueMessage, Evaluation
from practice.errors import GenerationFailure, InputValidationFailure
from practice.evaluator.prompt_builder import build_evaluation_prompt
from practice.evaluator.rubric import RUBRIC_TEXT
from practice.llm.groq_client import call_llm_json

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a strict but encouraging Farsi tutor. Evaluate ONLY the learner."


def generate_evaluation(
    transcript: List[DialogueMessage],
    persona_name: str,
    objective: str,
    objective_met: bool,
) -> Evaluation:
    if not transcript:
        raise InputValidationFailure("transcript is empty")
    if not persona_name or not persona_name.strip():
        raise InputValidationFailure("persona name is empty")
    if not objective or not objective.strip():
        raise InputValidationFailure("objective is empty")

    prompt = build_evaluation_prompt(
        transcript=transcript,
        persona_name=persona_name,
        objective=objective,
        objective_met=objective_met,
        rubric_text=RUBRIC_TEXT,
    )

    logger.info(f"🔍 Evaluating conversation: {len(transcript)} messages, objectiveMet={objective_met}")

    raw_eval = call_llm_json(prompt, system=SYSTEM_PROMPT, temperature=0, max_tokens=1500)

    try:
        evaluation = Evaluation.model_validate(raw_eval)
    except ValidationError as e:
        logger.warning(f"❌ Evaluator output did not match schema: {raw_eval}")
        raise GenerationFailure(f"Failed to generate an evaluation: {e}") from e

    logger.info(
        f"✅ Evaluation ready: formality={evaluation.formality.score}, grammar={evaluation.grammar.score}"
    )
    return evaluation

from typing import List

from app.models.session import DialogueMessage
from practice.dialogue.prompt_builder import render_history


def build_evaluation_prompt(
    transcript: List[DialogueMessage],
    persona_name: str,
    objective: str,
    objective_met: bool,
    rubric_text: str,
):
    return f"""
You are a Farsi language teaching expert. The user is a student who has just
completed a practice conversation. Analyze the ENTIRE conversation and give a
detailed evaluation.

========================
CONTEXT
========================
- The user's objective was: {objective}
- The user's messages are the "User:" lines.
- Your persona in the conversation was '{persona_name}'.
- objectiveMet flag: {str(objective_met).lower()}

========================
RUBRIC DEFINITIONS
========================
{rubric_text}

========================
CONVERSATION
========================
{render_history(transcript, persona_name)}

========================
STRICT INSTRUCTIONS (READ CAREFULLY)
========================
- Evaluate ONLY the user.
- Fill EVERY field below. NEVER leave a dimension empty.
- "formality" and "grammar" scores are integers from 1 to 5.
- If a dimension's feedback contains a correction, its score CANNOT be 5.
- Do NOT write explanations outside JSON.
- Do NOT use markdown.

========================
REQUIRED JSON OUTPUT (EXACT FORMAT)
========================
{{
  "objective": {{ "feedback": "" }},
  "formality": {{ "score": 1, "feedback": "" }},
  "grammar": {{ "score": 1, "feedback": "" }},
  "taarof": {{ "feedback": "" }},
  "overall": {{ "feedback": "" }}
}}

RETURN ONLY THIS JSON OBJECT.
"""

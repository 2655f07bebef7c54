# tests/test_turn_generator.py

import pytest

from app.models.session import DialogueMessage, Persona
from practice.dialogue.prompt_builder import build_turn_prompt
from practice.dialogue.turn_generator import generate_turn
from practice.errors import GenerationFailure, InputValidationFailure

WAITER = Persona(name="Alireza", role="a friendly waiter")
OBJECTIVE = "Order a main course and a drink."
VOCAB = ["English: Water - Farsi: آب - Finglish: Aab"]
OPENING = DialogueMessage(role="model", content="سلام، خوش آمدید! چی میل دارید؟", finglish="Salaam, khosh amadid!")


def user(text):
    return DialogueMessage(role="user", content=text)


def last_user_line(prompt: str) -> str:
    history = prompt.split("CONVERSATION HISTORY")[1].split("STRICT INSTRUCTIONS")[0]
    return [line for line in history.splitlines() if line.startswith("User:")][-1]


def keyword_judge(kwargs):
    """Fake model: decides from the last user line in the prompt."""
    prompt = kwargs["messages"][-1]["content"]
    line = last_user_line(prompt).lower()
    met = "kabab" in line and "doogh" in line
    return {"farsi": "نوش جان!" if met else "دیگه چی؟", "finglish": "Noosh-e jaan!", "objectiveMet": met}


def test_valid_response_is_parsed(stub_llm):
    calls = stub_llm(lambda kw: {"farsi": "چشم", "finglish": "Chashm", "objectiveMet": False})

    result = generate_turn(WAITER, OBJECTIVE, VOCAB, [OPENING, user("salaam")])

    assert result.farsi == "چشم"
    assert result.finglish == "Chashm"
    assert result.objective_met is False
    assert result.to_message().role == "model"
    assert calls.calls[0]["response_format"] == {"type": "json_object"}


def test_explicit_order_meets_objective(stub_llm):
    stub_llm(keyword_judge)
    result = generate_turn(WAITER, OBJECTIVE, VOCAB, [OPENING, user("ye kabab va ye doogh lotfan")])
    assert result.objective_met is True


def test_greeting_does_not_meet_objective(stub_llm):
    stub_llm(keyword_judge)
    result = generate_turn(WAITER, OBJECTIVE, VOCAB, [OPENING, user("salaam agha")])
    assert result.objective_met is False


def test_decision_ignores_changes_to_earlier_messages(stub_llm):
    stub_llm(keyword_judge)
    latest = user("salaam, chetorin?")

    a = generate_turn(WAITER, OBJECTIVE, VOCAB, [OPENING, user("kabab va doogh"), OPENING, latest])
    b = generate_turn(WAITER, OBJECTIVE, VOCAB, [OPENING, user("hichi"), OPENING, latest])

    assert a.objective_met == b.objective_met is False


@pytest.mark.parametrize(
    "reply",
    [
        "not json at all",
        '{"farsi": "سلام"}',
        '{"farsi": "", "finglish": "", "objectiveMet": true}',
        '["farsi", "finglish"]',
        "",
    ],
)
def test_unusable_output_is_generation_failure(stub_llm, reply):
    stub_llm(lambda kw: reply)
    with pytest.raises(GenerationFailure):
        generate_turn(WAITER, OBJECTIVE, VOCAB, [OPENING, user("salaam")])


def test_transport_error_is_generation_failure(stub_llm):
    stub_llm(lambda kw: ConnectionError("groq unreachable"))
    with pytest.raises(GenerationFailure):
        generate_turn(WAITER, OBJECTIVE, VOCAB, [OPENING, user("salaam")])


@pytest.mark.parametrize(
    "persona, objective, transcript",
    [
        (WAITER, OBJECTIVE, []),
        (WAITER, OBJECTIVE, [OPENING]),
        (WAITER, "  ", [OPENING, user("salaam")]),
        ({"name": "Alireza"}, OBJECTIVE, [OPENING, user("salaam")]),
    ],
)
def test_malformed_input_rejected_before_llm_call(stub_llm, persona, objective, transcript):
    calls = stub_llm(lambda kw: {"farsi": "x", "finglish": "x", "objectiveMet": False})
    with pytest.raises(InputValidationFailure):
        generate_turn(persona, objective, VOCAB, transcript)
    assert calls.calls == []


def test_prompt_contains_persona_vocabulary_and_history():
    prompt = build_turn_prompt(WAITER, OBJECTIVE, VOCAB, [OPENING, user("salaam")])

    assert "Alireza, who is a friendly waiter" in prompt
    assert OBJECTIVE in prompt
    assert "- English: Water - Farsi: آب - Finglish: Aab" in prompt
    assert f"Alireza: {OPENING.content}\nUser: salaam" in prompt
    assert "'-in'" in prompt
    assert last_user_line(prompt) == "User: salaam"

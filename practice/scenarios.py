# practice/scenarios.py
"""
Static roleplay scenarios for conversation practice.

Each scenario has one persona and a few objective variants. A variant is
picked uniformly at random when a practice session is started.
"""
import random
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from app.models.session import DialogueMessage, Persona


class ObjectiveVariant(BaseModel):
    model_config = ConfigDict(frozen=True)

    intro: str
    objective: str
    opening_message: DialogueMessage


class Scenario(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    persona: Persona
    objectives: List[ObjectiveVariant]


def _opening(farsi: str, finglish: str) -> DialogueMessage:
    return DialogueMessage(role="model", content=farsi, finglish=finglish)


SCENARIOS: Dict[str, Scenario] = {
    "restaurant": Scenario(
        id="restaurant",
        title="At the Restaurant",
        description="Practice ordering food, asking for the bill, and interacting with a waiter.",
        persona=Persona(name="Alireza", role="a friendly waiter"),
        objectives=[
            ObjectiveVariant(
                intro="You've just been seated at a restaurant. The waiter, Alireza, approaches your table.",
                objective="You are very hungry. Greet the waiter and order a main course and a drink for yourself.",
                opening_message=_opening("سلام، خوش آمدید! چی میل دارید؟", "Salaam, khosh amadid! Chi meyl daarid?"),
            ),
            ObjectiveVariant(
                intro="You have finished your meal and you want to pay.",
                objective="Ask for the bill, pay for your meal, and thank the waiter.",
                opening_message=_opening("غذا چطور بود؟ چیز دیگری میل دارید؟", "Ghazā chetor bud? Chiz-e digari meil dārid?"),
            ),
        ],
    ),
    "store": Scenario(
        id="store",
        title="At the Store",
        description="Practice buying items, asking for prices, and interacting with a shopkeeper.",
        persona=Persona(name="Mahsa", role="a helpful shopkeeper"),
        objectives=[
            ObjectiveVariant(
                intro="You walk into a small grocery store. The shopkeeper, Mahsa, greets you.",
                objective="Ask for the price of three items and then decide to buy two of them.",
                opening_message=_opening("سلام، خوش آمدید! چی لازم دارید؟", "Salaam, khosh amadid! Chi laazem daarid?"),
            ),
            ObjectiveVariant(
                intro="You are at a local shop to buy some fruit. The shopkeeper, Mahsa, is arranging some apples.",
                objective="Ask if they have any watermelon, and if so, buy one.",
                opening_message=_opening("سلام، بفرمایید.", "Salaam, befarmaayid."),
            ),
        ],
    ),
    "work": Scenario(
        id="work",
        title="At Work",
        description="Practice professional interactions, talking about projects, and making small talk with colleagues.",
        persona=Persona(name="Amir", role="a friendly colleague"),
        objectives=[
            ObjectiveVariant(
                intro="It's the morning and you see your colleague, Amir, by the coffee machine.",
                objective="Greet your colleague and ask them how their weekend was.",
                opening_message=_opening("سلام، صبح بخیر!", "Salaam, sobh bekhair!"),
            ),
            ObjectiveVariant(
                intro="You need to ask your colleague Amir for help with a presentation.",
                objective="Explain that you're working on a presentation and ask if they have a moment to review it with you.",
                opening_message=_opening("سلام، وقت داری؟", "Salaam, vaght daari?"),
            ),
        ],
    ),
    "city": Scenario(
        id="city",
        title="Around the City",
        description="Practice asking for directions, taking a taxi, and navigating a bustling city environment.",
        persona=Persona(name="Reza", role="a helpful taxi driver"),
        objectives=[
            ObjectiveVariant(
                intro="You've just gotten into a taxi. The driver, Reza, greets you.",
                objective="Tell the taxi driver you want to go to the Azadi Tower and ask how much it will cost.",
                opening_message=_opening("سلام آقا، کجا برم؟", "Salaam agha, koja beram?"),
            ),
            ObjectiveVariant(
                intro="You are lost in Tehran and you see a police officer.",
                objective="Politely ask the officer for directions to the nearest metro station.",
                opening_message=_opening("ببخشید، می توانم کمکتان کنم؟", "Bebakshid, mitavaanam komaketaan konam?"),
            ),
        ],
    ),
    "family": Scenario(
        id="family",
        title="With Family",
        description="Practice informal chats, talking about your day, and interacting with family members.",
        persona=Persona(name="Maman Bozorg", role="your kind grandmother"),
        objectives=[
            ObjectiveVariant(
                intro="Your grandmother, Maman Bozorg, calls you on the phone.",
                objective="Greet your grandmother, ask how she is, and tell her that you will visit her tomorrow.",
                opening_message=_opening("سلام عزیزم، چطوری؟", "Salaam azizam, chetori?"),
            ),
            ObjectiveVariant(
                intro="You are at a family gathering. Your aunt asks you what you've been up to.",
                objective="Tell your aunt that you've been busy with work, but that it's going well.",
                opening_message=_opening("چه خبر؟ خیلی وقته ندیدمت!", "Che khabar? Kheili vaghte nadidamet!"),
            ),
        ],
    ),
}


def list_scenarios() -> List[Scenario]:
    return list(SCENARIOS.values())


def get_scenario(scenario_id: str) -> Optional[Scenario]:
    return SCENARIOS.get(scenario_id)


def pick_objective(scenario: Scenario, rng: Optional[random.Random] = None) -> ObjectiveVariant:
    rng = rng or random
    return rng.choice(scenario.objectives)

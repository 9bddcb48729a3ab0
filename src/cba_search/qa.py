from __future__ import annotations

from openai import OpenAI

from .schema import SearchResult

AUGMENTATION_HEADER = "RELEVANT CBA SECTIONS FOR THIS QUESTION:"

SYSTEM_PROMPT = (
    "You are an expert on the NBA Collective Bargaining Agreement. Base every answer on the "
    "agreement text provided with the question and say so when the provided text does not "
    "cover it. Cite the Article and Section you rely on, explain the rule in plain English "
    "first, and only then quote the agreement. Player figures come from a season snapshot; "
    "do not present them as live data."
)


def build_augmentation(result: SearchResult, entity_block: str = "") -> str:
    """Join the search context and the optional player block into one augmentation."""
    if not entity_block:
        return result.context
    return f"{result.context}\n\n{entity_block}"


def augment_message(question: str, augmentation: str) -> str:
    return f"{question}\n\n---\n\n{AUGMENTATION_HEADER}\n{augmentation}"


def answer_with_context(
    question: str,
    context: str,
    model: str = "gpt-4.1-mini",
    instructions: str = SYSTEM_PROMPT,
) -> str:
    client = OpenAI()
    response = client.responses.create(
        model=model,
        instructions=instructions,
        input=augment_message(question, context),
    )
    return response.output_text

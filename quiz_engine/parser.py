"""Recovers a quiz from free-form model text and fits it to the requested size.

The model is asked for a bare JSON object but frequently wraps it in a
```json fence or surrounds it with prose. Extraction tries the fence first and
falls back to the widest ``{...}`` span. Everything after extraction works on
loose Python objects until :func:`coerce_question` turns them into strict
:class:`Question` models.
"""

import json
import logging
import random
import re
from typing import Any, List

from .errors import ParsingError
from .prompts import PADDED_SINGLE_COUNT
from .schemas import GenerationMode, Question, QuestionKind, QuizResult

logger = logging.getLogger(__name__)

FENCED_JSON_RE = re.compile(r"```json\s*([\s\S]*?)\s*```", re.IGNORECASE)
BRACES_RE = re.compile(r"\{[\s\S]*\}")


def extract_json_text(raw_text: str) -> str:
    """Return the JSON candidate embedded in a model reply."""
    match = FENCED_JSON_RE.search(raw_text)
    if match and match.group(1).strip():
        return match.group(1)
    match = BRACES_RE.search(raw_text)
    if match:
        return match.group(0)
    logger.error("No JSON object found in model reply")
    raise ParsingError(
        "The AI reply could not be processed (no JSON object found).", raw_text
    )


def load_reply(raw_text: str) -> dict:
    """Extract and decode the JSON object of a model reply."""
    candidate = extract_json_text(raw_text)
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.error("Malformed JSON in model reply: %s", e)
        raise ParsingError(
            "The AI reply could not be processed (malformed JSON).", raw_text
        ) from e
    if not isinstance(data, dict):
        logger.error("Model reply JSON is a %s, not an object", type(data).__name__)
        raise ParsingError(
            "The AI reply could not be processed (JSON is not an object).", raw_text
        )
    return data


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value)


def coerce_question(item: Any, position: int) -> Question | None:
    """Turn one loose question item into a Question, or None if unusable.

    ``position`` is a provisional id; final ids are assigned after selection.
    """
    if not isinstance(item, dict):
        logger.warning("Dropping question #%d: not an object", position)
        return None
    text = _as_text(item.get("question"))
    if not text:
        logger.warning("Dropping question #%d: no question text", position)
        return None

    options = item.get("options")
    if isinstance(options, list):
        options = [_as_text(o) for o in options if _as_text(o)]
    else:
        options = []

    kind = item.get("type")
    if kind not in (QuestionKind.MULTIPLE_CHOICE.value, QuestionKind.SHORT_ANSWER.value):
        kind = QuestionKind.MULTIPLE_CHOICE.value if options else QuestionKind.SHORT_ANSWER.value
    if kind == QuestionKind.MULTIPLE_CHOICE.value and not options:
        logger.warning("Question #%d is multipleChoice without options; treating as shortAnswer", position)
        kind = QuestionKind.SHORT_ANSWER.value
    if kind == QuestionKind.MULTIPLE_CHOICE.value and len(options) != 4:
        logger.warning("Question #%d has %d options instead of 4", position, len(options))

    explanation = _as_text(item.get("explanation")) or None
    return Question(
        id=position,
        type=kind,
        question=text,
        options=options if kind == QuestionKind.MULTIPLE_CHOICE.value else None,
        answer=_as_text(item.get("answer")),
        explanation=explanation,
    )


def parse_quiz_reply(raw_text: str, mode: GenerationMode) -> QuizResult:
    """Parse a model reply into a QuizResult without selecting questions."""
    data = load_reply(raw_text)

    summary = data.get("summary")
    if not summary:
        if mode == GenerationMode.USER_INPUT:
            logger.warning("Model reply has no summary for a userInput quiz")
        summary = ""

    items = data.get("questions")
    if not isinstance(items, list):
        logger.warning("Model reply has no valid questions array; using an empty list")
        items = []

    questions = []
    for position, item in enumerate(items, start=1):
        question = coerce_question(item, position)
        if question is not None:
            questions.append(question)
    return QuizResult(summary=_as_text(summary), questions=questions)


def select_questions(
    questions: List[Question],
    num_requested: int,
    mode: GenerationMode,
    padded: bool,
    rng: random.Random | None = None,
) -> List[Question]:
    """Fit the parsed questions to the user's count and renumber them 1..K."""
    rng = rng or random
    available = len(questions)

    if (
        mode == GenerationMode.TOPIC_ONLY
        and num_requested == 1
        and padded
        and available >= PADDED_SINGLE_COUNT
    ):
        selected = [rng.choice(questions)]
    elif available >= num_requested:
        selected = questions[:num_requested]
    else:
        logger.warning(
            "Model returned %d questions, %d requested; returning all of them",
            available,
            num_requested,
        )
        selected = list(questions)

    return [q.model_copy(update={"id": i}) for i, q in enumerate(selected, start=1)]

import logging
import random
from typing import Protocol

from .parser import parse_quiz_reply, select_questions
from .prompts import build_prompt
from .schemas import QuizRequest, QuizResult

logger = logging.getLogger(__name__)


class TextModel(Protocol):
    def generate(self, prompt: str) -> str: ...


def generate_quiz(
    request: QuizRequest,
    model: TextModel,
    language: str = "Korean",
    rng: random.Random | None = None,
) -> QuizResult:
    """
    Builds the prompt for a validated request, asks the model for a quiz and
    repairs its reply into a QuizResult of at most numQuestions questions.
    """
    prompt = build_prompt(request, language=language)
    logger.info("Sending prompt to Gemini:\n%s", prompt.text)

    raw_text = model.generate(prompt.text)
    logger.info("Received from Gemini:\n%s", raw_text)

    parsed = parse_quiz_reply(raw_text, request.mode)
    questions = select_questions(
        parsed.questions,
        request.numQuestions,
        request.mode,
        prompt.padded,
        rng=rng,
    )
    logger.info(
        "Generated %d/%d questions for subject %r (%s)",
        len(questions),
        request.numQuestions,
        request.subject,
        request.mode.value,
    )
    return QuizResult(summary=parsed.summary, questions=questions)

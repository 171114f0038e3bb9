from typing import NamedTuple

from .schemas import GenerationMode, QuestionType, QuizRequest
from .subjects import steering_for

# A single topic-only question is drawn at random from this many candidates.
PADDED_SINGLE_COUNT = 3

QUESTION_TYPE_DESCRIPTIONS = {
    QuestionType.MULTIPLE_CHOICE: "multiple-choice questions with exactly 4 options",
    QuestionType.SHORT_ANSWER: "short-answer questions",
    QuestionType.ANY: "a free mix of multiple-choice (4 options) and short-answer questions",
}


class QuizPrompt(NamedTuple):
    text: str
    requested_count: int
    padded: bool


def requested_count(request: QuizRequest) -> int:
    """Number of questions to ask the model for."""
    if request.mode == GenerationMode.TOPIC_ONLY and request.numQuestions == 1:
        return PADDED_SINGLE_COUNT
    return request.numQuestions


def _question_instruction(step: int, count: int, question_type: QuestionType, language: str) -> str:
    return f"""{step}. Write {count} questions in {language} that meet these conditions:
   - Question type: {QUESTION_TYPE_DESCRIPTIONS[question_type]}.
   - Every question has a clear correct answer and a short explanation of why it is correct.
   - Every question covers different content; do not repeat a concept."""


def _user_input_instruction(request: QuizRequest, count: int, language: str) -> str:
    return f"""You are an assistant that turns study notes into a summary and quiz questions with explanations.
Subject: "{request.subject}"
Study notes: "{request.learnedContent}"

Based on the study notes above, do the following:
1. Summarize the notes concisely in {language} (1-2 sentences).
{_question_instruction(2, count, request.questionType, language)}"""


def _topic_only_instruction(request: QuizRequest, count: int, language: str) -> str:
    topic_detail = f" (in the style of {request.specificTopic})" if request.specificTopic else ""
    instruction = f"""You are an assistant that writes quiz questions with explanations for a given subject.
Subject: "{request.subject}"{topic_detail}

For the subject above, do the following (do not write a summary):
{_question_instruction(1, count, request.questionType, language)}"""
    steering = steering_for(request.subject)
    if steering:
        instruction += f"\n   - {steering}"
    return instruction


def _output_format(mode: GenerationMode) -> str:
    summary_hint = (
        "Leave this empty; no summary is needed."
        if mode == GenerationMode.TOPIC_ONLY
        else "Put the summary here."
    )
    return f"""The final reply MUST be a single JSON object in exactly this shape, with no other text before or after it:
{{
  "summary": "{summary_hint}",
  "questions": [
    {{
      "id": 1,
      "type": "multipleChoice",
      "question": "Question text.",
      "options": ["Option 1", "Option 2", "Option 3", "Correct option"],
      "answer": "Correct option",
      "explanation": "Why the answer is correct."
    }},
    {{
      "id": 2,
      "type": "shortAnswer",
      "question": "Question text.",
      "answer": "Answer text.",
      "explanation": "Why the answer is correct."
    }}
  ]
}}
Only multipleChoice questions carry "options". Repeat the question objects until the requested number is reached."""


def build_prompt(request: QuizRequest, language: str = "Korean") -> QuizPrompt:
    """Compose the full prompt sent to the model for a quiz request."""
    count = requested_count(request)
    if request.mode == GenerationMode.USER_INPUT:
        instruction = _user_input_instruction(request, count, language)
    else:
        instruction = _topic_only_instruction(request, count, language)

    text = f"{instruction}\n\n{_output_format(request.mode)}"
    return QuizPrompt(text=text, requested_count=count, padded=count != request.numQuestions)

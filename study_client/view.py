"""View state of the study page.

Every user action is one method on :class:`QuizView`; each method is the only
writer of the fields it touches. The HTTP transport is passed in so the same
view can be driven by a real ``httpx.Client`` or FastAPI's ``TestClient``.
"""

import logging
from typing import List
from urllib.parse import parse_qs, urlparse

import httpx
from pydantic import BaseModel

from quiz_engine.schemas import (
    AnswerState,
    GenerationMode,
    Question,
    QuestionKind,
    QuestionType,
    QuizResult,
)
from quiz_engine.subjects import specific_topic_for

logger = logging.getLogger(__name__)

GENERATE_QUIZ_PATH = "/api/generateQuiz"
EMPTY_CONTENT_MESSAGE = "Please enter what you have learned."
UNREADABLE_RESPONSE_MESSAGE = "The server returned a quiz that could not be read."


class QuizView(BaseModel):
    subject: str = ""
    learnedContent: str = ""
    mode: GenerationMode = GenerationMode.USER_INPUT
    numQuestions: int = 2
    questionType: QuestionType = QuestionType.ANY
    result: QuizResult | None = None
    loading: bool = False
    error: str | None = None
    answers: AnswerState = {}
    submitted: bool = False

    @classmethod
    def from_url(cls, url: str) -> "QuizView":
        """Start a view with the subject carried in the page's ?subject= query."""
        subject = parse_qs(urlparse(url).query).get("subject", [""])[0]
        return cls(subject=subject)

    @property
    def specificTopic(self) -> str | None:
        return specific_topic_for(self.subject)

    def build_request(self) -> dict:
        body = {
            "subject": self.subject,
            "mode": self.mode.value,
            "numQuestions": self.numQuestions,
            "questionType": self.questionType.value,
        }
        if self.mode == GenerationMode.USER_INPUT:
            body["learnedContent"] = self.learnedContent
        else:
            body["learnedContent"] = ""
            if self.specificTopic:
                body["specificTopic"] = self.specificTopic
        return body

    def request_quiz(self, http: httpx.Client) -> None:
        """Ask the server for a new quiz and store the outcome."""
        if self.loading:
            return
        if self.mode == GenerationMode.USER_INPUT and not self.learnedContent.strip():
            self.error = EMPTY_CONTENT_MESSAGE
            return

        self.loading = True
        self.result = None
        self.error = None
        self.answers = {}
        self.submitted = False
        try:
            response = http.post(GENERATE_QUIZ_PATH, json=self.build_request())
            if response.is_success:
                self.result = QuizResult.model_validate(response.json())
            else:
                self.error = _error_message(response)
        except httpx.HTTPError as e:
            logger.error("Quiz request failed: %s", e)
            self.error = str(e) or "Failed to load the quiz."
        except ValueError as e:
            # JSONDecodeError and pydantic's ValidationError both land here
            logger.error("Unreadable quiz response: %s", e)
            self.error = UNREADABLE_RESPONSE_MESSAGE
        finally:
            self.loading = False

    def record_answer(self, question_id: int, answer: str) -> None:
        if self.submitted:
            return
        self.answers = {**self.answers, question_id: answer}

    def submit(self) -> None:
        self.submitted = True

    def retry(self) -> None:
        """Clear answers so the same quiz can be taken again."""
        self.submitted = False
        self.answers = {}

    def is_correct(self, question: Question) -> bool:
        return self.answers.get(question.id) == question.answer

    def score(self) -> int:
        if self.result is None:
            return 0
        return sum(1 for q in self.result.questions if self.is_correct(q))

    def render(self) -> str:
        lines: List[str] = []
        if self.loading:
            lines.append("Generating... please wait.")
        if self.error:
            lines.append(f"Error: {self.error}")
        if self.result is None or self.loading:
            return "\n".join(lines)

        if self.result.summary:
            lines += ["Summary", self.result.summary, ""]
        lines.append("Questions")
        for index, question in enumerate(self.result.questions, start=1):
            lines.append(f"{index}. {question.question}")
            lines += self._render_input(question)
            if self.submitted:
                lines += self._render_feedback(question)
        if self.submitted and self.result.questions:
            lines.append(f"Score: {self.score()}/{len(self.result.questions)}")
        return "\n".join(lines)

    def _render_input(self, question: Question) -> List[str]:
        given = self.answers.get(question.id)
        if question.type == QuestionKind.MULTIPLE_CHOICE and question.options:
            return [
                f"   ({'x' if option == given else ' '}) {n}) {option}"
                for n, option in enumerate(question.options, start=1)
            ]
        return [f"   Answer: {given or '_____'}"]

    def _render_feedback(self, question: Question) -> List[str]:
        mark = "correct" if self.is_correct(question) else "incorrect"
        lines = [f"   [{mark}] Answer: {question.answer}"]
        if question.explanation:
            lines.append(f"   Explanation: {question.explanation}")
        given = self.answers.get(question.id)
        if given and not self.is_correct(question):
            lines.append(f"   Your answer: {given}")
        return lines


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    message = body.get("message") if isinstance(body, dict) else None
    return message or f"HTTP error! status: {response.status_code}"

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field, field_validator, model_validator


class GenerationMode(str, Enum):
    USER_INPUT = "userInput"
    TOPIC_ONLY = "topicOnly"


class QuestionType(str, Enum):
    """Question types a user may ask for."""

    ANY = "any"
    MULTIPLE_CHOICE = "multipleChoice"
    SHORT_ANSWER = "shortAnswer"


class QuestionKind(str, Enum):
    """Question types that appear in a generated quiz."""

    MULTIPLE_CHOICE = "multipleChoice"
    SHORT_ANSWER = "shortAnswer"


class QuizRequest(BaseModel):
    """Schema for requesting a new quiz to be generated."""

    subject: str = Field(min_length=1)
    mode: GenerationMode
    learnedContent: str = ""
    numQuestions: int = Field(ge=1)
    questionType: QuestionType
    specificTopic: str | None = None

    @field_validator("subject")
    @classmethod
    def subject_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("subject must not be empty")
        return value

    @field_validator("learnedContent", mode="before")
    @classmethod
    def null_content_is_empty(cls, value):
        return "" if value is None else value

    @model_validator(mode="after")
    def content_required_for_user_input(self):
        if self.mode == GenerationMode.USER_INPUT and not self.learnedContent.strip():
            raise ValueError("learnedContent is required when mode is userInput")
        return self


class Question(BaseModel):
    """Represents a single question within a quiz."""

    id: int = Field(ge=1)
    type: QuestionKind
    question: str
    options: List[str] | None = None
    answer: str
    explanation: str | None = None


class QuizResult(BaseModel):
    summary: str = ""
    questions: List[Question] = []


class ErrorResponse(BaseModel):
    message: str
    rawResponse: str | None = None


class Subject(BaseModel):
    name: str
    description: str


class SubjectCatalog(BaseModel):
    subjects: List[Subject]


AnswerState = Dict[int, str]

import json

import pytest
from fastapi.testclient import TestClient

from quiz_engine.config import Settings, get_settings
from quiz_engine.main import app, get_text_model


class FakeModel:
    """Stands in for Gemini: records prompts and returns a canned reply."""

    def __init__(self, reply: str = "", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


def quiz_reply(*questions, summary="Summary text.", fenced=True) -> str:
    body = json.dumps({"summary": summary, "questions": list(questions)}, ensure_ascii=False)
    if fenced:
        return f"Here is your quiz:\n```json\n{body}\n```\nGood luck!"
    return body


def short_answer(n: int, answer: str = "A") -> dict:
    return {
        "id": n,
        "type": "shortAnswer",
        "question": f"Question {n}?",
        "answer": answer,
        "explanation": f"Because {answer}.",
    }


def multiple_choice(n: int) -> dict:
    return {
        "id": n,
        "type": "multipleChoice",
        "question": f"Pick the right option for {n}.",
        "options": ["w", "x", "y", "z"],
        "answer": "y",
        "explanation": "y is right.",
    }


@pytest.fixture
def fake_model():
    return FakeModel()


@pytest.fixture
def client(fake_model):
    app.dependency_overrides[get_settings] = lambda: Settings(
        _env_file=None, GEMINI_API_KEY="test-key"
    )
    app.dependency_overrides[get_text_model] = lambda: fake_model
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

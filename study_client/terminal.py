import argparse
import os

import httpx

from quiz_engine.schemas import GenerationMode, QuestionKind, QuestionType
from quiz_engine.subjects import SUBJECT_CATALOG

from .view import QuizView

QUIZ_API_URL = os.getenv("QUIZ_API_URL", "http://localhost:8000")
QUESTION_COUNTS = (1, 2, 3, 5)


def _choose(prompt: str, choices, default):
    labels = ", ".join(f"{n}) {c}" for n, c in enumerate(choices, start=1))
    raw = input(f"{prompt} [{labels}] (default {default}): ").strip()
    if raw.isdigit() and 1 <= int(raw) <= len(choices):
        return choices[int(raw) - 1]
    return default


def configure(view: QuizView) -> None:
    """Collect subject, mode and options for the next quiz request."""
    if not view.subject:
        names = [s.name for s in SUBJECT_CATALOG]
        view.subject = _choose("Subject", names, names[0])
    print(f"\nSelected subject: {view.subject}")

    view.mode = GenerationMode(
        _choose("Mode", [m.value for m in GenerationMode], view.mode.value)
    )
    view.numQuestions = _choose("Number of questions", list(QUESTION_COUNTS), view.numQuestions)
    view.questionType = QuestionType(
        _choose("Question type", [t.value for t in QuestionType], view.questionType.value)
    )
    if view.mode == GenerationMode.USER_INPUT:
        print("Enter what you have learned (finish with an empty line):")
        lines = []
        while True:
            line = input()
            if not line:
                break
            lines.append(line)
        view.learnedContent = "\n".join(lines)


def take_quiz(view: QuizView) -> None:
    for question in view.result.questions:
        print(f"\n{question.id}. {question.question}")
        if question.type == QuestionKind.MULTIPLE_CHOICE and question.options:
            for n, option in enumerate(question.options, start=1):
                print(f"   {n}) {option}")
            raw = input("Your choice: ").strip()
            if raw.isdigit() and 1 <= int(raw) <= len(question.options):
                view.record_answer(question.id, question.options[int(raw) - 1])
        else:
            answer = input("Your answer: ").strip()
            if answer:
                view.record_answer(question.id, answer)
    view.submit()
    print("\n" + view.render())


def main():
    parser = argparse.ArgumentParser(description="Interactive study quiz client.")
    parser.add_argument("url", nargs="?", default="", help="page URL, e.g. /study?subject=...")
    args = parser.parse_args()

    view = QuizView.from_url(args.url)
    with httpx.Client(base_url=QUIZ_API_URL, timeout=120.0) as http:
        while True:
            configure(view)
            print("\nGenerating... please wait.")
            view.request_quiz(http)
            print(view.render())
            if view.result is not None and view.result.questions:
                take_quiz(view)
                while input("\nRetry the same quiz? [y/N]: ").strip().lower() == "y":
                    view.retry()
                    take_quiz(view)
            if input("\nRequest another quiz? [y/N]: ").strip().lower() != "y":
                break


if __name__ == "__main__":
    main()

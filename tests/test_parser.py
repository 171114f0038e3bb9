import random

import pytest

from conftest import multiple_choice, quiz_reply, short_answer
from quiz_engine.errors import ParsingError
from quiz_engine.parser import (
    coerce_question,
    extract_json_text,
    parse_quiz_reply,
    select_questions,
)
from quiz_engine.schemas import GenerationMode, QuestionKind

USER_INPUT = GenerationMode.USER_INPUT
TOPIC_ONLY = GenerationMode.TOPIC_ONLY


def test_fenced_block_wins_over_braces():
    raw = 'Note {not json}\n```json\n{"summary": "fenced"}\n```'
    assert extract_json_text(raw) == '{"summary": "fenced"}'


def test_bare_braces_span_first_to_last():
    raw = 'Sure! {"summary": "S", "questions": [{"id": 1}]} Hope it helps.'
    assert extract_json_text(raw) == '{"summary": "S", "questions": [{"id": 1}]}'


def test_no_json_keeps_raw_text():
    with pytest.raises(ParsingError) as excinfo:
        extract_json_text("just prose")
    assert excinfo.value.raw_response == "just prose"
    assert excinfo.value.to_content()["rawResponse"] == "just prose"


def test_json_array_is_not_a_quiz():
    with pytest.raises(ParsingError):
        parse_quiz_reply('```json\n[{"question": "Q"}]\n```', USER_INPUT)


def test_missing_summary_becomes_empty_in_topic_mode():
    result = parse_quiz_reply('{"questions": []}', TOPIC_ONLY)
    assert result.summary == ""
    assert result.questions == []


def test_questions_not_a_list_becomes_empty():
    result = parse_quiz_reply('{"summary": "S", "questions": "none"}', USER_INPUT)
    assert result.questions == []


def test_unusable_items_are_dropped():
    reply = quiz_reply("not an object", {"type": "shortAnswer", "answer": "A"}, short_answer(3))
    result = parse_quiz_reply(reply, USER_INPUT)
    assert [q.question for q in result.questions] == ["Question 3?"]


def test_type_is_inferred_from_options():
    question = coerce_question({"question": "Q", "options": ["a", "b", "c", "d"], "answer": "a"}, 1)
    assert question.type == QuestionKind.MULTIPLE_CHOICE

    question = coerce_question({"question": "Q", "answer": 42}, 1)
    assert question.type == QuestionKind.SHORT_ANSWER
    assert question.answer == "42"
    assert question.options is None


def test_multiple_choice_without_options_becomes_short_answer():
    question = coerce_question({"type": "multipleChoice", "question": "Q", "answer": "A"}, 1)
    assert question.type == QuestionKind.SHORT_ANSWER
    assert question.options is None


def test_short_answer_drops_stray_options():
    question = coerce_question(
        {"type": "shortAnswer", "question": "Q", "options": ["x"], "answer": "A"}, 1
    )
    assert question.options is None


def test_reparsing_is_idempotent():
    reply = quiz_reply(short_answer(1), multiple_choice(2), short_answer(3))
    first = parse_quiz_reply(reply, USER_INPUT)
    second = parse_quiz_reply(reply, USER_INPUT)
    assert first == second
    assert select_questions(first.questions, 2, USER_INPUT, False) == select_questions(
        second.questions, 2, USER_INPUT, False
    )


def test_random_pick_only_when_padded():
    questions = parse_quiz_reply(
        quiz_reply(short_answer(1, "A1"), short_answer(2, "A2"), short_answer(3, "A3")),
        TOPIC_ONLY,
    ).questions

    picked = select_questions(questions, 1, TOPIC_ONLY, True, rng=random.Random(3))
    assert len(picked) == 1
    assert picked[0].id == 1
    assert picked[0].answer in {"A1", "A2", "A3"}

    unpadded = select_questions(questions, 1, TOPIC_ONLY, False)
    assert [q.answer for q in unpadded] == ["A1"]


def test_padded_request_with_too_few_candidates_takes_prefix():
    questions = parse_quiz_reply(
        quiz_reply(short_answer(1, "A1"), short_answer(2, "A2")), TOPIC_ONLY
    ).questions
    picked = select_questions(questions, 1, TOPIC_ONLY, True)
    assert [q.answer for q in picked] == ["A1"]


def test_shortfall_keeps_all_and_renumbers(caplog):
    questions = parse_quiz_reply(quiz_reply(short_answer(8), short_answer(9)), USER_INPUT).questions
    with caplog.at_level("WARNING"):
        kept = select_questions(questions, 5, USER_INPUT, False)
    assert [q.id for q in kept] == [1, 2]
    assert "2 questions, 5 requested" in caplog.text


def test_selection_does_not_mutate_parsed_questions():
    questions = parse_quiz_reply(quiz_reply(short_answer(5), short_answer(6)), USER_INPUT).questions
    select_questions(questions, 1, USER_INPUT, False)
    assert [q.id for q in questions] == [1, 2]
    assert questions[1].question == "Question 6?"

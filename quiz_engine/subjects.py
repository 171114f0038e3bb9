"""Exam areas offered on the home screen, with topic hints for topic-only quizzes."""

from typing import Dict, List

from .schemas import Subject

SUBJECT_CATALOG: List[Subject] = [
    Subject(
        name="데이터베이스",
        description="Relational modelling, normalization, SQL and transactions.",
    ),
    Subject(
        name="프로그래밍 언어",
        description="C, Java and Python semantics, code tracing and output prediction.",
    ),
    Subject(
        name="시스템 설계",
        description="Requirements, UML, architecture and interface design.",
    ),
    Subject(
        name="소프트웨어 공학",
        description="Development life cycles, testing techniques and project management.",
    ),
    Subject(
        name="정보시스템 관리",
        description="Networks, security, operating systems and IT service management.",
    ),
]

SUBJECT_STEERING: Dict[str, str] = {
    "데이터베이스": (
        "Spread the questions across ER modelling, normal forms, SQL DDL/DML, "
        "relational algebra, indexes and transaction isolation."
    ),
    "프로그래밍 언어": (
        "Mix code-reading questions in C, Java and Python (loops, pointers, "
        "inheritance, exceptions) with questions on language concepts."
    ),
    "시스템 설계": (
        "Cover requirement analysis, UML diagrams, design patterns, cohesion and "
        "coupling, middleware and user interface design."
    ),
    "소프트웨어 공학": (
        "Cover process models, cost estimation, white-box and black-box testing, "
        "quality standards and configuration management."
    ),
    "정보시스템 관리": (
        "Cover network protocols, security attacks and countermeasures, "
        "operating system scheduling and emerging IT terminology."
    ),
}

SPECIAL_TOPICS: Dict[str, str] = {
    "정보처리기사 시스템 설계": "정보처리기사 시스템 설계 복원문제 스타일",
}


def steering_for(subject: str) -> str | None:
    return SUBJECT_STEERING.get(subject.strip())


def specific_topic_for(subject: str) -> str | None:
    return SPECIAL_TOPICS.get(subject.strip())

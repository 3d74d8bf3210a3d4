"""Shared fixtures for QuestionBank tests."""

import random
from datetime import datetime, timedelta

import pytest

from questionbank.classroom import MemoryStorage, ProgressStore, QuizController
from questionbank.schemas import (
    Catalog,
    Lesson,
    MultipleChoiceQuestion,
    Selection,
    Semester,
    ShortAnswerQuestion,
    Subject,
    TrueFalseQuestion,
    Unit,
)


class FixedClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def tick(self, seconds: int):
        self.now += timedelta(seconds=seconds)


def mc(qid: int, correct: int = 0, options: int = 3) -> MultipleChoiceQuestion:
    return MultipleChoiceQuestion(
        id=qid,
        prompt=f"Multiple choice {qid}?",
        options=[f"Option {n}" for n in range(options)],
        correct_answer=correct,
        explanation=f"Explanation {qid}",
    )


def tf(qid: int, correct: bool = True) -> TrueFalseQuestion:
    return TrueFalseQuestion(
        id=qid,
        prompt=f"True or false {qid}?",
        correct_answer=correct,
        explanation=f"Explanation {qid}",
    )


def short(qid: int) -> ShortAnswerQuestion:
    return ShortAnswerQuestion(
        id=qid,
        prompt=f"Explain {qid}.",
        sample_answer=f"Sample answer {qid}",
    )


INTRO = Selection(subject="english", semester="semester1", unit="unit1", lesson="Introduction")
MIXED = Selection(subject="english", semester="semester1", unit="unit1", lesson="Mixed")
TENSES = Selection(subject="english", semester="semester1", unit="unit2", lesson="Tenses")
EGYPT = Selection(subject="history", semester="semester1", unit="unit1", lesson="Egypt")


def build_catalog() -> Catalog:
    return Catalog(subjects={
        "english": Subject(name="English", semesters={
            "semester1": Semester(name="First Semester", units={
                "unit1": Unit(name="Unit 1", lessons={
                    "Introduction": Lesson(name="Introduction", questions=[mc(1, correct=0)]),
                    "Mixed": Lesson(name="Mixed", questions=[
                        mc(10, correct=1), mc(11, correct=2),
                        tf(12, True), tf(13, False),
                        short(14),
                    ]),
                }),
                "unit2": Unit(name="Unit 2", lessons={
                    "Tenses": Lesson(name="Tenses", questions=[tf(20, False), short(21)]),
                }),
            }),
        }),
        "history": Subject(name="History", semesters={
            "semester1": Semester(name="First Semester", units={
                "unit1": Unit(name="Unit 1", lessons={
                    "Egypt": Lesson(name="Egypt", questions=[mc(30), mc(31, correct=1)]),
                }),
            }),
        }),
    })


@pytest.fixture
def catalog() -> Catalog:
    return build_catalog()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 3, 1, 9, 0, 0))


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage) -> ProgressStore:
    return ProgressStore(storage)


@pytest.fixture
def controller(catalog, store, rng, clock) -> QuizController:
    return QuizController(catalog, store, rng=rng, clock=clock)

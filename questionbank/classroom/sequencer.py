"""
Sequencer - Question ordering and position tracking for a quiz session.

Provides:
- Unbiased shuffling of a lesson's questions
- Fresh session creation for a selection
- Advancing, restarting and filtering a session
"""

import logging
import random
from datetime import datetime
from typing import Optional, TypeVar

from questionbank.schemas import (
    AdvanceResult,
    Catalog,
    Question,
    QuizPhase,
    Selection,
    Session,
)

from .errors import AlreadyComplete, NoQuestionsOfType, SelectionNotFound


logger = logging.getLogger(__name__)

T = TypeVar("T")


def shuffle_questions(items: list[T], rng: Optional[random.Random] = None) -> list[T]:
    """
    Return a uniformly random permutation of items (Fisher-Yates).

    Walks from the last index down to 1, swapping each element with one
    picked uniformly from [0, i]. The input list is not modified.
    """
    rng = rng or random.Random()
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def start_session(
    catalog: Catalog,
    selection: Selection,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> Session:
    """
    Create a fresh session for a lesson.

    Raises:
        SelectionNotFound: If the selection is incomplete or does not
            resolve to a lesson in the catalog
    """
    questions = catalog.get_questions(selection)
    if not questions:
        raise SelectionNotFound()

    session = Session(
        selection=selection,
        working_questions=shuffle_questions(questions, rng),
        position=0,
        score=0,
        started_at=now or datetime.now(),
        answered=False,
    )
    logger.info(f"Started session for {selection} ({session.total} questions)")
    return session


def advance(session: Session) -> AdvanceResult:
    """
    Move to the next question.

    Raises:
        AlreadyComplete: If the session has no questions left
    """
    if session.is_complete:
        raise AlreadyComplete()

    session.position += 1
    session.answered = False
    if session.is_complete:
        logger.info(f"Session complete for {session.selection}: {session.score}/{session.total}")
        return AdvanceResult(phase=QuizPhase.COMPLETE)
    return AdvanceResult(phase=QuizPhase.IN_PROGRESS, question=session.current_question)


def restart(
    session: Session,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> Session:
    """
    Reshuffle the same questions in place and reset counters.

    The caller is responsible for clearing the persisted snapshot.
    """
    session.working_questions = shuffle_questions(session.working_questions, rng)
    session.position = 0
    session.score = 0
    session.answered = False
    session.started_at = now or datetime.now()
    logger.info(f"Restarted session for {session.selection}")
    return session


def filter_by_type(session: Session, kind: str) -> Session:
    """
    Derive a session limited to one question kind.

    Questions keep their current working order. The derived session
    starts from the first question with a zero score; the start time is
    kept so elapsed time covers the whole attempt.

    Raises:
        NoQuestionsOfType: If no question of that kind exists; the
            original session is left untouched
    """
    kind = getattr(kind, "value", kind)
    questions: list[Question] = [q for q in session.working_questions if q.kind == kind]
    if not questions:
        raise NoQuestionsOfType(kind)

    return Session(
        selection=session.selection,
        working_questions=questions,
        position=0,
        score=0,
        started_at=session.started_at,
        answered=False,
    )

"""
QuizController - The single session-owning object behind the UI.

Combines the catalog (content), sequencer, grader and progress store
(user state). The presentation layer calls one method per UI event and
renders the returned QuizView.
"""

import logging
import random
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from questionbank.schemas import (
    Catalog,
    GradeResult,
    Question,
    QuizPhase,
    ScoreSummary,
    Selection,
    Session,
    Verdict,
)

from . import grader, sequencer
from .errors import AlreadyComplete, NoActiveSession, SelectionNotFound
from .progress import ProgressStore


logger = logging.getLogger(__name__)

FILTER_ALL = "all"
SAVED_MESSAGE = "Progress saved!"


@dataclass
class QuizView:
    """Everything the presentation layer needs to render one screen."""
    phase: QuizPhase
    selection: Selection
    question: Optional[Question] = None
    question_number: int = 0  # 1-based
    total_questions: int = 0
    answered: bool = False
    feedback: Optional[GradeResult] = None
    summary: Optional[ScoreSummary] = None
    message: Optional[str] = None
    active_filter: str = FILTER_ALL


class QuizController:
    """
    Drive one quiz at a time through its state machine.

    no_selection -> selection_incomplete -> in_progress -> complete
    """

    def __init__(
        self,
        catalog: Catalog,
        progress: ProgressStore,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize controller.

        Args:
            catalog: Read-only question catalog
            progress: ProgressStore for the saved snapshot
            rng: Random source for shuffling (seed it for reproducible order)
            clock: Returns the current time
        """
        self.catalog = catalog
        self.progress = progress
        self.rng = rng or random.Random()
        self.clock = clock

        self.selection = Selection()
        self.session: Optional[Session] = None
        self._unfiltered: Optional[Session] = None
        self._active_filter = FILTER_ALL
        self._feedback: Optional[GradeResult] = None

    # -------------------------------------------------------------------------
    # Dropdown options
    # -------------------------------------------------------------------------

    def subject_options(self) -> list[tuple[str, str]]:
        return self.catalog.subject_options()

    def semester_options(self) -> list[tuple[str, str]]:
        return self.catalog.semester_options(self.selection.subject)

    def unit_options(self) -> list[tuple[str, str]]:
        return self.catalog.unit_options(self.selection.subject, self.selection.semester)

    def lesson_options(self) -> list[tuple[str, str]]:
        return self.catalog.lesson_options(
            self.selection.subject, self.selection.semester, self.selection.unit
        )

    # -------------------------------------------------------------------------
    # Selection cascade
    # -------------------------------------------------------------------------

    def select_subject(self, subject: str) -> QuizView:
        """Choose a subject; semester, unit and lesson are reset."""
        self._change_selection(Selection(subject=subject or ""))
        return self.view()

    def select_semester(self, semester: str) -> QuizView:
        """Choose a semester; unit and lesson are reset."""
        self._change_selection(Selection(
            subject=self.selection.subject,
            semester=semester or "",
        ))
        return self.view()

    def select_unit(self, unit: str) -> QuizView:
        """Choose a unit; lesson is reset."""
        self._change_selection(Selection(
            subject=self.selection.subject,
            semester=self.selection.semester,
            unit=unit or "",
        ))
        return self.view()

    def select_lesson(self, lesson: str) -> QuizView:
        """Choose a lesson and load it once the selection is complete."""
        selection = Selection(
            subject=self.selection.subject,
            semester=self.selection.semester,
            unit=self.selection.unit,
            lesson=lesson or "",
        )
        if not selection.is_filled:
            self._change_selection(selection)
            return self.view()
        return self.load_selection(selection)

    def _change_selection(self, selection: Selection):
        # The abandoned session is dropped without being saved
        if self.session is not None:
            logger.info(f"Discarding session for {self.session.selection}")
        self.selection = selection
        self._reset_session(None)

    def _reset_session(self, session: Optional[Session]):
        self.session = session
        self._unfiltered = None
        self._active_filter = FILTER_ALL
        self._feedback = None

    # -------------------------------------------------------------------------
    # Presentation contract
    # -------------------------------------------------------------------------

    def load_selection(self, selection: Selection) -> QuizView:
        """
        Load a lesson, resuming saved progress for the same lesson.

        Raises:
            SelectionNotFound: If the selection does not resolve; the
                current selection and session are left unchanged
        """
        if not self.catalog.resolves(selection):
            raise SelectionNotFound()

        snapshot = self.progress.load(self.catalog)
        session = self.progress.reconcile(snapshot, selection)
        if session is not None:
            logger.info(f"Resumed {selection} at question {session.position + 1}/{session.total}")
        else:
            session = sequencer.start_session(self.catalog, selection, self.rng, self.clock())

        self.selection = selection
        self._reset_session(session)
        return self.view()

    def resume(self) -> QuizView:
        """Restore the saved lesson and its dropdowns at start-up, if any."""
        snapshot = self.progress.load(self.catalog)
        if snapshot is None:
            return self.view()
        return self.load_selection(snapshot.selection)

    def submit_answer(self, raw_answer: Optional[str]) -> QuizView:
        """
        Grade the current question and persist the result.

        A second submit for the same question returns the first verdict
        without scoring again.

        Raises:
            NoActiveSession: If no lesson is loaded
            AlreadyComplete: If every question has been answered
            NoAnswerProvided: If the answer is blank (nothing changes)
        """
        session = self._require_session()
        if session.is_complete:
            raise AlreadyComplete()
        if session.answered:
            return self.view()

        question = session.current_question
        result = grader.grade(question, raw_answer)
        if result.verdict == Verdict.CORRECT:
            session.score += 1
        session.answered = True
        self._feedback = result

        self.progress.save(session)
        return self.view()

    def next_question(self) -> QuizView:
        """
        Move to the next question, or to the results when none are left.

        Raises:
            NoActiveSession: If no lesson is loaded
            AlreadyComplete: If the results are already showing
        """
        session = self._require_session()
        sequencer.advance(session)
        self._feedback = None
        self.progress.save(session)
        return self.view()

    def restart(self) -> QuizView:
        """Reshuffle the whole lesson and start over; saved progress and any filter are cleared."""
        session = self._unfiltered or self._require_session()
        self.progress.clear()
        sequencer.restart(session, self.rng, self.clock())
        self._reset_session(session)
        return self.view()

    def save(self) -> QuizView:
        """Explicitly save progress."""
        session = self._require_session()
        self.progress.save(session)
        view = self.view()
        view.message = SAVED_MESSAGE
        return view

    def filter_questions(self, kind: str) -> QuizView:
        """
        Restrict the quiz to one question kind, or "all" to undo.

        Undoing saves the restored full session, since answers given
        under the filter were saved over it.

        Raises:
            NoQuestionsOfType: If the current questions have none of that
                kind; the current view is kept
        """
        session = self._require_session()
        kind = getattr(kind, "value", kind)
        if kind == FILTER_ALL:
            if self._unfiltered is not None:
                self.session = self._unfiltered
                self._unfiltered = None
                self._active_filter = FILTER_ALL
                self._feedback = None
                self.progress.save(self.session)
            return self.view()

        source = self._unfiltered or session
        filtered = sequencer.filter_by_type(source, kind)
        self._unfiltered = source
        self.session = filtered
        self._active_filter = kind
        self._feedback = None
        return self.view()

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def _require_session(self) -> Session:
        if self.session is None:
            raise NoActiveSession()
        return self.session

    @property
    def phase(self) -> QuizPhase:
        if self.session is not None:
            return self.session.phase
        if any(self.selection.as_tuple()):
            return QuizPhase.SELECTION_INCOMPLETE
        return QuizPhase.NO_SELECTION

    def view(self) -> QuizView:
        session = self.session
        if session is None:
            return QuizView(phase=self.phase, selection=self.selection)

        view = QuizView(
            phase=session.phase,
            selection=self.selection,
            total_questions=session.total,
            answered=session.answered,
            feedback=self._feedback,
            active_filter=self._active_filter,
        )
        if session.is_complete:
            view.question_number = session.total
            view.summary = ScoreSummary.from_session(session, self.clock())
        else:
            view.question = session.current_question
            view.question_number = session.position + 1
        return view

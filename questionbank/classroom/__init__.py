"""
QuestionBank Classroom - Runtime components for running a quiz.

This module provides:
- CatalogLoader: Load and validate the question catalog
- Sequencer: Shuffle, advance, restart and filter sessions
- Grader: Grade submitted answers
- ProgressStore: Persist and restore the live session
- QuizController: The presentation-facing state machine
"""

from .errors import (
    QuizError,
    CatalogError,
    SelectionNotFound,
    NoAnswerProvided,
    NoQuestionsOfType,
    AlreadyComplete,
    NoActiveSession,
    StorageUnavailable,
    CorruptSnapshot,
)

from .loader import (
    CatalogLoader,
    load_catalog,
    load_subject_file,
    normalize_question,
)

from .sequencer import (
    shuffle_questions,
    start_session,
    advance,
    restart,
    filter_by_type,
)

from .grader import grade

from .progress import (
    KeyValueStorage,
    MemoryStorage,
    SQLiteStorage,
    ProgressStore,
)

from .controller import (
    QuizController,
    QuizView,
    FILTER_ALL,
    SAVED_MESSAGE,
)

__all__ = [
    # Errors
    "QuizError",
    "CatalogError",
    "SelectionNotFound",
    "NoAnswerProvided",
    "NoQuestionsOfType",
    "AlreadyComplete",
    "NoActiveSession",
    "StorageUnavailable",
    "CorruptSnapshot",
    # Loader
    "CatalogLoader",
    "load_catalog",
    "load_subject_file",
    "normalize_question",
    # Sequencer
    "shuffle_questions",
    "start_session",
    "advance",
    "restart",
    "filter_by_type",
    # Grader
    "grade",
    # Progress
    "KeyValueStorage",
    "MemoryStorage",
    "SQLiteStorage",
    "ProgressStore",
    # Controller
    "QuizController",
    "QuizView",
    "FILTER_ALL",
    "SAVED_MESSAGE",
]

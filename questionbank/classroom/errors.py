"""
Error types for the quiz core.

Selection, grading and sequencing errors propagate to the presentation
layer, which shows ``user_message``. Storage errors are raised by the
storage backends and absorbed inside ProgressStore.
"""


class QuizError(Exception):
    """Base class for all quiz errors."""

    user_message = "Something went wrong. Please try again."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.user_message)
        if message:
            self.user_message = message


class CatalogError(QuizError):
    user_message = "The question catalog could not be loaded."


class SelectionNotFound(QuizError):
    user_message = "Questions not found for this selection. Please try another selection."


class NoAnswerProvided(QuizError):
    user_message = "Please select or enter an answer."


class NoQuestionsOfType(QuizError):
    user_message = "No questions of that type are available."

    def __init__(self, kind: str):
        super().__init__(f"No {kind} questions available")
        self.kind = kind


class AlreadyComplete(QuizError):
    user_message = "This quiz is already complete."


class NoActiveSession(QuizError):
    user_message = "Select a lesson to begin."


class StorageUnavailable(QuizError):
    user_message = "Saved progress is unavailable."


class CorruptSnapshot(QuizError):
    user_message = "Saved progress could not be read."

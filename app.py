"""
QuestionBank - Educational quiz application

Streamlit application: pick a subject, semester, unit and lesson, then
answer a shuffled sequence of questions with immediate feedback.
Progress is saved locally and resumed on the next visit.

Usage:
    streamlit run app.py
"""

import logging

import streamlit as st

from questionbank.classroom import (
    FILTER_ALL,
    CatalogError,
    MemoryStorage,
    ProgressStore,
    QuizController,
    QuizError,
    SQLiteStorage,
    StorageUnavailable,
    load_catalog,
)
from questionbank.config import load_settings
from questionbank.schemas import QuestionKind, QuizPhase, ShortAnswerQuestion
from questionbank.utils import setup_logging
from questionbank.viewer import (
    answer_choices,
    get_quiz_css,
    question_kind_label,
    render_feedback,
    render_question_card,
    render_quiz_score,
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

settings = load_settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="QuestionBank",
    page_icon="📝",
    layout="centered",
    initial_sidebar_state="expanded",
)

FILTER_LABELS = {
    FILTER_ALL: "All",
    QuestionKind.MULTIPLE_CHOICE.value: "Multiple choice",
    QuestionKind.TRUE_FALSE.value: "True / False",
    QuestionKind.SHORT_ANSWER.value: "Short answer",
}

SELECT_KEYS = ("subject_select", "semester_select", "unit_select", "lesson_select")


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def build_controller() -> QuizController:
    """Wire catalog and progress store into one controller."""
    catalog = load_catalog(settings.catalog_dir)
    try:
        storage = SQLiteStorage(settings.progress_db)
    except StorageUnavailable as e:
        logger.warning(f"{e}; progress will not survive a restart")
        storage = MemoryStorage()
    return QuizController(catalog, ProgressStore(storage))


def init_session_state():
    """Initialize session state variables."""
    if "flash" not in st.session_state:
        st.session_state.flash = []

    if "attempt" not in st.session_state:
        st.session_state.attempt = 0

    if "controller" not in st.session_state:
        try:
            controller = build_controller()
        except CatalogError as e:
            logger.error(f"Catalog failed to load: {e}")
            st.session_state.controller = None
            st.session_state.load_error = str(e)
            return

        st.session_state.controller = controller
        try:
            st.session_state.view = controller.resume()
        except QuizError as e:
            st.session_state.view = controller.view()
            flash("warning", e.user_message)
        sync_select_widgets()
        st.session_state.filter_select = FILTER_ALL


def flash(level: str, text: str):
    st.session_state.flash.append((level, text))


def sync_select_widgets():
    """Mirror the controller's selection into the dropdown widgets."""
    selection = st.session_state.controller.selection
    for key, value in zip(SELECT_KEYS, selection.as_tuple()):
        st.session_state[key] = value


def new_attempt():
    # Fresh widget keys so answer inputs start empty
    st.session_state.attempt += 1
    st.session_state.filter_select = FILTER_ALL


# -----------------------------------------------------------------------------
# Callbacks
# -----------------------------------------------------------------------------

def on_subject_change():
    controller = st.session_state.controller
    st.session_state.view = controller.select_subject(st.session_state.subject_select)
    sync_select_widgets()


def on_semester_change():
    controller = st.session_state.controller
    st.session_state.view = controller.select_semester(st.session_state.semester_select)
    sync_select_widgets()


def on_unit_change():
    controller = st.session_state.controller
    st.session_state.view = controller.select_unit(st.session_state.unit_select)
    sync_select_widgets()


def on_lesson_change():
    controller = st.session_state.controller
    try:
        st.session_state.view = controller.select_lesson(st.session_state.lesson_select)
    except QuizError as e:
        flash("error", e.user_message)
        st.session_state.lesson_select = controller.selection.lesson
        return
    new_attempt()


def on_submit(answer_key: str):
    controller = st.session_state.controller
    try:
        st.session_state.view = controller.submit_answer(st.session_state.get(answer_key))
    except QuizError as e:
        flash("warning", e.user_message)


def on_next():
    controller = st.session_state.controller
    try:
        st.session_state.view = controller.next_question()
    except QuizError as e:
        flash("warning", e.user_message)


def on_restart():
    controller = st.session_state.controller
    try:
        st.session_state.view = controller.restart()
    except QuizError as e:
        flash("warning", e.user_message)
        return
    new_attempt()


def on_save():
    controller = st.session_state.controller
    try:
        view = controller.save()
    except QuizError as e:
        flash("warning", e.user_message)
        return
    st.session_state.view = view
    flash("toast", view.message)


def on_filter_change():
    controller = st.session_state.controller
    try:
        st.session_state.view = controller.filter_questions(st.session_state.filter_select)
    except QuizError as e:
        flash("warning", e.user_message)
        st.session_state.filter_select = st.session_state.view.active_filter
        return
    st.session_state.attempt += 1


# -----------------------------------------------------------------------------
# Sidebar: Cascading selection
# -----------------------------------------------------------------------------

def option_labels(options: list[tuple[str, str]], placeholder: str):
    """Selectbox options with an empty placeholder first."""
    labels = {"": placeholder}
    labels.update(dict(options))
    return list(labels), labels.get


def render_sidebar():
    """Render the subject -> semester -> unit -> lesson dropdowns."""
    st.sidebar.title("📝 QuestionBank")
    controller = st.session_state.controller
    selection = controller.selection

    keys, label = option_labels(controller.subject_options(), "Select Subject")
    st.sidebar.selectbox(
        "Subject", keys, format_func=label,
        key="subject_select", on_change=on_subject_change,
    )

    keys, label = option_labels(controller.semester_options(), "Select Semester")
    st.sidebar.selectbox(
        "Semester", keys, format_func=label,
        key="semester_select", on_change=on_semester_change,
        disabled=not selection.subject,
    )

    keys, label = option_labels(controller.unit_options(), "Select Unit")
    st.sidebar.selectbox(
        "Unit", keys, format_func=label,
        key="unit_select", on_change=on_unit_change,
        disabled=not selection.semester,
    )

    keys, label = option_labels(controller.lesson_options(), "Select Lesson")
    st.sidebar.selectbox(
        "Lesson", keys, format_func=label,
        key="lesson_select", on_change=on_lesson_change,
        disabled=not selection.unit,
    )


# -----------------------------------------------------------------------------
# Main Content
# -----------------------------------------------------------------------------

def render_flash():
    for level, text in st.session_state.flash:
        if level == "toast":
            st.toast(text)
        elif level == "error":
            st.error(text)
        else:
            st.warning(text)
    st.session_state.flash = []


def render_question_view(view):
    """Render the current question, answer input and feedback."""
    question = view.question
    st.title(view.selection.lesson)

    st.radio(
        "Question type",
        list(FILTER_LABELS),
        format_func=FILTER_LABELS.get,
        key="filter_select",
        on_change=on_filter_change,
        horizontal=True,
    )

    st.markdown(get_quiz_css(), unsafe_allow_html=True)
    st.markdown(render_question_card(question, view.question_number, view.total_questions), unsafe_allow_html=True)
    st.caption(question_kind_label(question))

    answer_key = f"answer_{st.session_state.attempt}_{view.question_number}"
    if isinstance(question, ShortAnswerQuestion):
        st.text_area(
            "Your answer", key=answer_key, height=120,
            placeholder="Type your answer here...", disabled=view.answered,
        )
    else:
        choices = dict(answer_choices(question))
        st.radio(
            "Choose one:", list(choices), format_func=choices.get,
            index=None, key=answer_key, disabled=view.answered,
        )

    if view.feedback:
        st.markdown(render_feedback(view.feedback, question), unsafe_allow_html=True)

    col1, col2, col3 = st.columns(3)
    with col1:
        if view.answered:
            st.button("Next Question", type="primary", on_click=on_next, use_container_width=True)
        else:
            st.button(
                "Submit Answer", type="primary", on_click=on_submit,
                args=(answer_key,), use_container_width=True,
            )
    with col2:
        st.button("Save Progress", on_click=on_save, use_container_width=True)
    with col3:
        st.button("Restart", on_click=on_restart, use_container_width=True)


def render_results_view(view):
    """Render the final score summary."""
    st.title("Quiz Complete")
    st.markdown(get_quiz_css(), unsafe_allow_html=True)
    st.markdown(render_quiz_score(view.summary), unsafe_allow_html=True)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Score", f"{view.summary.percent}%")
    col2.metric("Correct", view.summary.correct)
    col3.metric("Incorrect", view.summary.incorrect)
    col4.metric("Time", view.summary.time_spent)

    st.button("Restart Quiz", type="primary", on_click=on_restart, use_container_width=True)


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()

    if st.session_state.controller is None:
        st.error(st.session_state.load_error)
        return

    render_sidebar()
    render_flash()

    view = st.session_state.view
    if view.phase == QuizPhase.IN_PROGRESS:
        render_question_view(view)
    elif view.phase == QuizPhase.COMPLETE:
        render_results_view(view)
    else:
        st.info("Select a subject, semester, unit and lesson to begin.")


if __name__ == "__main__":
    main()

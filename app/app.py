"""
UI layer
Purpose: Streamlit-only glue. Renders widgets/tabs, collects user inputs, and delegates
all work to the controller. Keeps UI concerns (layout/state widgets) separate from
business logic so logic can be unit tested without Streamlit.
"""

import logging

import streamlit as st

from tracker.config import TrackerConfig
from tracker.controller import StudyTrackerController
from tracker.models import (
    EmptyState,
    SessionInput,
    SortDirection,
    SortKey,
    StatusFilter,
)
from tracker.services.statistics import format_minutes
from tracker.services.validation import SessionValidationError

logger = logging.getLogger("study-tracker")


# ---------------------------
# Page config
# ---------------------------
st.set_page_config(
    page_title="Study Tracker",
    page_icon="📚",
    layout="wide",
    initial_sidebar_state="expanded",
)
# ---------------------------
# UI constants
# ---------------------------
STATUS_LABELS = {
    StatusFilter.ALL.value: "All",
    StatusFilter.COMPLETED.value: "Completed",
    StatusFilter.PENDING.value: "Pending",
}
SORT_COLUMNS = [
    (SortKey.SUBJECT, "Subject"),
    (SortKey.DURATION, "Duration (mins)"),
    (SortKey.DATE, "Date"),
]
EMPTY_MESSAGES = {
    EmptyState.NO_SESSIONS: "No sessions yet. Add your first one with the form.",
    EmptyState.NO_MATCH: "No sessions for this filter.",
}
ROW_LAYOUT = [0.5, 3, 1.4, 1.4, 2, 1.2]


def configure_logging(level: int) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------
# Session state init
# ---------------------------
st_session = st.session_state
st_session.setdefault("config", TrackerConfig())
st_session.setdefault("controller", None)
st_session.setdefault("status_filter", StatusFilter.ALL.value)
st_session.setdefault("search_term", "")
st_session.setdefault("edit_dialog_requested", False)
st_session.setdefault("delete_candidate", None)
st_session.setdefault("add_error", None)

configure_logging(st_session.config.log_level)

if st_session.controller is None:
    st_session.controller = StudyTrackerController.from_config(st_session.config)
    logger.info("Tracker controller initialised")


# ---------------------------
# Helpers
# ---------------------------
def get_controller() -> StudyTrackerController:
    """Return the controller object."""
    return st_session.controller


def sort_label(key: SortKey, label: str) -> str:
    """Header text with an arrow on the active sort column."""
    spec = get_controller().view.sort
    if spec.key is not key:
        return label
    return f"{label} {'▲' if spec.direction is SortDirection.ASC else '▼'}"


def on_filter_change():
    get_controller().set_filter(st_session.status_filter)


def on_search_change():
    get_controller().set_search(st_session.search_term)


def on_sort_click(key: SortKey):
    get_controller().sort_by(key)


def on_toggle(session_id: int):
    get_controller().toggle_completed(session_id)


def on_edit_open(session_id: int):
    """Open the editor; the dialog itself is rendered later in this run."""
    controller = get_controller()
    controller.scheduler.run_pending()
    try:
        if controller.open_edit(session_id) is None:
            st.toast("That session no longer exists.", icon="⚠️")
            return
    except RuntimeError as e:
        st.toast(str(e), icon="⚠️")
        return
    st_session.edit_dialog_requested = True


def on_edit_dismiss():
    """Escape, the X or a click outside closes the editor without saving."""
    get_controller().dismiss_edit()


def on_add_submit():
    try:
        session = get_controller().add_session(
            SessionInput(
                subject=st_session.add_subject,
                duration=st_session.add_duration,
                date=st_session.add_date,
                notes=st_session.add_notes,
            )
        )
    except SessionValidationError as e:
        # Keep what the user typed so they can fix it
        st_session.add_error = str(e)
        return
    st_session.add_error = None
    st_session.add_subject = ""
    st_session.add_duration = None
    st_session.add_date = None
    st_session.add_notes = ""
    st.toast(f"Added “{session.subject}”.", icon="✅")


def on_delete_request(session_id: int):
    st_session.delete_candidate = session_id


def reset_session():
    """Replace every session with the sample data and clear the saved copy."""
    get_controller().reset_to_seed()
    st_session.delete_candidate = None
    st.toast("Sessions reset to sample data.", icon="🧹")


@st.dialog("Edit session", on_dismiss=on_edit_dismiss)
def edit_dialog():
    controller = get_controller()
    buffer = controller.edit.buffer
    if buffer is None:
        st.info("Nothing to edit.")
        return

    sid = buffer.session_id
    subject = st.text_input("Subject", value=buffer.subject, key=f"edit_subject_{sid}")
    duration = st.number_input(
        "Duration (minutes)",
        min_value=1,
        step=1,
        value=int(buffer.duration) if str(buffer.duration).isdigit() else None,
        key=f"edit_duration_{sid}",
    )
    date_value = st.text_input(
        "Date (YYYY-MM-DD)", value=str(buffer.date or ""), key=f"edit_date_{sid}"
    )
    notes = st.text_area("Notes (optional)", value=buffer.notes, key=f"edit_notes_{sid}")

    c1, c2 = st.columns([1, 1])
    save_clicked = c1.button("Save", type="primary")
    cancel_clicked = c2.button("Cancel")

    if save_clicked:
        try:
            controller.save_edit(
                subject=subject, duration=duration, date=date_value, notes=notes
            )
        except SessionValidationError as e:
            st.error(str(e))
            return
        st.toast("Session updated.", icon="✅")
        st.rerun()

    if cancel_clicked:
        controller.cancel_edit()
        st.rerun()


@st.dialog("Delete session?")
def confirm_delete_dialog(session_id: int):
    controller = get_controller()
    session = controller.get_session(session_id)
    if session is None:
        st.info("That session no longer exists.")
        return

    st.markdown(f"**{session.subject}** · {session.duration} min · {session.date}")
    st.write("This cannot be undone.")
    c1, c2 = st.columns([1, 1])
    if c1.button("Delete", type="primary"):
        controller.delete_session(session_id)
        st.toast("Session deleted.", icon="🗑️")
        st.rerun()
    if c2.button("Keep"):
        st.rerun()


def render_add_form():
    st.markdown("### Add New Session")
    with st.form("add_session"):
        st.text_input("Subject", placeholder="e.g. DSA, DBMS...", key="add_subject")
        c1, c2 = st.columns([1, 1])
        c1.number_input(
            "Duration (minutes)",
            min_value=1,
            step=1,
            value=None,
            placeholder="e.g. 45",
            key="add_duration",
        )
        c2.date_input("Date", value=None, key="add_date")
        st.text_area(
            "Notes (optional)",
            placeholder="Topic, chapter, or any notes...",
            key="add_notes",
        )
        st.form_submit_button(
            "Add Session", type="primary", key="add_submit", on_click=on_add_submit
        )

    if st_session.add_error:
        st.error(st_session.add_error)
        st_session.add_error = None


def render_session_list():
    controller = get_controller()
    locked = controller.edit.background_locked
    st.markdown("### Study Sessions")

    empty = controller.empty_state()
    if empty is not None:
        st.info(EMPTY_MESSAGES[empty])
        return

    header = st.columns(ROW_LAYOUT)
    header[0].markdown("**#**")
    for col, (key, label) in zip(header[1:4], SORT_COLUMNS):
        col.button(
            sort_label(key, label),
            key=f"sort_{key.value}",
            on_click=on_sort_click,
            args=(key,),
            type="tertiary",
        )
    header[4].markdown("**Status**")
    header[5].markdown("**Actions**")

    for index, session in enumerate(controller.visible_sessions(), 1):
        row = st.columns(ROW_LAYOUT, vertical_alignment="center")
        row[0].write(index)
        with row[1]:
            st.write(session.subject)
            if session.notes:
                st.caption(session.notes)
        row[2].write(session.duration)
        row[3].write(session.date)
        with row[4]:
            if session.completed:
                s1, s2 = st.columns([2, 1])
                s1.write("✅ Completed")
                s2.button(
                    "Undo",
                    key=f"toggle_{session.id}",
                    on_click=on_toggle,
                    args=(session.id,),
                    disabled=locked,
                    type="tertiary",
                )
            else:
                st.button(
                    "Mark as completed",
                    key=f"toggle_{session.id}",
                    on_click=on_toggle,
                    args=(session.id,),
                    disabled=locked,
                    type="primary",
                )
        with row[5]:
            a1, a2 = st.columns([1, 1])
            a1.button(
                "✏️",
                key=f"edit_{session.id}",
                help="Edit session",
                on_click=on_edit_open,
                args=(session.id,),
                disabled=locked,
            )
            a2.button(
                "🗑️",
                key=f"delete_{session.id}",
                help="Delete session",
                on_click=on_delete_request,
                args=(session.id,),
                disabled=locked,
            )


# ---------------------------
# Deferred work (editor close transition)
# ---------------------------
get_controller().scheduler.run_pending()


# ---------------------------
# SIDEBAR: view controls
# ---------------------------
with st.sidebar:
    st.markdown("# View")

    st.radio(
        "Status",
        list(STATUS_LABELS.keys()),
        format_func=STATUS_LABELS.get,
        key="status_filter",
        on_change=on_filter_change,
        horizontal=True,
    )
    st.text_input(
        "Search",
        key="search_term",
        placeholder="Subject or notes…",
        on_change=on_search_change,
    )
    st.caption("Click a column header to sort; click it again to reverse.")
    st.divider()

    st.markdown("## Data")
    st.write("Replace all sessions with the sample data.")
    st.button("Reset to sample data", type="secondary", on_click=reset_session)

# ---------------------------
# Header
# ---------------------------
st.title("Study Tracker")
st.caption("Track your daily study sessions in one place.")

st.html(
    """
<style>
.stTabs [data-baseweb="tab-list"] button [data-testid="stMarkdownContainer"] p {
    font-size: 18px;
}
</style>
"""
)
sessions_tab, stats_tab, about_tab = st.tabs(["Sessions", "Statistics", "About"])

with sessions_tab:
    form_col, list_col = st.columns([1, 2], gap="large")
    with form_col:
        render_add_form()
    with list_col:
        render_session_list()

    if st_session.edit_dialog_requested:
        st_session.edit_dialog_requested = False
        edit_dialog()
    elif st_session.delete_candidate is not None:
        candidate = st_session.delete_candidate
        st_session.delete_candidate = None
        confirm_delete_dialog(candidate)

with stats_tab:
    st.subheader("Statistics")
    st.caption("Computed from all sessions, regardless of filter or search.")
    stats = get_controller().stats()

    c1, c2, c3, c4 = st.columns(4)
    with c1:
        st.metric("Total sessions", stats.total_sessions)
    with c2:
        st.metric("Total time", format_minutes(stats.total_minutes))
    with c3:
        st.metric("Completed", stats.completed_count)
    with c4:
        st.metric("Pending", stats.pending_count)

    st.metric("Completion rate", f"{stats.completion_rate}%")
    st.progress(stats.completion_rate / 100)

with about_tab:
    st.subheader("About this app")
    st.markdown(
        """
        Log what you studied, for how long, and whether you finished it.

        - Add sessions with a subject, duration, date and optional notes.
        - Filter by status, search subjects and notes, and sort by any column.
        - Edit or delete a session from its row.
        - Sessions are saved locally after every change.
        """
    )

st.divider()
st.caption(
    "Sessions are stored on this machine only. Use “Reset to sample data” to start over."
)

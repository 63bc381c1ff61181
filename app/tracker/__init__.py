"""
Study tracker core: UI-free session store, view pipeline, statistics,
edit workflow and persistence. The Streamlit script in app/app.py is the
only layer that imports streamlit.
"""

from .controller import StudyTrackerController
from .models import (
    Session,
    SessionInput,
    SessionStats,
    SortDirection,
    SortKey,
    SortSpec,
    StatusFilter,
)
from .services.validation import SessionValidationError

__all__ = [
    "Session",
    "SessionInput",
    "SessionStats",
    "SessionValidationError",
    "SortDirection",
    "SortKey",
    "SortSpec",
    "StatusFilter",
    "StudyTrackerController",
]

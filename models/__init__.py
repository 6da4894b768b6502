"""Datamodeller för profilen och besökarens UI-läge."""

from models.profile import ProfileRecord  # noqa: F401
from models.ui_state import Locale, UIState  # noqa: F401

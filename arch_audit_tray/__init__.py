"""
Tray notifier for security advisories affecting installed Arch Linux packages.
"""

from .events import TriggerChannel, TriggerEvent  # noqa: F401
from .status import Error, Icon, MissingUpdates, Status, Update, UpToDate, classify, present  # noqa: F401
from .theme import Theme, ThemeValidationError, parse_theme  # noqa: F401

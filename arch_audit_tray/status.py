"""
Check outcomes and the text/icon shown for each of them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple, TypeGuard, Union

CHECKING_TEXT = "Checking..."
UP_TO_DATE_TEXT = "Up to date"


class InvalidIconError(ValueError):
    """Raised when an icon name does not match any known icon."""


class Icon(Enum):
    CHECK = "check"
    ALERT = "alert"
    CROSS = "cross"

    @classmethod
    def from_name(cls, name: str) -> "Icon":
        try:
            return cls(name)
        except ValueError as exc:
            raise InvalidIconError(f"Invalid icon name: {name!r}") from exc

    @property
    def file_name(self) -> str:
        return f"{self.value}.svg"


@dataclass(frozen=True, slots=True)
class Update:
    """A single affected package and the advisory describing it."""

    text: str
    link: str


class Status:
    """Base class of every state the tray can show."""

    __slots__ = ()

    @property
    def text(self) -> str:
        raise NotImplementedError

    @property
    def icon(self) -> Icon:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class Checking(Status):
    @property
    def text(self) -> str:
        return CHECKING_TEXT

    @property
    def icon(self) -> Icon:
        return Icon.CHECK


@dataclass(frozen=True, slots=True)
class UpToDate(Status):
    @property
    def text(self) -> str:
        return UP_TO_DATE_TEXT

    @property
    def icon(self) -> Icon:
        return Icon.CHECK


@dataclass(frozen=True, slots=True)
class MissingUpdates(Status):
    updates: Tuple[Update, ...]

    def __post_init__(self) -> None:
        # Callers may hand over a list; keep the record immutable.
        object.__setattr__(self, "updates", tuple(self.updates))

    @property
    def text(self) -> str:
        count = len(self.updates)
        if count == 0:
            return UP_TO_DATE_TEXT
        if count == 1:
            return "1 security update available"
        return f"{count} security updates available"

    @property
    def icon(self) -> Icon:
        return Icon.ALERT if self.updates else Icon.CHECK


@dataclass(frozen=True, slots=True)
class Error(Status):
    message: str

    @property
    def text(self) -> str:
        return f"Error: {self.message}"

    @property
    def icon(self) -> Icon:
        return Icon.CROSS


CheckerOutcome = Union[Sequence[Update], BaseException]


def classify(outcome: CheckerOutcome) -> Status:
    """Turn whatever the checker produced into a status."""
    if isinstance(outcome, BaseException):
        message = str(outcome).strip() or type(outcome).__name__
        return Error(message)
    updates = tuple(outcome)
    if not updates:
        return UpToDate()
    return MissingUpdates(updates)


def present(status: Status) -> Tuple[str, Icon]:
    return status.text, status.icon


def has_details(status: Status) -> TypeGuard[MissingUpdates]:
    """Whether the status carries a list of updates worth a submenu."""
    return isinstance(status, MissingUpdates) and bool(status.updates)

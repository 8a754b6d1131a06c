"""Typed commands produced by the intent parser, one per utterance."""

from dataclasses import dataclass
from typing import Union

from .durations import TimeUnit


@dataclass(frozen=True)
class Help:
    pass


@dataclass(frozen=True)
class AddReminder:
    """Reminder request that already carries its duration."""
    text: str
    quantity: int
    unit: TimeUnit


@dataclass(frozen=True)
class AddReminderNoTime:
    """Reminder request whose duration still has to be asked for."""
    text: str


@dataclass(frozen=True)
class ListReminders:
    pass


@dataclass(frozen=True)
class ClearAllReminders:
    pass


@dataclass(frozen=True)
class ClearReminder:
    id: int


@dataclass(frozen=True)
class TimeSpec:
    """Bare duration answering a "how long does it take?" question."""
    quantity: int
    unit: TimeUnit


@dataclass(frozen=True)
class Confirm:
    accepted: bool


@dataclass(frozen=True)
class Unknown:
    pass


Command = Union[
    Help,
    AddReminder,
    AddReminderNoTime,
    ListReminders,
    ClearAllReminders,
    ClearReminder,
    TimeSpec,
    Confirm,
    Unknown,
]

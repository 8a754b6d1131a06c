"""Per-session reminder scheduling.

Holds the active reminders of one session and arms a one-shot timer for each.
A reminder is listed exactly while its timer is pending: it is removed when the
timer fires and when it is cancelled.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from .timers import TimerBackend

logger = logging.getLogger(__name__)


@dataclass
class ScheduledReminder:
    """A pending reminder.

    Attributes:
        id: Session-unique reminder id
        fire_at: Epoch seconds at which the reminder fires
        text: Normalized reminder subject
        seconds: Requested delay, kept so the duration can be remembered later
        token: Timer token used for cancellation
    """

    id: int
    fire_at: float
    text: str
    seconds: int
    token: Any = None


@dataclass
class ReminderStatus:
    """Row of the reminder listing."""

    id: int
    text: str
    remaining: int


class ReminderScheduler:
    """Creates, lists and cancels deferred one-shot reminders."""

    def __init__(
        self,
        timers: TimerBackend,
        on_fire: Callable[[ScheduledReminder], None],
        now_fn: Optional[Callable[[], float]] = None,
    ):
        """Initialize the scheduler.

        Args:
            timers: Deferred-callback backend
            on_fire: Called with the reminder after it has left the active list
            now_fn: Clock returning epoch seconds (defaults to time.time)
        """
        self.timers = timers
        self.on_fire = on_fire
        self.now_fn = now_fn or time.time
        self._reminders: Dict[int, ScheduledReminder] = {}

    def schedule(self, reminder_id: int, text: str, seconds: int) -> ScheduledReminder:
        """Arm a reminder that fires after the given number of seconds."""
        if reminder_id in self._reminders:
            raise ValueError(f"Reminder {reminder_id} is already scheduled")

        reminder = ScheduledReminder(
            id=reminder_id,
            fire_at=self.now_fn() + seconds,
            text=text,
            seconds=seconds,
        )
        reminder.token = self.timers.arm(seconds, lambda: self._fire(reminder_id))
        self._reminders[reminder_id] = reminder
        logger.info(f"Scheduled reminder {reminder_id} in {seconds}s: {text}")
        return reminder

    def _fire(self, reminder_id: int) -> None:
        reminder = self._reminders.pop(reminder_id, None)
        if reminder is None:
            # Cancelled after the backend had already dequeued the callback
            return
        logger.info(f"Reminder {reminder_id} fired: {reminder.text}")
        self.on_fire(reminder)

    def cancel(self, reminder_id: int) -> Optional[ScheduledReminder]:
        """Cancel one reminder.

        Returns:
            The cancelled reminder, or None if no reminder has this id
        """
        reminder = self._reminders.pop(reminder_id, None)
        if reminder is None:
            return None
        self.timers.cancel(reminder.token)
        logger.info(f"Cancelled reminder {reminder_id}")
        return reminder

    def cancel_all(self) -> int:
        """Cancel every pending reminder.

        Returns:
            Number of reminders cancelled
        """
        reminders = list(self._reminders.values())
        self._reminders.clear()
        for reminder in reminders:
            self.timers.cancel(reminder.token)
        if reminders:
            logger.info(f"Cancelled {len(reminders)} reminders")
        return len(reminders)

    def list(self) -> List[ReminderStatus]:
        """Active reminders in creation order with whole seconds remaining.

        Remaining time may be slightly negative for a reminder that is about
        to fire; renderers clamp it.
        """
        now = self.now_fn()
        return [
            ReminderStatus(id=r.id, text=r.text, remaining=round(r.fire_at - now))
            for r in self._reminders.values()
        ]

    def get(self, reminder_id: int) -> Optional[ScheduledReminder]:
        return self._reminders.get(reminder_id)

    def __len__(self) -> int:
        return len(self._reminders)

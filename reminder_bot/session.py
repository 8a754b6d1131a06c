"""Per-connection session executor.

Takes one parsed command per turn, applies it to the session's dialog history,
scheduler and duration memory, and returns exactly one reply string. Timer
notifications are delivered separately through the notify callback.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from . import replies
from .commands import (
    AddReminder,
    AddReminderNoTime,
    ClearAllReminders,
    ClearReminder,
    Command,
    Confirm,
    Help,
    ListReminders,
    TimeSpec,
)
from .dialog import DialogHistory, DialogState, ReminderContext
from .duration_memory import DurationMemory
from .durations import TimeUnit, to_seconds
from .intent_parser import IntentParser
from .scheduler import ReminderScheduler, ScheduledReminder
from .timers import TimerBackend

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    """Everything a single connection owns.

    Attributes:
        scheduler: Active reminders and their timers
        dialog: Reminder contexts in the order they were started
        memory: Durations confirmed during this session
        next_id: Next reminder id; ids are never reused
    """
    scheduler: ReminderScheduler
    dialog: DialogHistory = field(default_factory=DialogHistory)
    memory: DurationMemory = field(default_factory=DurationMemory)
    next_id: int = 1

    def allocate_id(self) -> int:
        reminder_id = self.next_id
        self.next_id += 1
        return reminder_id


class SessionExecutor:
    """Executes commands against one session's state."""

    def __init__(
        self,
        timers: TimerBackend,
        notify: Callable[[str], None],
        confirm_durations: bool = True,
        parser: Optional[IntentParser] = None,
        now_fn: Optional[Callable[[], float]] = None,
    ):
        """Initialize the executor.

        Args:
            timers: Deferred-callback backend for reminders
            notify: Sends an out-of-band message to the client
            confirm_durations: Ask before remembering a duration; when False,
                every completed reminder's duration is remembered directly
            parser: Intent parser (defaults to the standard intent table)
            now_fn: Clock passed to the scheduler
        """
        self.notify = notify
        self.confirm_durations = confirm_durations
        self.parser = parser or IntentParser()
        self.state = SessionState(
            scheduler=ReminderScheduler(timers, on_fire=self._on_reminder_fired, now_fn=now_fn),
        )

    def greeting(self) -> str:
        return replies.GREETING

    def handle_text(self, text: str) -> str:
        """Parse one inbound utterance and execute it."""
        intent_name, command = self.parser.match(text)
        logger.debug(f"Parsed {text[:50]!r} as {intent_name or 'unknown'}")
        return self.execute(command)

    def execute(self, command: Command) -> str:
        """Apply a command and return the reply text."""
        if isinstance(command, Help):
            return replies.HELP
        if isinstance(command, AddReminder):
            return self._add_reminder(command)
        if isinstance(command, AddReminderNoTime):
            return self._add_reminder_no_time(command)
        if isinstance(command, TimeSpec):
            return self._time_spec(command)
        if isinstance(command, Confirm):
            return self._confirm(command)
        if isinstance(command, ListReminders):
            return self._list_reminders()
        if isinstance(command, ClearAllReminders):
            self.state.scheduler.cancel_all()
            return replies.CLEARED_ALL
        if isinstance(command, ClearReminder):
            return self._clear_reminder(command)
        return replies.FALLBACK

    def close(self) -> None:
        """Cancel every pending timer; called when the connection goes away."""
        cancelled = self.state.scheduler.cancel_all()
        logger.debug(f"Session closed, {cancelled} pending reminders cancelled")

    def _add_reminder(self, command: AddReminder) -> str:
        try:
            seconds = to_seconds(command.quantity, command.unit)
        except ValueError as e:
            logger.warning(f"Rejected reminder duration: {e}")
            return replies.FALLBACK

        context = self.state.dialog.push(
            ReminderContext(
                id=self.state.allocate_id(),
                text=replies.normalize_subject(command.text),
                quantity=command.quantity,
                unit=command.unit,
            )
        )
        return self._schedule(context, seconds, learn=not self.confirm_durations)

    def _add_reminder_no_time(self, command: AddReminderNoTime) -> str:
        text = replies.normalize_subject(command.text)
        context = self.state.dialog.push(ReminderContext(id=self.state.allocate_id(), text=text))

        remembered = self.state.memory.lookup(text)
        if remembered is None:
            return replies.ask_duration(text)

        context.quantity = remembered
        context.unit = TimeUnit.SECONDS
        return self._schedule(context, remembered, learn=False)

    def _time_spec(self, command: TimeSpec) -> str:
        dialog = self.state.dialog
        if dialog.state is not DialogState.AWAITING_DURATION:
            # Nothing asked for a duration; never reschedule a complete reminder
            logger.debug(f"Ignoring duration with dialog in state {dialog.state.value}")
            return replies.FALLBACK

        try:
            seconds = to_seconds(command.quantity, command.unit)
        except ValueError as e:
            logger.warning(f"Rejected reminder duration: {e}")
            return replies.FALLBACK

        context = dialog.active
        reply = self._schedule(context, seconds, learn=not self.confirm_durations)
        context.quantity = command.quantity
        context.unit = command.unit
        return reply

    def _confirm(self, command: Confirm) -> str:
        context = self.state.dialog.active
        if context is None or not context.is_complete:
            return replies.FALLBACK

        context.awaiting_confirmation = False
        if not command.accepted:
            return replies.DECLINED

        self.state.memory.remember(context.text, context.seconds)
        logger.info(f"Remembered that {context.text} takes {context.seconds}s")
        return replies.CONFIRMED

    def _list_reminders(self) -> str:
        rows = self.state.scheduler.list()
        if not rows:
            return replies.NO_REMINDERS
        return replies.reminder_table(rows)

    def _clear_reminder(self, command: ClearReminder) -> str:
        reminder = self.state.scheduler.cancel(command.id)
        if reminder is None:
            return replies.not_found(command.id)
        return replies.cleared(reminder.text)

    def _schedule(self, context: ReminderContext, seconds: int, learn: bool) -> str:
        self.state.scheduler.schedule(context.id, context.text, seconds)
        if learn:
            self.state.memory.remember(context.text, seconds)
        return replies.scheduled(context.text, seconds)

    def _on_reminder_fired(self, reminder: ScheduledReminder) -> None:
        self.notify(replies.time_is_up(reminder.text))
        if not self.confirm_durations or reminder.text in self.state.memory:
            return

        self.notify(replies.ask_remember(reminder.text, reminder.seconds))
        # The next yes/no answers this question, so it becomes the active context
        self.state.dialog.push(
            ReminderContext(
                id=reminder.id,
                text=reminder.text,
                quantity=reminder.seconds,
                unit=TimeUnit.SECONDS,
                awaiting_confirmation=True,
            )
        )

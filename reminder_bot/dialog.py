"""Dialog state for multi-turn reminder creation.

The dialog keeps an append-only history of reminder contexts. Follow-up turns
("20 minutes", "yes") always target the most recently pushed context; entries
are never reordered or removed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .durations import TimeUnit, to_seconds


class DialogState(Enum):
    """What the active context is waiting for."""
    IDLE = "idle"
    AWAITING_DURATION = "awaiting_duration"
    AWAITING_CONFIRMATION = "awaiting_confirmation"


@dataclass
class ReminderContext:
    """A reminder being talked about, possibly still missing its duration.

    Attributes:
        id: Reminder id the context was allocated with
        text: Normalized subject
        quantity: Duration quantity once known
        unit: Duration unit once known
        awaiting_confirmation: True after a fired reminder asked whether its
            duration should be remembered
    """
    id: int
    text: Optional[str] = None
    quantity: Optional[int] = None
    unit: Optional[TimeUnit] = None
    awaiting_confirmation: bool = False

    @property
    def is_complete(self) -> bool:
        return bool(self.text) and self.quantity is not None and self.unit is not None

    @property
    def seconds(self) -> Optional[int]:
        if self.quantity is None or self.unit is None:
            return None
        return to_seconds(self.quantity, self.unit)


class DialogHistory:
    """Append-only sequence of reminder contexts."""

    def __init__(self):
        self._contexts: List[ReminderContext] = []

    def push(self, context: ReminderContext) -> ReminderContext:
        self._contexts.append(context)
        return context

    @property
    def active(self) -> Optional[ReminderContext]:
        """The last pushed context, or None if nothing was pushed yet."""
        return self._contexts[-1] if self._contexts else None

    @property
    def state(self) -> DialogState:
        context = self.active
        if context is None:
            return DialogState.IDLE
        if not context.is_complete:
            return DialogState.AWAITING_DURATION
        if context.awaiting_confirmation:
            return DialogState.AWAITING_CONFIRMATION
        return DialogState.IDLE

    def __len__(self) -> int:
        return len(self._contexts)

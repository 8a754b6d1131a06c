"""Pattern-based intent parser for the reminder bot.

Maps plain English utterances to typed commands without any statistical NLU.
Intents are tried strictly in declaration order and the first anchored match
wins, so the order of DEFAULT_INTENTS is a precedence contract: a specific
phrasing ("remind me about X in 5 minutes") must be declared before the
general one that would otherwise swallow it ("remind me about X").
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

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
    Unknown,
)
from .durations import parse_quantity, parse_unit

logger = logging.getLogger(__name__)

# Shared fragments for duration captures
_QUANTITY = r"(?P<quantity>\d+|an?)"
_UNIT = r"(?P<unit>(?:sec|second|min|minute|hour)s?)"
_REMIND = r"(?:remind|tell)\s+me\s+(?:about|of)"
_END = r"\.?"


@dataclass
class Intent:
    """One class of utterance and how to build its command.

    Attributes:
        name: Identifier used in logs
        patterns: Compiled patterns, tried in order and matched in full
        build: Receives the named captures as keyword arguments
    """
    name: str
    patterns: List[re.Pattern]
    build: Callable[..., Command]


def _compile(*patterns: str) -> List[re.Pattern]:
    return [re.compile(pattern, re.IGNORECASE) for pattern in patterns]


def _build_add_reminder(text: str, quantity: str, unit: str) -> Command:
    return AddReminder(text=text, quantity=parse_quantity(quantity), unit=parse_unit(unit))


def _build_time_spec(quantity: str, unit: str) -> Command:
    return TimeSpec(quantity=parse_quantity(quantity), unit=parse_unit(unit))


DEFAULT_INTENTS: List[Intent] = [
    Intent(
        name="help",
        patterns=_compile(rf"help{_END}"),
        build=lambda: Help(),
    ),
    Intent(
        name="add-reminder",
        patterns=_compile(
            rf"{_REMIND}\s+(?P<text>.+?)\s+in\s+{_QUANTITY}\s+{_UNIT}{_END}",
            rf"in\s+{_QUANTITY}\s+{_UNIT},?\s+{_REMIND}\s+(?P<text>.+?){_END}",
        ),
        build=_build_add_reminder,
    ),
    Intent(
        name="add-reminder-no-time",
        patterns=_compile(rf"{_REMIND}\s+(?P<text>.+?){_END}"),
        build=lambda text: AddReminderNoTime(text=text),
    ),
    Intent(
        name="list-reminders",
        patterns=_compile(rf"(?:list|show|tell)\s+(?:(?:me|all|of|my)\s+)*reminders{_END}"),
        build=lambda: ListReminders(),
    ),
    Intent(
        name="clear-all-reminders",
        patterns=_compile(rf"(?:clear|delete|remove|forget)\s+(?:(?:all|of|my)\s+)*reminders{_END}"),
        build=lambda: ClearAllReminders(),
    ),
    Intent(
        name="clear-reminder",
        patterns=_compile(rf"(?:clear|delete|remove|forget)\s+(?:reminder\s+)?(?P<id>\d+){_END}"),
        build=lambda id: ClearReminder(id=int(id)),
    ),
    Intent(
        name="time",
        patterns=_compile(rf"(?:it\s+takes\s+)?{_QUANTITY}\s+{_UNIT}{_END}"),
        build=_build_time_spec,
    ),
    Intent(
        name="confirm",
        patterns=_compile(rf"(?:yes|sure|yeah|ok|okay){_END}"),
        build=lambda: Confirm(accepted=True),
    ),
    Intent(
        name="reject",
        patterns=_compile(rf"(?:no|nope|nevermind){_END}"),
        build=lambda: Confirm(accepted=False),
    ),
]


class IntentParser:
    """Ordered first-match dispatcher from text to Command."""

    def __init__(self, intents: Optional[Sequence[Intent]] = None, fallback: Optional[Command] = None):
        """Initialize the parser.

        Args:
            intents: Intents in precedence order (defaults to DEFAULT_INTENTS)
            fallback: Command returned when nothing matches (defaults to Unknown)
        """
        self.intents = list(intents if intents is not None else DEFAULT_INTENTS)
        self.fallback = fallback if fallback is not None else Unknown()

    def match(self, text: str) -> Tuple[Optional[str], Command]:
        """Parse text and report which intent produced the command.

        Returns:
            (intent name or None for the fallback, command)
        """
        normalized = text.strip()

        for intent in self.intents:
            for pattern in intent.patterns:
                match = pattern.fullmatch(normalized)
                if not match:
                    continue
                try:
                    return intent.name, intent.build(**match.groupdict())
                except ValueError as e:
                    # A capture the builder rejects is a parse-miss, not a fault
                    logger.debug(f"Intent {intent.name} rejected {normalized!r}: {e}")
                    return None, self.fallback

        return None, self.fallback

    def parse(self, text: str) -> Command:
        """Parse text into exactly one Command."""
        return self.match(text)[1]


_default_parser = IntentParser()


def parse_message(text: str) -> Command:
    """Parse an utterance with the default intent table."""
    return _default_parser.parse(text)

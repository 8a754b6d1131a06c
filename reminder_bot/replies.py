"""Reply texts and HTML fragments sent back to the chat client."""

import html
import re
from typing import Iterable

from .durations import format_seconds
from .scheduler import ReminderStatus

GREETING = "Greetings, friend! Type help to get started."
FALLBACK = "I'm sorry, I don't understand what you mean."
NO_REMINDERS = "You have no reminders."
CLEARED_ALL = "Ok, I have cleared all of your reminders."
CONFIRMED = "Consider it done."
DECLINED = "Alright, I won't."

HELP = """I am a reminder bot, here to help you get organized. Here are some of the things you can ask me to do:

<ul>
  <li>Add reminders, e.g. <tt>remind me about dinner in 5 minutes</tt>.</li>
  <li>Add a reminder and tell me the duration afterwards, e.g. <tt>remind me about my homework</tt>, then <tt>20 minutes</tt>.</li>
  <li>List reminders, e.g. <tt>show all reminders</tt>.</li>
  <li>Clear reminders, e.g. <tt>clear all reminders</tt> or <tt>clear reminder 3</tt>.</li>
</ul>

When a reminder goes off I may ask whether to remember how long it takes; answer <tt>yes</tt> or <tt>no</tt>."""


def normalize_subject(text: str) -> str:
    """Rewrite a subject from the user's point of view to the bot's.

    "my homework" -> "your homework", "call me" -> "call you". Whole words
    only, case-sensitive.
    """
    text = re.sub(r"\bmy\b", "your", text)
    return re.sub(r"\bme\b", "you", text)


def scheduled(text: str, seconds: int) -> str:
    return f"Ok, I will remind you about {text} in {format_seconds(seconds)}."


def ask_duration(text: str) -> str:
    return f"How long does {text} take?"


def time_is_up(text: str) -> str:
    return f"It is time for {text}!"


def ask_remember(text: str, seconds: int) -> str:
    return f"Should I remember that {text} takes {format_seconds(seconds)}?"


def cleared(text: str) -> str:
    return f"Ok, I will not remind you about {text}."


def not_found(reminder_id: int) -> str:
    return f"There is no reminder with id {reminder_id}."


def reminder_table(rows: Iterable[ReminderStatus]) -> str:
    """Render active reminders as an HTML table (id / seconds remaining / text)."""
    body = "".join(
        f"""
      <tr>
        <td>{row.id}</td>
        <td>{max(row.remaining, 0)}</td>
        <td>{html.escape(row.text)}</td>
      </tr>"""
        for row in rows
    )
    return f"""
<table border="1">
  <thead>
    <tr>
      <th>id</th>
      <th>seconds remaining</th>
      <th>text</th>
    </tr>
  </thead>
  <tbody>{body}
  </tbody>
</table>"""

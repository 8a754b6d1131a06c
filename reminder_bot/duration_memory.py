"""Session-scoped recall of how long reminder subjects take."""

from typing import Dict, Iterator, Optional, Tuple


class DurationMemory:
    """Exact-string map from reminder subject to a confirmed duration.

    Keys are the normalized subject ("your homework"), case-sensitive, with no
    fuzzy matching. Entries are never evicted for the lifetime of the session.
    """

    def __init__(self):
        self._durations: Dict[str, int] = {}

    def remember(self, text: str, seconds: int) -> None:
        self._durations[text] = seconds

    def lookup(self, text: str) -> Optional[int]:
        return self._durations.get(text)

    def items(self) -> Iterator[Tuple[str, int]]:
        return iter(self._durations.items())

    def __contains__(self, text: object) -> bool:
        return text in self._durations

    def __len__(self) -> int:
        return len(self._durations)

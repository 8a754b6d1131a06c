"""Golden phrase regression tests for the intent table.

Any failing case means the precedence or the shape of a pattern changed.
"""

from pathlib import Path

import pytest
import yaml

from reminder_bot.intent_parser import parse_message


def load_golden_cases():
    """Load golden test cases from YAML file."""
    golden_file = Path(__file__).parent / "data" / "intent_golden.yml"
    with open(golden_file, "r") as f:
        data = yaml.safe_load(f)
    return data["test_cases"]


@pytest.mark.parametrize("case", load_golden_cases(), ids=lambda case: case["phrase"] or "<empty>")
def test_golden_case(case):
    phrase = case["phrase"]
    expected = dict(case["expected"])

    command = parse_message(phrase)

    assert type(command).__name__ == expected.pop("command"), \
        f"Command mismatch for: '{phrase}', got: {command}"

    for field, value in expected.items():
        actual = getattr(command, field)
        if field == "unit":
            actual = actual.value
        assert actual == value, f"{field} mismatch for: '{phrase}'"

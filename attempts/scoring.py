# attempts/scoring.py
"""
Pure scoring policy for attempts.

No ORM access here: callers pass already-loaded values so the same
arithmetic serves submission (auto-grading) and manual grading.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

TWO_PLACES = Decimal("0.01")


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() first so floats like 2.3 do not carry binary noise
    return Decimal(str(value or 0))


def round_half_up(value: Decimal, places: Decimal = TWO_PLACES) -> Decimal:
    return value.quantize(places, rounding=ROUND_HALF_UP)


def percentage_of(obtained, total) -> Decimal:
    """obtained / total * 100, two decimals. 0 when the paper carries no marks."""
    total = to_decimal(total)
    if total <= 0:
        return Decimal("0.00")
    return round_half_up(to_decimal(obtained) / total * 100)


def sum_marks(marks: Iterable) -> Decimal:
    return sum((to_decimal(m) for m in marks), Decimal("0"))


def passed_by_marks(obtained, passing_marks: Optional[int]) -> bool:
    """Paper-configured threshold. No threshold means no pass/fail concept: always passed."""
    if passing_marks is None:
        return True
    return to_decimal(obtained) >= to_decimal(passing_marks)


def passed_by_percentage(percentage, threshold) -> bool:
    return to_decimal(percentage) >= to_decimal(threshold)


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes, half-minutes rounded up."""
    seconds = Decimal(str((end - start).total_seconds()))
    return int(round_half_up(seconds / 60, Decimal("1")))


@dataclass(frozen=True)
class Score:
    total_marks: Decimal
    obtained_marks: Decimal
    percentage: Decimal
    is_passed: bool


def score_on_submit(marks: Iterable, *, total_marks, passing_marks: Optional[int]) -> Score:
    obtained = sum_marks(marks)
    percentage = percentage_of(obtained, total_marks)
    return Score(
        total_marks=to_decimal(total_marks),
        obtained_marks=obtained,
        percentage=percentage,
        is_passed=passed_by_marks(obtained, passing_marks),
    )


def score_on_manual_grade(marks: Iterable, *, total_marks, pass_percentage) -> Score:
    obtained = sum_marks(marks)
    percentage = percentage_of(obtained, total_marks)
    return Score(
        total_marks=to_decimal(total_marks),
        obtained_marks=obtained,
        percentage=percentage,
        is_passed=passed_by_percentage(percentage, pass_percentage),
    )

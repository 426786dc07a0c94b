"""
Todo Domain Service.

Stateless rules that operate on one or many todos but do not belong on a
single instance: overdue check, urgency scoring, completion eligibility
and urgency ordering.

The overdue threshold and urgency cap are fixed business rules.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta

from todo_app.backend.core.utils import to_naive_utc, utc_now
from todo_app.backend.domain.todo import Todo

OVERDUE_AFTER_DAYS = 7
URGENCY_AGE_WEEKS_CAP = 3

_ONE_DAY = timedelta(days=1)


def reference_time(now: datetime | None = None) -> datetime:
    """The given instant as naive UTC, or the current time when omitted."""
    return to_naive_utc(now) if now else utc_now()


def days_since_creation(todo: Todo, now: datetime) -> int:
    """Whole 24h periods elapsed since creation, floored."""
    return (now - todo.created_at) // _ONE_DAY


@dataclass(frozen=True)
class CompletionCheck:
    """Outcome of TodoDomainService.can_complete."""

    can_complete: bool
    reason: str | None = None


class TodoDomainService:
    """Collection-level Todo rules. Holds no state."""

    def is_overdue(self, todo: Todo, now: datetime | None = None) -> bool:
        if todo.completed:
            return False
        return days_since_creation(todo, reference_time(now)) > OVERDUE_AFTER_DAYS

    def calculate_urgency_score(self, todo: Todo, now: datetime | None = None) -> float:
        """
        Priority weight scaled by age.

        Age adds up to three weeks' worth of multiplier, so the score is at
        most 4x the priority weight. Completed todos score zero.
        """
        if todo.completed:
            return 0.0
        weeks = days_since_creation(todo, reference_time(now)) / OVERDUE_AFTER_DAYS
        return todo.priority.numeric_value * (1 + min(weeks, URGENCY_AGE_WEEKS_CAP))

    def can_complete(self, todo: Todo) -> CompletionCheck:
        if todo.completed:
            return CompletionCheck(can_complete=False, reason="Todo is already completed")
        return CompletionCheck(can_complete=True)

    def sort_by_priority(self, todos: Iterable[Todo], now: datetime | None = None) -> list[Todo]:
        """
        Return a new list: incomplete before completed, then by urgency descending.

        The sort is stable and the input collection is not modified.
        """
        reference = reference_time(now)
        return sorted(
            todos,
            key=lambda todo: (todo.completed, -self.calculate_urgency_score(todo, reference)),
        )

"""
Unit Tests for TodoDomainService.
"""

from datetime import UTC, timedelta, timezone

import pytest

from todo_app.backend.domain.services import CompletionCheck, TodoDomainService, days_since_creation, reference_time
from todo_app.backend.domain.specifications import OverdueTodoSpecification


@pytest.fixture
def service():
    return TodoDomainService()


class TestDaysSinceCreation:
    def test_floors_partial_days(self, make_todo, now):
        assert days_since_creation(make_todo(created_at=now), now + timedelta(days=2, hours=23)) == 2

    def test_zero_on_creation(self, make_todo, now):
        assert days_since_creation(make_todo(created_at=now), now) == 0


class TestReferenceTime:
    def test_aware_converted_to_naive_utc(self, now):
        aware = (now + timedelta(hours=2)).replace(tzinfo=timezone(timedelta(hours=2)))
        assert reference_time(aware) == now

    def test_naive_kept(self, now):
        assert reference_time(now) == now

    def test_defaults_to_current_naive_time(self):
        assert reference_time().tzinfo is None


class TestIsOverdue:
    def test_matches_seven_day_rule(self, service, make_todo, now):
        todo = make_todo(created_at=now)
        assert not service.is_overdue(todo, now + timedelta(days=7))
        assert service.is_overdue(todo, now + timedelta(days=8))

    def test_completed_not_overdue(self, service, make_todo, now):
        assert not service.is_overdue(make_todo(created_at=now, completed=True), now + timedelta(days=30))

    def test_aware_now_agrees_with_specification(self, service, make_todo, now):
        todo = make_todo(created_at=now)
        aware = (now + timedelta(days=8)).replace(tzinfo=UTC)

        assert service.is_overdue(todo, aware)
        assert service.is_overdue(todo, aware) == OverdueTodoSpecification(aware).is_satisfied_by(todo)


class TestUrgencyScore:
    def test_completed_scores_zero(self, service, make_todo, now):
        assert service.calculate_urgency_score(make_todo(completed=True, priority="high"), now) == 0

    def test_new_todo_scores_priority_weight(self, service, make_todo, now):
        assert service.calculate_urgency_score(make_todo(priority="high", created_at=now), now) == 3

    def test_age_scales_score(self, service, make_todo, now):
        todo = make_todo(priority="medium", created_at=now)
        assert service.calculate_urgency_score(todo, now + timedelta(days=7)) == pytest.approx(4.0)
        assert service.calculate_urgency_score(todo, now + timedelta(days=14)) == pytest.approx(6.0)

    def test_age_multiplier_capped_at_three_weeks(self, service, make_todo, now):
        todo = make_todo(priority="low", created_at=now)
        assert service.calculate_urgency_score(todo, now + timedelta(days=21)) == pytest.approx(4.0)
        assert service.calculate_urgency_score(todo, now + timedelta(days=400)) == pytest.approx(4.0)


class TestCanComplete:
    def test_incomplete_can_complete(self, service, make_todo):
        assert service.can_complete(make_todo()) == CompletionCheck(can_complete=True)

    def test_completed_reports_reason(self, service, make_todo):
        result = service.can_complete(make_todo(completed=True))
        assert result.can_complete is False
        assert result.reason == "Todo is already completed"


class TestSortByPriority:
    def test_incomplete_before_completed_then_by_urgency(self, service, make_todo, now):
        done_high = make_todo(title="done high", completed=True, priority="high", id=1)
        open_low = make_todo(title="open low", priority="low", id=2)
        open_high = make_todo(title="open high", priority="high", id=3)

        result = service.sort_by_priority([done_high, open_low, open_high], now)

        assert [t.title.value for t in result] == ["open high", "open low", "done high"]

    def test_old_low_priority_can_outrank_new_medium(self, service, make_todo, now):
        old_low = make_todo(title="old low", priority="low", created_at=now - timedelta(days=21))
        new_medium = make_todo(title="new medium", priority="medium", created_at=now)

        result = service.sort_by_priority([new_medium, old_low], now)

        assert result[0].title.value == "old low"

    def test_input_not_mutated(self, service, make_todo, now):
        todos = [make_todo(completed=True, id=1), make_todo(priority="high", id=2)]
        original = list(todos)

        result = service.sort_by_priority(todos, now)

        assert todos == original
        assert result is not todos

    def test_stable_for_equal_scores(self, service, make_todo, now):
        first = make_todo(title="first", id=1)
        second = make_todo(title="second", id=2)
        assert service.sort_by_priority([first, second], now) == [first, second]


class TestAwareReferenceTimes:
    def test_urgency_score_with_aware_now(self, service, make_todo, now):
        todo = make_todo(priority="high", created_at=now)
        aware = (now + timedelta(days=7)).replace(tzinfo=UTC)

        assert service.calculate_urgency_score(todo, aware) == service.calculate_urgency_score(
            todo, now + timedelta(days=7),
        )

    def test_sort_with_aware_now(self, service, make_todo, now):
        todos = [
            make_todo(title="new medium", priority="medium", created_at=now),
            make_todo(title="old low", priority="low", created_at=now - timedelta(days=14)),
        ]

        result = service.sort_by_priority(todos, now.replace(tzinfo=UTC))

        assert [todo.title.value for todo in result] == ["old low", "new medium"]

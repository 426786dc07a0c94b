"""
Todo Specifications.

Boolean predicates over a candidate object, composable into trees with
and_/or_/not_ (or the &, | and ~ operators). Composite nodes evaluate
left to right and short-circuit.

    overdue_and_urgent = OverdueTodoSpecification() & HighPriorityTodoSpecification()
    todos = [t for t in todos if overdue_and_urgent.is_satisfied_by(t)]
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Generic, TypeVar

from todo_app.backend.domain.services import OVERDUE_AFTER_DAYS, days_since_creation, reference_time
from todo_app.backend.domain.todo import Todo

T = TypeVar("T")


class Specification(ABC, Generic[T]):
    """Base predicate."""

    @abstractmethod
    def is_satisfied_by(self, candidate: T) -> bool:
        """Return True when the candidate meets this specification."""

    def and_(self, other: "Specification[T]") -> "Specification[T]":
        return AndSpecification(self, other)

    def or_(self, other: "Specification[T]") -> "Specification[T]":
        return OrSpecification(self, other)

    def not_(self) -> "Specification[T]":
        return NotSpecification(self)

    def __and__(self, other: "Specification[T]") -> "Specification[T]":
        return self.and_(other)

    def __or__(self, other: "Specification[T]") -> "Specification[T]":
        return self.or_(other)

    def __invert__(self) -> "Specification[T]":
        return self.not_()


class AndSpecification(Specification[T]):
    def __init__(self, left: Specification[T], right: Specification[T]) -> None:
        self.left = left
        self.right = right

    def is_satisfied_by(self, candidate: T) -> bool:
        return self.left.is_satisfied_by(candidate) and self.right.is_satisfied_by(candidate)


class OrSpecification(Specification[T]):
    def __init__(self, left: Specification[T], right: Specification[T]) -> None:
        self.left = left
        self.right = right

    def is_satisfied_by(self, candidate: T) -> bool:
        return self.left.is_satisfied_by(candidate) or self.right.is_satisfied_by(candidate)


class NotSpecification(Specification[T]):
    def __init__(self, spec: Specification[T]) -> None:
        self.spec = spec

    def is_satisfied_by(self, candidate: T) -> bool:
        return not self.spec.is_satisfied_by(candidate)


class ActiveTodoSpecification(Specification[Todo]):
    def is_satisfied_by(self, candidate: Todo) -> bool:
        return not candidate.completed


class CompletedTodoSpecification(Specification[Todo]):
    def is_satisfied_by(self, candidate: Todo) -> bool:
        return candidate.completed


class OverdueTodoSpecification(Specification[Todo]):
    """Incomplete todos created more than seven whole days before the reference date."""

    def __init__(self, reference_date: datetime | None = None) -> None:
        self.reference_date = reference_time(reference_date)

    def is_satisfied_by(self, candidate: Todo) -> bool:
        if candidate.completed:
            return False
        return days_since_creation(candidate, self.reference_date) > OVERDUE_AFTER_DAYS


class HighPriorityTodoSpecification(Specification[Todo]):
    def is_satisfied_by(self, candidate: Todo) -> bool:
        return candidate.priority.level == "high"

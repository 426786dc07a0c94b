"""
Todo Validation Service.

Checks raw input (decoded JSON bodies, query strings, CLI arguments)
against the command and query schemas, then runs the title and priority
value objects over the fields they own. Returns either the typed command
or a structured field-error list.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from todo_app.backend.core.exceptions import ValidationError
from todo_app.backend.domain.value_objects import TodoPriority, TodoTitle
from todo_app.backend.schemas.todo import (
    CreateTodoCommand,
    DeleteTodoCommand,
    GetFilteredTodosQuery,
    GetTodoByIdQuery,
    ToggleTodoCommand,
    UpdateTodoCommand,
)

ModelT = TypeVar("ModelT", bound=BaseModel)

_VALUE_OBJECT_FIELDS = {"title": TodoTitle, "priority": TodoPriority}


@dataclass(frozen=True)
class ValidationResult(Generic[ModelT]):
    """Either a validated value or the list of field errors."""

    value: ModelT | None = None
    errors: list[dict[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _field_errors(exc: PydanticValidationError) -> list[dict[str, str]]:
    return [
        {
            "field": ".".join(str(loc) for loc in err.get("loc", ())) or "__root__",
            "message": err.get("msg", "Validation error"),
            "type": err.get("type", "unknown"),
        }
        for err in exc.errors()
    ]


def _value_object_errors(model: BaseModel) -> list[dict[str, str]]:
    errors = []
    for name, value_object in _VALUE_OBJECT_FIELDS.items():
        value = getattr(model, name, None)
        if value is None:
            continue
        try:
            value_object(value)
        except ValidationError as e:
            errors.append({"field": name, "message": e.message, "type": e.code})
    return errors


class TodoValidationService:
    """One validator per command/query type."""

    def validate(self, schema: type[ModelT], data: Mapping[str, Any]) -> ValidationResult[ModelT]:
        try:
            value = schema.model_validate(dict(data))
        except PydanticValidationError as e:
            return ValidationResult(errors=_field_errors(e))

        errors = _value_object_errors(value)
        if errors:
            return ValidationResult(errors=errors)
        return ValidationResult(value=value)

    def validate_or_raise(self, schema: type[ModelT], data: Mapping[str, Any]) -> ModelT:
        """
        Raises:
            ValidationError: With details["validation_errors"] listing each field error
        """
        result = self.validate(schema, data)
        if not result.ok:
            raise ValidationError(
                f"Invalid {schema.__name__}",
                details={"validation_errors": result.errors},
            )
        return result.value

    def validate_create(self, data: Mapping[str, Any]) -> ValidationResult[CreateTodoCommand]:
        return self.validate(CreateTodoCommand, data)

    def validate_update(self, data: Mapping[str, Any]) -> ValidationResult[UpdateTodoCommand]:
        return self.validate(UpdateTodoCommand, data)

    def validate_delete(self, data: Mapping[str, Any]) -> ValidationResult[DeleteTodoCommand]:
        return self.validate(DeleteTodoCommand, data)

    def validate_toggle(self, data: Mapping[str, Any]) -> ValidationResult[ToggleTodoCommand]:
        return self.validate(ToggleTodoCommand, data)

    def validate_todo_id(self, data: Mapping[str, Any]) -> ValidationResult[GetTodoByIdQuery]:
        return self.validate(GetTodoByIdQuery, data)

    def validate_filter_query(self, data: Mapping[str, Any]) -> ValidationResult[GetFilteredTodosQuery]:
        return self.validate(GetFilteredTodosQuery, data)

"""
Todo Model.

Storage record for the Todo aggregate. The repository maps records to
domain objects; nothing outside repositories/ touches this class.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from todo_app.backend.models.base import Base, HexIdMixin, TimestampMixin


class TodoRecord(HexIdMixin, TimestampMixin, Base):
    """Row in the todos table."""

    __tablename__ = "todos"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)
    priority: Mapped[str] = mapped_column(String(10), default="medium", nullable=False)
    due_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    def __repr__(self) -> str:
        return f"<TodoRecord(id={self.id}, title={self.title!r}, completed={self.completed})>"

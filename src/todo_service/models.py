from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, TypedDict, Union

# Due dates arrive as datetime/date objects from Python callers and as
# ISO8601 strings from the HTTP layer and storage backends.
When = Union[datetime, date, str]

STATUS_PENDING = "pending"
STATUS_LATE = "late"

INVALID_DATA_MESSAGE = "invalid data"


# PUBLIC_INTERFACE
@dataclass
class Todo:
    """
    A single task as handed to the service by a caller.

    Fields:
    - text: Task description (empty is invalid)
    - when: Due date; datetime, date or ISO8601 string (empty is invalid)
    - status: 'pending' or 'late', filled in by the service on create
    - id: Identifier, filled in by the service on create
    """

    text: str = ""
    when: When = ""
    status: str = ""
    id: str = ""

    def __post_init__(self) -> None:
        if self.text is None:
            self.text = ""
        if self.when is None:
            self.when = ""

    def to_dict(self) -> Dict[str, Any]:
        """Return the four todo fields in declaration order."""
        return {
            "text": self.text,
            "when": self.when,
            "status": self.status,
            "id": self.id,
        }


# PUBLIC_INTERFACE
class TodoRecord(TypedDict, total=False):
    """
    A todo as stored by a repository backend.

    Backends may add their own keys (e.g. 'meta', '$loki'); those are passed
    through untouched by the service.
    """

    text: str
    when: Any
    status: str
    id: str


class InvalidData(TypedDict):
    message: str
    data: Dict[str, Any]


# PUBLIC_INTERFACE
class ErrorResult(TypedDict):
    """Result returned by TodoService.create when the todo fails validation."""

    error: InvalidData


def invalid_data(todo: Todo) -> ErrorResult:
    return {"error": {"message": INVALID_DATA_MESSAGE, "data": todo.to_dict()}}

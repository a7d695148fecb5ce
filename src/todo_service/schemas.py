from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import When


def parse_when(value: Optional[When]) -> datetime:
    """
    Normalize a due date into an aware datetime.
    - If value is a string, parse it as ISO8601; a bare date is set to 00:00.
    - If value is a date (not datetime), convert to datetime at 00:00.
    - Naive results are taken to be UTC.

    Raises ValueError when the value is empty or cannot be parsed.
    """
    if value is None or value == "":
        raise ValueError("when is required")

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        # Promote a date to a datetime at midnight
        parsed = datetime(value.year, value.month, value.day, 0, 0, 0)
    elif isinstance(value, str):
        s = value.strip()
        try:
            parsed = datetime.fromisoformat(s)
        except ValueError:
            try:
                d = date.fromisoformat(s)
            except ValueError as e:
                raise ValueError(
                    "Invalid when format. Use ISO8601 date or datetime string (e.g., '2025-01-31' or '2025-01-31T13:45:00Z')."
                ) from e
            parsed = datetime(d.year, d.month, d.day, 0, 0, 0)
    else:
        raise ValueError("Invalid type for when; expected date, datetime, or ISO8601 string.")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Request body for creating a todo.

    Fields are not checked for emptiness here; the service reports empty or
    unparseable values as an 'invalid data' result.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "text": "I must plan my trip to Europe",
                "when": "2021-03-22T00:00:00.000Z",
            }
        }
    )

    text: str = Field(default="", description="Task description")
    when: str = Field(default="", description="Due date as an ISO8601 date or datetime")


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    A stored todo as returned by the API.

    Backend metadata (e.g. 'meta', '$loki') is kept as extra fields.
    """

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "text": "I MUST PLAN MY TRIP TO EUROPE",
                "when": "2021-03-22T00:00:00.000Z",
                "status": "late",
                "id": "3b69f9c1-3c7a-40a8-96eb-9094ea957f83",
                "meta": {"revision": 0, "created": 1691176461051, "version": 0},
                "$loki": 3,
            }
        },
    )

    text: str = Field(..., description="Task description")
    when: Any = Field(..., description="Due date")
    status: str = Field(..., description="'pending' or 'late'")
    id: str = Field(..., description="Unique identifier of the todo item")


class InvalidDataOut(BaseModel):
    message: str = Field(..., description="Always 'invalid data'")
    data: Dict[str, Any] = Field(..., description="The rejected todo, including its assigned id")


class ErrorOut(BaseModel):
    """Body of a 400 response from the create endpoint."""

    error: InvalidDataOut

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from .clock import Clock, SystemClock
from .id_generators import IdGenerator, UUIDv4Generator
from .models import STATUS_LATE, STATUS_PENDING, ErrorResult, Todo, TodoRecord, invalid_data
from .repositories import TodoRepository
from .schemas import parse_when

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class TodoService:
    """
    Business logic in front of a todo repository.

    - list: stored records with their text uppercased for display
    - create: assign an id, validate, derive the status and persist
    """

    def __init__(
        self,
        todo_repository: TodoRepository,
        *,
        clock: Optional[Clock] = None,
        id_generator: Optional[IdGenerator] = None,
    ) -> None:
        self.todo_repository = todo_repository
        self.clock = clock or SystemClock()
        self.id_generator = id_generator or UUIDv4Generator()

    async def list(self) -> List[Dict[str, Any]]:
        items = await self.todo_repository.list()
        return [{**item, "text": item["text"].upper()} for item in items]

    async def create(self, todo: Todo) -> Union[TodoRecord, ErrorResult]:
        """
        Persist a new todo.

        The id is assigned before validation, so an 'invalid data' result
        echoes the todo with its id. Validation failures are returned, not
        raised; repository errors propagate.
        """
        todo.id = self.id_generator.new_id()

        due = self._due_date(todo)
        if not todo.text or due is None:
            logger.warning("Rejected todo %s: invalid data", todo.id)
            return invalid_data(todo)

        todo.status = STATUS_PENDING if due > self.clock.now() else STATUS_LATE
        logger.debug("Creating todo %s with status %s", todo.id, todo.status)
        return await self.todo_repository.create(todo.to_dict())

    @staticmethod
    def _due_date(todo: Todo) -> Optional[datetime]:
        if not todo.when:
            return None
        try:
            return parse_when(todo.when)
        except ValueError:
            return None

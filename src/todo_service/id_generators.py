"""Identifier sources for new todos."""

from __future__ import annotations

import abc
import uuid


class IdGenerator(abc.ABC):
    """Contract for an ID generator."""

    @abc.abstractmethod
    def new_id(self) -> str:
        """Generate a new unique identifier."""


# PUBLIC_INTERFACE
class UUIDv4Generator(IdGenerator):
    """Random UUIDv4 identifiers (the default for TodoService)."""

    def new_id(self) -> str:
        return str(uuid.uuid4())


class FixedIdGenerator(IdGenerator):
    """Always returns the same identifier. Meant for deterministic tests."""

    def __init__(self, value: str) -> None:
        self._value = value

    def new_id(self) -> str:
        return self._value


class SequentialIdGenerator(IdGenerator):
    """
    Zero-padded counter ids ('0001', '0002', ...).

    Not suitable for production use; primarily for tests and demos.
    """

    def __init__(self, width: int = 4) -> None:
        self._counter = 0
        self._width = width

    def new_id(self) -> str:
        self._counter += 1
        return f"{self._counter:0{self._width}d}"

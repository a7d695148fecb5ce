from __future__ import annotations


class TodoServiceError(Exception):
    """Base class for errors raised by the todo service package."""


# PUBLIC_INTERFACE
class RepositoryError(TodoServiceError):
    """
    Raised by a storage backend when it cannot complete a list/create call.

    The underlying driver error is chained as __cause__.
    """

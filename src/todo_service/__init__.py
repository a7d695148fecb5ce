"""
Todo service package.

Lists and creates todos in front of a pluggable repository. The FastAPI app
lives in todo_service.main and is not imported here, so the service can be
used without building the web application.
"""

from .models import Todo
from .services import TodoService

__all__ = ["Todo", "TodoService"]

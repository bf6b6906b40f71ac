class TodosError(Exception):
    """Base class for errors raised by the todos package."""


class UnsupportedOperationError(TodosError, NotImplementedError):
    """The selected backend does not implement this operation."""

    def __init__(self, backend: str, operation: str):
        self.backend = backend
        self.operation = operation
        super().__init__(f"{backend} does not support {operation}()")


class DuplicateTitleError(TodosError):
    """A todo list with this title already exists."""

    def __init__(self, title: str):
        self.title = title
        super().__init__(f"todo list title already exists: {title!r}")

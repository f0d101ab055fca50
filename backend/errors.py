class TaskStoreError(Exception):
    """Base class for errors raised by task stores."""

    default_message = "Task store error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TaskStoreError):
    default_message = "Invalid task data"


class NotFound(TaskStoreError):
    default_message = "Task not found"


class StoreUnavailable(TaskStoreError):
    default_message = "Task store is unavailable"

class TaskError(Exception):
    """Base class for every error TaskForge reports to the user."""


class ValidationError(TaskError, ValueError):
    """Bad user input: blank description, priority out of range, bad date."""


class TaskNotFoundError(TaskError, LookupError):
    """No task at the requested index or with the requested id."""


class PersistenceError(TaskError):
    """The task file could not be written."""

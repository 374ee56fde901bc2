"""Agent task exceptions.

Every agent task raises a subclass of AgentTaskError, so callers can catch the
whole family coarsely or a single failure kind when they need to.
"""


class AgentTaskError(Exception):
    """Base exception for agent task failures."""

    pass


class ValidationError(AgentTaskError):
    """Raised when task input is missing or malformed."""

    pass


class InsufficientDataError(AgentTaskError):
    """Raised when the records a task needs are absent."""

    pass


class InferenceError(AgentTaskError):
    """Raised when the language model call fails."""

    pass


class MalformedResponseError(AgentTaskError):
    """Raised when the model reply is not the expected JSON shape."""

    pass


class NotFoundError(AgentTaskError):
    """Raised when a referenced record does not exist."""

    pass


class PersistenceError(AgentTaskError):
    """Raised when a store write fails."""

    pass

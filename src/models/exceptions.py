"""
Error kinds raised by the classification engine.

InvalidAnswer and IncompleteResponses are contract violations surfaced to the
caller immediately. PersistenceUnavailable is raised by storage backends and
recovered inside ClassificationStore; it never reaches callers of the store.
"""


class LearnStyleError(Exception):
    """Base class for all classification engine errors."""


class InvalidAnswer(LearnStyleError, ValueError):
    """Unknown item id, or an option id that does not belong to the item."""

    def __init__(self, item_id: str, option_id: str, reason: str):
        self.item_id = item_id
        self.option_id = option_id
        self.reason = reason
        super().__init__(f"Invalid answer {option_id!r} for item {item_id!r}: {reason}")


class IncompleteResponses(LearnStyleError, ValueError):
    """Resolution attempted before every questionnaire item was answered."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(
            f"Cannot resolve classification: {len(self.missing)} item(s) unanswered "
            f"({', '.join(self.missing)})"
        )


class PersistenceUnavailable(LearnStyleError, RuntimeError):
    """Storage medium could not be read or written."""


class SessionStateError(LearnStyleError, RuntimeError):
    """Operation not permitted in the session's current state."""

    def __init__(self, operation: str, state: str):
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot {operation} while session is {state}")

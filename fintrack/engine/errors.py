"""Failures raised by the filter layer, the aggregation engine and the store."""


class FinanceError(Exception):
    """Base class. ``kind`` is the stable name reported to API callers."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def kind(self) -> str:
        return type(self).__name__


class InvalidDateRange(FinanceError):
    """A date bound is malformed, or the start falls after the end."""


class InvalidGoal(FinanceError):
    """A savings goal has a non-positive target or a negative current amount."""


class InvalidCategory(FinanceError):
    """A category write names an unknown kind."""


class InvalidTransaction(FinanceError):
    """A transaction write carries a non-positive or malformed amount."""


class ReferentialIntegrityViolation(FinanceError):
    """A transaction points at a category its owner does not own."""


class RecordNotFound(FinanceError):
    """An owner-scoped lookup found nothing."""


class InvalidRequest(FinanceError):
    """A request could not be read at all (bad path id, missing body)."""

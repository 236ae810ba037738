"""Structured error hierarchy for polity."""


class PolityError(Exception):
    """Base for all polity errors."""

    pass


class CliqueBudgetExceeded(PolityError):
    """Clique enumeration ran past its recursion budget."""

    def __init__(self, calls: int, budget: int):
        self.calls = calls
        self.budget = budget
        super().__init__(f"Clique enumeration exceeded budget ({calls} calls > {budget})")


class SerializationError(PolityError):
    """Tracker snapshot serialization/deserialization failed."""

    pass


class ValidationError(PolityError):
    """Input validation at boundary failed."""

    pass

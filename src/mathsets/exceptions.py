"""Exception hierarchy for mathsets."""


class MathSetsError(Exception):
    """Base exception for all mathsets errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidRowCountError(MathSetsError, ValueError):
    """Row count outside the range the lab can display."""

    def __init__(self, rows: object, minimum: int, maximum: int | None = None):
        if maximum is None:
            message = f"Row count must be an integer >= {minimum}, got {rows!r}."
        else:
            message = f"Row count must be an integer in [{minimum}, {maximum}], got {rows!r}."
        super().__init__(message, details={"rows": rows, "minimum": minimum, "maximum": maximum})
        self.rows = rows


class StepOutOfRangeError(MathSetsError, IndexError):
    """A step index or cell coordinate that does not exist in the triangle."""

    def __init__(self, message: str, step: int | None = None):
        super().__init__(message, details={"step": step} if step is not None else None)
        self.step = step

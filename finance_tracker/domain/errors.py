"""Domain exceptions."""


class FinanceTrackerError(Exception):
    """Base class for recoverable finance tracker errors."""


class ValidationError(FinanceTrackerError):
    """Raised when a payload fails field-level validation.

    Attributes:
        field_errors: Mapping of field name to a human-readable message.
    """

    def __init__(self, field_errors: dict[str, str]) -> None:
        self.field_errors = dict(field_errors)
        details = "; ".join(
            f"{field}: {message}" for field, message in self.field_errors.items()
        )
        super().__init__(f"Invalid payload: {details}")


__all__ = ["FinanceTrackerError", "ValidationError"]

"""Domain-specific exceptions: framework-independent."""


class ValidationError(Exception):
    """Raised when a visit record violates one or more field constraints.

    Carries every violated-rule message so callers can report all
    problems at once.
    """

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(f"Invalid data: {', '.join(self.errors)}")


class InvalidFieldError(ValueError):
    """Raised when a single field is assigned a value that breaks its constraint."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


class StoreError(Exception):
    """Raised when the backing store fails (connection, driver, constraint)."""


class ConstraintError(StoreError):
    """Raised when a row is rejected by a store-level constraint check."""

    def __init__(self, constraint: str, detail: str = ""):
        self.constraint = constraint
        self.detail = detail
        message = f"Constraint '{constraint}' violated"
        if detail:
            message += f": {detail}"
        super().__init__(message)

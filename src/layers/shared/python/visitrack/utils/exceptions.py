"""Application exceptions mapped to API error responses."""


class VisitrackError(Exception):
    """Base class for errors surfaced to API callers."""

    def __init__(self, message: str, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class ValidationError(VisitrackError):
    """Request input failed validation."""

    def __init__(self, message: str = "Validation failed", errors: list[dict] | None = None):
        super().__init__(message, error_code="VALIDATION_ERROR")
        self.errors = errors or []


class InvalidRangeError(ValidationError):
    """Statistics were requested for an unsupported range."""

    def __init__(self, value: object, allowed: list[str]):
        super().__init__(
            f"Invalid range: {value}. Use {', '.join(allowed)}",
            errors=[{"field": "range", "message": f"Must be one of: {', '.join(allowed)}"}],
        )
        self.error_code = "INVALID_RANGE"
        self.value = value
        self.allowed = allowed

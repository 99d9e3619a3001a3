"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity or path does not exist."""


def invalid_field(record_kind: str, field: str, value, reason: str) -> str:
    """Return message for a record field that failed validation."""
    return f"Invalid {record_kind} {field} {value!r}: {reason}"


def missing_field(record_kind: str, field: str) -> str:
    """Return message for a record missing a required field."""
    return f"{record_kind.capitalize()} record is missing required field '{field}'"


def negative_forecast_horizon(months: int) -> str:
    """Return message for a negative forecast horizon."""
    return f"Months to forecast must be zero or greater, got {months}"


def data_file_not_found(path: str) -> str:
    """Return message for a missing data snapshot."""
    return f"Data file '{path}' not found"


def malformed_data_file(path: str, reason: str) -> str:
    """Return message for a data snapshot that cannot be read."""
    return f"Could not read data file '{path}': {reason}"

"""
Exception hierarchy for the rental engine and its data sources.
"""


class RentalEngineError(Exception):
    """Base exception for all rental dashboard errors."""


class ConnectivityError(RentalEngineError):
    """Raised when the data source cannot be reached or returns an error payload."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class ValidationError(RentalEngineError):
    """Raised when mutation input or a filter value is not acceptable."""


class PaymentNotFoundError(RentalEngineError):
    """Raised when a payment update matched no record."""

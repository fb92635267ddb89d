"""Exception hierarchy for the property calculator."""


class CalculatorError(Exception):
    """Base exception for all calculator errors."""


class InvalidInputError(CalculatorError, ValueError):
    """Raised when an input field violates its allowed range."""


class InvalidCategoryError(InvalidInputError):
    """Raised when a value falls outside its enumerated domain."""


class ConfigurationError(CalculatorError):
    """Raised when configuration is invalid or malformed."""

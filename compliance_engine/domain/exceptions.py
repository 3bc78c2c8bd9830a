"""Domain-specific exceptions"""

from typing import Any


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """Request field is malformed or out of range"""

    def __init__(self, field: str, constraint: str, value: Any = None):
        self.field = field
        self.constraint = constraint
        self.value = value
        super().__init__(f"Invalid {field}: {constraint}")


class ConfigurationError(DomainException):
    """Rule constants are inconsistent; evaluations must not run with them"""

    pass


class UnknownOperationError(DomainException):
    """Dispatcher was asked for an operation it does not know"""

    pass

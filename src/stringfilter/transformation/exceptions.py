"""
Filter Exceptions

Two failure kinds:
- InvalidConfiguration: the filter options themselves are wrong (programmer error)
- ValidationError: the input value failed a rule (expected, handle per record)
"""

from typing import Any, Optional


class FilterError(Exception):
    """Base class for every failure raised by a filter"""

    def __init__(self, message: str, value: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.value = value

    def __str__(self) -> str:
        return self.message


class InvalidConfiguration(FilterError, ValueError):
    """Raised when caller-supplied filter options are structurally invalid"""


class ValidationError(FilterError):
    """Raised when an input value fails a content or type rule"""

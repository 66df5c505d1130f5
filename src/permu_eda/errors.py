"""
Exceptions raised by permu_eda.

Every recoverable condition derives from PermuError. ElementRangeError marks a
misconfigured element width and is not meant to be caught.
"""

from typing import Optional


class PermuError(Exception):
    """Base class for all permu_eda errors."""

    default_message = "permu_eda error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class LengthError(PermuError, ValueError):
    """The shape of a given vector, population or matrix is not the expected one."""

    default_message = "LengthError: please check the shape of the given argument"


class NotPermutation(PermuError, ValueError):
    """A sequence expected to be a permutation is not one."""

    default_message = (
        "NotPermutation: permutation expected but no permutation vector was found"
    )


class IncorrectDistrType(PermuError, TypeError):
    """A distribution of another representation was given."""

    default_message = "IncorrectDistrType: incorrect distribution given"


class IncorrectProblemInstance(PermuError, TypeError):
    """An instance was used with the wrong problem type."""

    default_message = "IncorrectProblemInstance: incorrect problem instance given"


class ParseError(PermuError, ValueError):
    """A token of an instance file could not be parsed."""

    default_message = "ParseError: error occurred during a parse operation"


class InstanceIOError(PermuError):
    """An instance file is missing, unreadable or malformed."""

    default_message = "IO error while reading a problem instance"


class ElementRangeError(PermuError, OverflowError):
    """A value or length does not fit the configured element dtype."""

    default_message = "value out of range for the element dtype"


class InvalidVector(PermuError, ValueError):
    """An encoded vector holds a value its position does not admit."""

    default_message = "InvalidVector: the vector does not encode a permutation"

"""
Element dtypes for vectors and populations.

Vectors store their values in unsigned numpy integers of a fixed width.
Index arithmetic is done with Python ints; values are only narrowed to the
element dtype when they are stored.
"""

from typing import Iterable, Union

import numpy as np

from ..errors import ElementRangeError

ELEMENT_DTYPES = (np.uint8, np.uint16, np.uint32, np.uint64)
DEFAULT_DTYPE = np.uint16

DTypeLike = Union[str, type, np.dtype]


def element_dtype(dtype: DTypeLike = None) -> np.dtype:
    """
    Resolve and validate an element dtype.

    Args:
        dtype: Anything numpy accepts as a dtype, or None for the default

    Returns:
        The resolved numpy dtype

    Raises:
        TypeError: If the dtype is not one of the unsigned integer widths
    """
    resolved = np.dtype(DEFAULT_DTYPE if dtype is None else dtype)
    if resolved not in [np.dtype(d) for d in ELEMENT_DTYPES]:
        raise TypeError(f"element dtype must be an unsigned integer, got {resolved}")
    return resolved


def max_value(dtype: DTypeLike) -> int:
    """Largest value representable by the element dtype."""
    return int(np.iinfo(element_dtype(dtype)).max)


def check_length(length: int, dtype: DTypeLike) -> None:
    """
    Check that vectors of the given length can be expressed in the dtype.

    Raises:
        ElementRangeError: If length is larger than the dtype's max value
    """
    if length < 0:
        raise ValueError("length must be non-negative")
    limit = max_value(dtype)
    if length > limit:
        raise ElementRangeError(
            f"length {length} does not fit in {np.dtype(dtype)} (max {limit})"
        )


def narrow(values: Iterable[int], dtype: DTypeLike) -> np.ndarray:
    """
    Convert integer values to a 1-D or 2-D array of the element dtype.

    Args:
        values: Integers (list, tuple or array)
        dtype: Target element dtype

    Returns:
        New array of the element dtype

    Raises:
        ElementRangeError: If any value is negative or above the dtype's max
        TypeError: If the values are not integers
    """
    dtype = element_dtype(dtype)
    arr = np.asarray(values)
    if arr.size == 0:
        return np.zeros(arr.shape, dtype=dtype)
    is_python_ints = arr.dtype.kind == "O" and all(isinstance(v, int) for v in arr.flat)
    if arr.dtype.kind not in "iu" and not is_python_ints:
        raise TypeError(f"integer values expected, got {arr.dtype}")
    lo, hi = int(arr.min()), int(arr.max())
    limit = int(np.iinfo(dtype).max)
    if lo < 0 or hi > limit:
        raise ElementRangeError(
            f"values must be within [0, {limit}] for {dtype}, got [{lo}, {hi}]"
        )
    return arr.astype(dtype)

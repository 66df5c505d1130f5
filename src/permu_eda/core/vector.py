"""
Base class for the integer vectors handled by permu_eda.

A vector wraps a 1-D numpy array of an unsigned element dtype. Permutations,
inversion vectors and RIM vectors all share this storage.
"""

from typing import Iterator, List, Sequence

import numpy as np

from .dtypes import DTypeLike, check_length, element_dtype, narrow


class IntVector:
    """
    A 1-D vector of non-negative integers stored in a fixed-width dtype.

    Attributes:
        values: The underlying numpy array
    """

    kind = "Vector"

    def __init__(self, values: Sequence[int], dtype: DTypeLike = None):
        """
        Wrap the given values without any structural check.

        Args:
            values: Integer values
            dtype: Element dtype; defaults to the dtype of an unsigned numpy
                array, or to DEFAULT_DTYPE otherwise
        """
        if dtype is None and isinstance(values, np.ndarray) and values.dtype.kind == "u":
            dtype = values.dtype
        arr = narrow(values, dtype)
        if arr.ndim != 1:
            raise ValueError(f"{self.kind} values must be one-dimensional")
        self.values = arr

    @classmethod
    def zeros(cls, length: int, dtype: DTypeLike = None):
        """Create a vector of the given length filled with zeros."""
        dtype = element_dtype(dtype)
        check_length(length, dtype)
        return cls(np.zeros(length, dtype=dtype), dtype=dtype)

    @property
    def dtype(self) -> np.dtype:
        """Element dtype."""
        return self.values.dtype

    def tolist(self) -> List[int]:
        """Values as a list of Python ints."""
        return self.values.tolist()

    def copy(self):
        """Create a copy of this vector."""
        return type(self)(self.values.copy(), dtype=self.dtype)

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[int]:
        return iter(self.tolist())

    def __getitem__(self, index):
        return self.values[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, IntVector) or type(other) is not type(self):
            return NotImplemented
        return bool(np.array_equal(self.values, other.values))

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.tolist()})"

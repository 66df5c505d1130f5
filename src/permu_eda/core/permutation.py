"""
Permutation representation.

A permutation of length n holds every value of [0, n) exactly once.
"""

from typing import List, Optional, Sequence

import numpy as np

from ..distribution.engine import Representation
from ..errors import ElementRangeError, NotPermutation
from .dtypes import DTypeLike, check_length, element_dtype, max_value
from .population import Population
from .vector import IntVector


def _rows_are_permutations(matrix: np.ndarray) -> np.ndarray:
    """Boolean per row: does the row hold each of 0..length-1 exactly once."""
    length = matrix.shape[1]
    return (np.sort(matrix, axis=1) == np.arange(length)).all(axis=1)


class Permutation(IntVector):
    """
    A permutation vector.

    The plain constructor does not validate its input; use from_sequence()
    (or validate()) when the values come from outside.
    """

    kind = "Permutation"

    @classmethod
    def from_sequence(cls, values: Sequence[int], dtype: DTypeLike = None) -> "Permutation":
        """
        Create a permutation, checking that the values form one.

        Raises:
            NotPermutation: If the values are not a permutation
        """
        return cls(values, dtype).validate()

    @classmethod
    def unchecked(cls, values: Sequence[int], dtype: DTypeLike = None) -> "Permutation":
        """Create a permutation without checking the values."""
        return cls(values, dtype)

    @classmethod
    def identity(cls, length: int, dtype: DTypeLike = None) -> "Permutation":
        """
        Create the identity permutation [0, 1, ..., length-1].

        Raises:
            ElementRangeError: If length does not fit the dtype
        """
        dtype = element_dtype(dtype)
        check_length(length, dtype)
        return cls(np.arange(length, dtype=dtype), dtype)

    @classmethod
    def random(
        cls,
        length: int,
        dtype: DTypeLike = None,
        rng: Optional[np.random.Generator] = None,
    ) -> "Permutation":
        """
        Generate a uniformly random permutation by rejection sampling.

        Values are drawn from [0, length) and appended when not seen yet,
        until every value has been collected.

        Args:
            length: Permutation length
            dtype: Element dtype
            rng: Random generator

        Raises:
            ElementRangeError: If length does not fit the dtype
        """
        dtype = element_dtype(dtype)
        check_length(length, dtype)
        rng = rng if rng is not None else np.random.default_rng()

        seen = np.zeros(length, dtype=bool)
        values: List[int] = []
        while len(values) < length:
            for n in rng.integers(0, length, size=length).tolist():
                if not seen[n]:
                    seen[n] = True
                    values.append(n)
        return cls(np.array(values, dtype=dtype), dtype)

    def is_permutation(self) -> bool:
        """Check that each value of [0, len) occurs exactly once."""
        return bool(_rows_are_permutations(self.values[np.newaxis, :])[0])

    def validate(self) -> "Permutation":
        """
        Check this is a real permutation.

        Returns:
            This permutation

        Raises:
            NotPermutation: If it is not
        """
        if not self.is_permutation():
            raise NotPermutation(
                f"{self.tolist()} is not a permutation of length {len(self)}"
            )
        return self

    def contains(self, item: int) -> bool:
        """
        Find an element inside the permutation.

        Raises:
            ElementRangeError: If item cannot be expressed in the dtype
        """
        if item < 0 or item > max_value(self.dtype):
            raise ElementRangeError(f"{item} cannot be held by {self.dtype}")
        return bool((self.values == item).any())

    def invert(self) -> "Permutation":
        """
        Return the inverse permutation, where inverse[p[i]] == i.

        Raises:
            NotPermutation: If this is not a valid permutation
        """
        self.validate()
        inverse = np.empty_like(self.values)
        inverse[self.values.astype(np.intp)] = np.arange(len(self), dtype=self.dtype)
        return Permutation(inverse, self.dtype)


class PermuPopulation(Population):
    """Population of permutations."""

    vector_cls = Permutation
    representation = Representation.PERMUTATION

    @classmethod
    def identity(cls, size: int, length: int, dtype: DTypeLike = None) -> "PermuPopulation":
        """Create a population of `size` identity permutations."""
        population = cls.zeros(size, length, dtype)
        population.matrix[:] = np.arange(length, dtype=population.dtype)
        return population

    @classmethod
    def random(
        cls,
        size: int,
        length: int,
        dtype: DTypeLike = None,
        rng: Optional[np.random.Generator] = None,
    ) -> "PermuPopulation":
        """Create a population of `size` random permutations."""
        population = cls.zeros(size, length, dtype)
        rng = rng if rng is not None else np.random.default_rng()
        for i in range(size):
            population.matrix[i] = Permutation.random(length, population.dtype, rng).values
        return population

    def _check_vectors(self) -> None:
        """Raise NotPermutation for the first row that is not a permutation."""
        if self.size == 0:
            return
        bad = np.flatnonzero(~_rows_are_permutations(self.matrix))
        if bad.size:
            i = int(bad[0])
            raise NotPermutation(
                f"vector {i} {self.matrix[i].tolist()} is not a permutation"
            )

    def is_valid(self) -> bool:
        """Whether every vector is a permutation."""
        return self.size == 0 or bool(_rows_are_permutations(self.matrix).all())

    def invert(self) -> "PermuPopulation":
        """Return the population of inverse permutations, position by position."""
        self._check_vectors()
        inverse = np.empty_like(self.matrix)
        rows = np.arange(self.size)[:, np.newaxis]
        inverse[rows, self.matrix.astype(np.intp)] = np.arange(self.length, dtype=self.dtype)
        return PermuPopulation(inverse, self.dtype)

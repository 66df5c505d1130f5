"""
Inversion vector representation of permutations.

For a permutation p of length n, the inversion vector v has length n-1 and
v[i] counts the positions j > i with p[i] > p[j]. Hence 0 <= v[i] <= n-1-i
and the last position, which would always be 0, is omitted.
"""

from typing import List, Optional

import numpy as np

from ..core.permutation import PermuPopulation, Permutation
from ..core.population import Population
from ..core.vector import IntVector
from ..distribution.engine import Representation
from ..errors import ElementRangeError, LengthError


class Inversion(IntVector):
    """An inversion vector."""

    kind = "Inversion"

    @classmethod
    def from_permu(cls, permu: Permutation, out: Optional["Inversion"] = None) -> "Inversion":
        """Encode a permutation; see encode()."""
        return encode(permu, out)

    def to_permu(self, out: Optional[Permutation] = None) -> Permutation:
        """Decode into a permutation; see decode()."""
        return decode(self, out)


def _encode_values(permu: np.ndarray) -> np.ndarray:
    n = len(permu)
    counts = np.zeros(n - 1, dtype=np.int64)
    for i in range(n - 1):
        counts[i] = np.count_nonzero(permu[i + 1:] < permu[i])
    return counts


def _decode_values(inversion: np.ndarray) -> List[int]:
    n = len(inversion) + 1
    remaining = list(range(n))
    permu = []
    for index, value in enumerate(inversion.tolist() + [0]):
        if value >= len(remaining):
            raise ElementRangeError(
                f"inversion value {value} at position {index} exceeds {len(remaining) - 1}; "
                "the vector does not encode a permutation"
            )
        permu.append(remaining.pop(value))
    return permu


def encode(permu: Permutation, out: Optional[Inversion] = None) -> Inversion:
    """
    Compute the inversion vector of a permutation.

    Args:
        permu: Permutation of length n
        out: Optional inversion vector of length n-1 to fill in place

    Returns:
        The inversion vector (`out` when given)

    Raises:
        LengthError: If the permutation is empty or out is not of length n-1

    Example:
        >>> encode(Permutation.from_sequence([0, 3, 2, 1])).tolist()
        [0, 2, 1]
    """
    n = len(permu)
    if n == 0:
        raise LengthError("cannot encode an empty permutation")
    if out is None:
        out = Inversion.zeros(n - 1, permu.dtype)
    elif len(out) != n - 1:
        raise LengthError(
            f"inversion vector of length {len(out)} cannot hold a permutation of length {n}"
        )
    out.values[:] = _encode_values(permu.values.astype(np.int64))
    return out


def decode(inversion: Inversion, out: Optional[Permutation] = None) -> Permutation:
    """
    Rebuild the permutation an inversion vector encodes.

    Starting from the sorted values 0..n-1, position i takes the v[i]-th
    smallest value not used yet; the last position takes the only one left.

    Args:
        inversion: Inversion vector of length n-1
        out: Optional permutation of length n to fill in place

    Returns:
        The permutation (`out` when given)

    Raises:
        LengthError: If out is not of length n
        ElementRangeError: If a value exceeds what its position admits
    """
    n = len(inversion) + 1
    if out is None:
        out = Permutation.zeros(n, inversion.dtype)
    elif len(out) != n:
        raise LengthError(
            f"permutation of length {len(out)} cannot hold an inversion vector of length {n - 1}"
        )
    out.values[:] = _decode_values(inversion.values)
    return out


class InversionPopulation(Population):
    """Population of inversion vectors."""

    vector_cls = Inversion
    representation = Representation.INVERSION

    @classmethod
    def from_permus(
        cls, permus: PermuPopulation, out: Optional["InversionPopulation"] = None
    ) -> "InversionPopulation":
        """
        Encode every permutation of a population, keeping positions.

        Args:
            permus: Population of permutations of length n
            out: Optional population of size permus.size and length n-1

        Raises:
            LengthError: If out's shape does not match
        """
        if permus.length == 0:
            raise LengthError("cannot encode empty permutations")
        if out is None:
            out = cls.zeros(permus.size, permus.length - 1, permus.dtype)
        elif out.size != permus.size or out.length != permus.length - 1:
            raise LengthError(
                f"output shape {out.size},{out.length} does not fit "
                f"{permus.size},{permus.length - 1}"
            )
        for i in range(permus.size):
            out.matrix[i] = _encode_values(permus.matrix[i].astype(np.int64))
        return out

    def to_permus(self, out: Optional[PermuPopulation] = None) -> PermuPopulation:
        """
        Decode every inversion vector into a permutation, keeping positions.

        Raises:
            LengthError: If out's shape does not match
            ElementRangeError: If a vector does not encode a permutation
        """
        if out is None:
            out = PermuPopulation.zeros(self.size, self.length + 1, self.dtype)
        elif out.size != self.size or out.length != self.length + 1:
            raise LengthError(
                f"output shape {out.size},{out.length} does not fit "
                f"{self.size},{self.length + 1}"
            )
        for i in range(self.size):
            out.matrix[i] = _decode_values(self.matrix[i])
        return out

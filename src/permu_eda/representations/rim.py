"""
Repeated insertion model (RIM) representation of permutations.

A permutation of length n is built by starting from [0] and inserting the
elements 1..n-1 one after the other; rim[e-1] is the index at which element e
is inserted. Valid vectors satisfy 0 <= rim[e-1] <= e.
"""

from typing import List, Optional

from ..core.permutation import PermuPopulation, Permutation
from ..core.population import Population
from ..core.vector import IntVector
from ..distribution.engine import Representation
from ..errors import LengthError


class Rim(IntVector):
    """A repeated insertion model vector."""

    kind = "Rim"

    @classmethod
    def from_permu(cls, permu: Permutation, out: Optional["Rim"] = None) -> "Rim":
        """Encode a permutation; see encode()."""
        return encode(permu, out)

    def to_permu(self, out: Optional[Permutation] = None) -> Permutation:
        """Decode into a permutation; see decode()."""
        return decode(self, out)


def _encode_values(permu: List[int]) -> List[int]:
    # Remove elements from the largest down, recording where each one sat.
    remaining = list(permu)
    rim = [0] * (len(remaining) - 1)
    for element in range(len(remaining) - 1, 0, -1):
        index = remaining.index(element)
        rim[element - 1] = index
        del remaining[index]
    return rim


def _decode_values(rim: List[int]) -> List[int]:
    permu = [0]
    for element, index in enumerate(rim, start=1):
        # Out of range indices append at the end.
        permu.insert(min(index, len(permu)), element)
    return permu


def encode(permu: Permutation, out: Optional[Rim] = None) -> Rim:
    """
    Compute the insertion vector of a permutation.

    Args:
        permu: Permutation of length n
        out: Optional RIM vector of length n-1 to fill in place

    Returns:
        The RIM vector (`out` when given)

    Raises:
        LengthError: If the permutation is empty or out is not of length n-1
        ValueError: If an element of 1..n-1 is missing from the permutation

    Example:
        >>> encode(Permutation.from_sequence([1, 0, 3, 2])).tolist()
        [0, 2, 2]
    """
    n = len(permu)
    if n == 0:
        raise LengthError("cannot encode an empty permutation")
    if out is None:
        out = Rim.zeros(n - 1, permu.dtype)
    elif len(out) != n - 1:
        raise LengthError(
            f"RIM vector of length {len(out)} cannot hold a permutation of length {n}"
        )
    out.values[:] = _encode_values(permu.tolist())
    return out


def decode(rim: Rim, out: Optional[Permutation] = None) -> Permutation:
    """
    Rebuild the permutation a RIM vector encodes.

    Indices larger than the sequence built so far are clamped to its length,
    so any vector decodes to some permutation.

    Args:
        rim: RIM vector of length n-1
        out: Optional permutation of length n to fill in place

    Returns:
        The permutation (`out` when given)

    Raises:
        LengthError: If out is not of length n

    Example:
        >>> decode(Rim([0, 2, 2])).tolist()
        [1, 0, 3, 2]
    """
    n = len(rim) + 1
    if out is None:
        out = Permutation.zeros(n, rim.dtype)
    elif len(out) != n:
        raise LengthError(
            f"permutation of length {len(out)} cannot hold a RIM vector of length {n - 1}"
        )
    out.values[:] = _decode_values(rim.tolist())
    return out


class RimPopulation(Population):
    """Population of RIM vectors."""

    vector_cls = Rim
    representation = Representation.RIM

    @classmethod
    def from_permus(
        cls, permus: PermuPopulation, out: Optional["RimPopulation"] = None
    ) -> "RimPopulation":
        """
        Encode every permutation of a population, keeping positions.

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
            out.matrix[i] = _encode_values(permus.matrix[i].tolist())
        return out

    def to_permus(self, out: Optional[PermuPopulation] = None) -> PermuPopulation:
        """
        Decode every RIM vector into a permutation, keeping positions.

        Raises:
            LengthError: If out's shape does not match
        """
        if out is None:
            out = PermuPopulation.zeros(self.size, self.length + 1, self.dtype)
        elif out.size != self.size or out.length != self.length + 1:
            raise LengthError(
                f"output shape {out.size},{out.length} does not fit "
                f"{self.size},{self.length + 1}"
            )
        for i in range(self.size):
            out.matrix[i] = _decode_values(self.matrix[i].tolist())
        return out

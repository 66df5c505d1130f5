"""
Positional distributions over encoded populations.

A distribution is a positions x values matrix of counts learned from a
population of permutations, inversion vectors or RIM vectors. Sampling draws
every position of every new individual by weighted random choice over the
counts of its row. Rows are visited in a random order per individual; for
permutations, values already placed are excluded from later draws.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import numpy as np

from ..errors import ElementRangeError, IncorrectDistrType, InvalidVector, LengthError

logger = logging.getLogger(__name__)


class Representation(Enum):
    """
    Kind of vector a population (and its distribution) is made of.

    PERMUTATION: n positions, n values, no value repeated
    INVERSION: n-1 positions, row i admits 0..=n-1-i
    RIM: n-1 positions, row i admits insertion indices 0..=i+1
    """

    PERMUTATION = "permutation"
    INVERSION = "inversion"
    RIM = "rim"

    def n_values(self, length: int) -> int:
        """Number of value columns for vectors of the given length."""
        if self is Representation.PERMUTATION:
            return length
        return length + 1

    def max_values(self, length: int) -> np.ndarray:
        """Largest value each position of a vector of this length admits."""
        if self is Representation.PERMUTATION:
            return np.full(length, length - 1, dtype=np.int64)
        if self is Representation.INVERSION:
            return np.arange(length, 0, -1, dtype=np.int64)
        return np.arange(1, length + 1, dtype=np.int64)


@dataclass
class Distribution:
    """
    Learned frequency matrix of one representation.

    Attributes:
        representation: Which kind of vectors the counts were learned from
        matrix: Non-negative integer counts, one row per position
        soften: Whether Laplace smoothing was already applied
    """

    representation: Representation
    matrix: np.ndarray
    soften: bool = False
    _mask: Optional[np.ndarray] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate the matrix shape and counts against the representation."""
        matrix = np.asarray(self.matrix)
        if matrix.size and matrix.dtype.kind not in "iu":
            raise TypeError(f"distribution counts must be integers, got {matrix.dtype}")
        self.matrix = np.array(matrix, dtype=np.int64)
        if self.matrix.ndim != 2:
            raise LengthError("distribution matrix must be two-dimensional")
        expected = self.representation.n_values(self.positions)
        if self.matrix.shape[1] != expected:
            raise LengthError(
                f"{self.representation.value} distribution with {self.positions} "
                f"positions needs {expected} value columns, got {self.matrix.shape[1]}"
            )
        if (self.matrix < 0).any():
            raise ValueError("distribution counts must be non-negative")
        if self.matrix[~self.admissible_mask()].any():
            raise ValueError(
                f"{self.representation.value} distribution has counts in cells "
                "no vector can hold"
            )

    @property
    def positions(self) -> int:
        """Number of rows (vector length)."""
        return self.matrix.shape[0]

    @property
    def values(self) -> int:
        """Number of value columns."""
        return self.matrix.shape[1]

    def admissible_mask(self) -> np.ndarray:
        """
        Boolean mask of the cells a vector of this representation can hold.

        Cells outside the mask must keep zero weight so that sampled vectors
        always decode. The RIM region (columns 0..=i+1 in row i) is the set of
        valid insertion indices and deliberately differs from the inversion
        triangle (columns 0..=n-1-i).
        """
        if self._mask is None:
            limits = self.representation.max_values(self.positions)
            cols = np.arange(self.values)[np.newaxis, :]
            mask = cols <= limits[:, np.newaxis]
            self._mask = np.broadcast_to(mask, self.matrix.shape).copy()
        return self._mask

    def smooth(self) -> bool:
        """
        Apply add-one smoothing to the admissible cells, once.

        Returns:
            True if the matrix changed, False if it was already softened
        """
        if self.soften:
            return False
        self.matrix[self.admissible_mask()] += 1
        self.soften = True
        logger.debug(
            "softened %s distribution of shape %s",
            self.representation.value,
            self.matrix.shape,
        )
        return True

    def copy(self) -> "Distribution":
        """Create a deep copy of this distribution."""
        return Distribution(self.representation, self.matrix.copy(), self.soften)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Distribution):
            return NotImplemented
        return (
            self.representation is other.representation
            and self.soften == other.soften
            and bool(np.array_equal(self.matrix, other.matrix))
        )

    def __str__(self) -> str:
        rows = ",\n".join(str(row) for row in self.matrix.tolist())
        kind = self.representation.value.capitalize()
        return (
            f"[{rows}]\n{kind}Distribution. Shape: {self.positions},{self.values}. "
            f"Soften: {self.soften}\n"
        )


def learn(population) -> Distribution:
    """
    Learn the positional frequency matrix of a population.

    Args:
        population: A PermuPopulation, InversionPopulation or RimPopulation

    Returns:
        A not yet softened Distribution whose cell (i, v) counts how many
        vectors hold value v at position i

    Raises:
        LengthError: If the population is empty
        NotPermutation: If a permutation population holds an invalid row
        InvalidVector: If an encoded vector holds a value its position does
            not admit
    """
    if population.size == 0:
        raise LengthError("cannot learn a distribution from an empty population")

    population._check_vectors()

    representation = population.representation
    length = population.length
    n_values = representation.n_values(length)
    values = population.matrix.astype(np.intp)

    counts = np.zeros((length, n_values), dtype=np.int64)
    positions = np.broadcast_to(np.arange(length), values.shape)
    np.add.at(counts, (positions, values), 1)
    return Distribution(representation, counts, soften=False)


def _weighted_choice(weights: np.ndarray, rng: np.random.Generator) -> int:
    """
    Draw an index with probability proportional to its integer weight.

    The draw is uniform in [0, sum) and the first cumulative sum exceeding it
    selects the index, so zero-weight entries are never chosen.
    """
    cumulative = np.cumsum(weights)
    total = int(cumulative[-1])
    if total <= 0:
        raise ValueError("cannot sample from a row without positive weight")
    draw = rng.integers(total)
    return int(np.searchsorted(cumulative, draw, side="right"))


def sample(distribution: Distribution, out, rng: Optional[np.random.Generator] = None) -> None:
    """
    Fill a pre-sized population with vectors drawn from a distribution.

    The output population keeps its size and vector length; every vector is
    overwritten. The distribution is softened on the first call.

    Args:
        distribution: Learned distribution (softened in place if needed)
        out: Output population, already sized with resize() or zeros()
        rng: Random generator

    Raises:
        LengthError: If the distribution rows differ from the vector length
        IncorrectDistrType: If the distribution is of another representation
        ElementRangeError: If sampled values cannot be stored in out's dtype
    """
    if distribution.positions != out.length:
        raise LengthError(
            f"distribution has {distribution.positions} positions but the "
            f"population vectors have length {out.length}"
        )
    if distribution.representation is not out.representation:
        raise IncorrectDistrType(
            f"cannot sample a {out.representation.value} population from a "
            f"{distribution.representation.value} distribution"
        )
    limit = int(np.iinfo(out.matrix.dtype).max)
    if distribution.values - 1 > limit:
        raise ElementRangeError(
            f"{distribution.values} values do not fit in {out.matrix.dtype}"
        )

    rng = rng if rng is not None else np.random.default_rng()
    distribution.smooth()

    length = distribution.positions
    matrix = distribution.matrix
    exclusive = distribution.representation is Representation.PERMUTATION

    for individual in range(out.size):
        row = np.zeros(length, dtype=np.intp)
        available = np.ones(distribution.values, dtype=bool)

        for position in rng.permutation(length):
            weights = matrix[position]
            if exclusive:
                weights = np.where(available, weights, 0)
            value = _weighted_choice(weights, rng)
            row[position] = value
            if exclusive:
                available[value] = False

        out.matrix[individual] = row

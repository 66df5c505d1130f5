"""
Populations of equally sized vectors.

A population stores all of its vectors in a single contiguous
(size x length) numpy matrix of the element dtype.
"""

from typing import Iterable, Iterator, Optional, Sequence

import numpy as np

from ..distribution import engine
from ..distribution.engine import Distribution, Representation
from ..errors import InvalidVector, LengthError
from .dtypes import DTypeLike, check_length, element_dtype, narrow
from .vector import IntVector


class Population:
    """
    Ordered collection of vectors of one representation.

    Subclasses set `vector_cls` and `representation`.

    Attributes:
        matrix: (size x length) array holding one vector per row
    """

    vector_cls = IntVector
    representation: Representation = None

    def __init__(self, matrix, dtype: DTypeLike = None):
        """
        Wrap a matrix of vectors without structural checks.

        Args:
            matrix: 2-D integer array-like, one vector per row
            dtype: Element dtype (inferred from unsigned arrays if omitted)
        """
        if dtype is None and isinstance(matrix, np.ndarray) and matrix.dtype.kind == "u":
            dtype = matrix.dtype
        arr = narrow(matrix, dtype)
        if arr.ndim != 2:
            raise LengthError(
                f"{type(self).__name__} needs a 2-D matrix, got {arr.ndim} dimensions"
            )
        self.matrix = arr

    @classmethod
    def from_sequence(cls, rows: Sequence[Sequence[int]], dtype: DTypeLike = None):
        """
        Build a population from a list of equally long sequences.

        Raises:
            LengthError: If rows is empty or rows differ in length
            InvalidVector: If a row holds a value its position does not admit
        """
        rows = [list(r) for r in rows]
        if not rows:
            raise LengthError("cannot build a population from no vectors")
        length = len(rows[0])
        for i, r in enumerate(rows):
            if len(r) != length:
                raise LengthError(
                    f"vector {i} has length {len(r)}, expected {length}"
                )
        population = cls(np.array(rows, dtype=np.int64).reshape(len(rows), length), dtype)
        population._check_vectors()
        return population

    @classmethod
    def from_vectors(cls, vectors: Iterable[IntVector]):
        """Build a population from vector objects sharing one dtype."""
        vectors = list(vectors)
        if not vectors:
            raise LengthError("cannot build a population from no vectors")
        dtype = vectors[0].dtype
        return cls.from_sequence([v.values for v in vectors], dtype=dtype)

    @classmethod
    def zeros(cls, size: int, length: int, dtype: DTypeLike = None):
        """Create a population of `size` all-zero vectors of `length`."""
        dtype = element_dtype(dtype)
        check_length(length, dtype)
        if size < 0:
            raise ValueError("size must be non-negative")
        return cls(np.zeros((size, length), dtype=dtype), dtype)

    def _check_vectors(self) -> None:
        """
        Check every value against the largest its position admits.

        Raises:
            InvalidVector: For the first row holding an inadmissible value
        """
        if self.size == 0 or self.representation is None:
            return
        limits = self.representation.max_values(self.length)
        bad = np.flatnonzero((self.matrix.astype(np.int64) > limits).any(axis=1))
        if bad.size:
            i = int(bad[0])
            raise InvalidVector(
                f"{self.representation.value} vector {i} {self.matrix[i].tolist()} "
                f"exceeds the per-position limits {limits.tolist()}"
            )

    @property
    def size(self) -> int:
        """Number of vectors."""
        return self.matrix.shape[0]

    @property
    def length(self) -> int:
        """Length of every vector."""
        return self.matrix.shape[1]

    @property
    def dtype(self) -> np.dtype:
        """Element dtype."""
        return self.matrix.dtype

    def resize(self, size: int, length: int) -> None:
        """
        Reshape this population into a zero-filled output buffer.

        Use before sample() when the distribution's vector length or the
        number of individuals to draw differs from the current shape.
        """
        check_length(length, self.dtype)
        if size < 0:
            raise ValueError("size must be non-negative")
        self.matrix = np.zeros((size, length), dtype=self.dtype)

    def learn(self) -> Distribution:
        """Learn the positional distribution of this population."""
        return engine.learn(self)

    def sample(
        self, distribution: Distribution, rng: Optional[np.random.Generator] = None
    ):
        """
        Overwrite every vector with one drawn from the distribution.

        The population must already have the distribution's vector length.

        Returns:
            This population
        """
        engine.sample(distribution, self, rng)
        return self

    def copy(self):
        """Create a deep copy of this population."""
        return type(self)(self.matrix.copy(), self.dtype)

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, index: int) -> IntVector:
        return self.vector_cls(self.matrix[index].copy(), self.dtype)

    def __setitem__(self, index: int, vector: IntVector) -> None:
        if len(vector) != self.length:
            raise LengthError(
                f"vector of length {len(vector)} does not fit population length {self.length}"
            )
        self.matrix[index] = narrow(vector.values, self.dtype)

    def __iter__(self) -> Iterator[IntVector]:
        for i in range(self.size):
            yield self[i]

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return bool(np.array_equal(self.matrix, other.matrix))

    __hash__ = None

    def __str__(self) -> str:
        name = type(self).__name__
        if self.size == 0:
            return f"[]\n{name}. Shape: 0,{self.length}\n"
        rows = ",\n".join(str(r) for r in self.matrix.tolist())
        return f"[{rows}]\n{name}. Shape: {self.size},{self.length}\n"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self.size}, length={self.length}, dtype={self.dtype})"

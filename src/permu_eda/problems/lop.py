"""
Linear Ordering Problem (LOP).

The fitness of an ordering is the sum of matrix[permu[i]][permu[j]] over all
i < j, to be maximized.
"""

import numpy as np

from ..errors import LengthError
from .instance import ProblemInstance, ProblemType
from .reader import InstanceReader


class Lop(ProblemInstance):
    """
    LOP instance.

    File format: the size n, then the n x n matrix.
    """

    problem_type = ProblemType.LOP
    maximize = True

    def __init__(self, matrix):
        self.matrix = np.asarray(matrix, dtype=np.int64)
        if self.matrix.ndim != 2 or self.matrix.shape[0] != self.matrix.shape[1]:
            raise LengthError(f"LOP matrix must be square, got {self.matrix.shape}")

    @classmethod
    def _parse(cls, reader: InstanceReader) -> "Lop":
        size = reader.size()
        return cls(reader.matrix(size, size))

    @property
    def size(self) -> int:
        return self.matrix.shape[0]

    def _fitness(self, permu: np.ndarray) -> int:
        return int(np.triu(self.matrix[np.ix_(permu, permu)], k=1).sum())

    def __repr__(self) -> str:
        return f"Lop(n={self.size})"

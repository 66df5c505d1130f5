"""
Quadratic Assignment Problem (QAP).

A solution assigns facility permu[i] to location i. Its cost is
sum_ij distance[i][j] * flow[permu[i]][permu[j]], to be minimized.
"""

import numpy as np

from ..errors import LengthError
from .instance import ProblemInstance, ProblemType
from .reader import InstanceReader


class Qap(ProblemInstance):
    """
    QAP instance.

    File format: the size n, then the n x n distance matrix, then the n x n
    flow matrix.
    """

    problem_type = ProblemType.QAP

    def __init__(self, distance, flow):
        """
        Args:
            distance: n x n distances between locations
            flow: n x n flows between facilities

        Raises:
            LengthError: If the matrices are not square of the same size
        """
        self.distance = np.asarray(distance, dtype=np.int64)
        self.flow = np.asarray(flow, dtype=np.int64)
        n = self.distance.shape[0] if self.distance.ndim == 2 else -1
        for name, m in (("distance", self.distance), ("flow", self.flow)):
            if m.ndim != 2 or m.shape != (n, n):
                raise LengthError(f"QAP {name} matrix must be {n}x{n}, got {m.shape}")

    @classmethod
    def _parse(cls, reader: InstanceReader) -> "Qap":
        size = reader.size()
        distance = reader.matrix(size, size)
        flow = reader.matrix(size, size)
        return cls(distance, flow)

    @property
    def size(self) -> int:
        return self.distance.shape[0]

    def _fitness(self, permu: np.ndarray) -> int:
        return int((self.distance * self.flow[np.ix_(permu, permu)]).sum())

    def __repr__(self) -> str:
        return f"Qap(n={self.size})"

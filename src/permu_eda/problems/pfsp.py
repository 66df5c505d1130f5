"""
Permutation Flowshop Scheduling Problem (PFSP).

Jobs go through every machine in order, in the order given by the
permutation. The fitness is the total flow time (sum of the completion times
of every job on the last machine), to be minimized.
"""

import numpy as np

from ..errors import LengthError
from .instance import ProblemInstance, ProblemType
from .reader import InstanceReader


class Pfsp(ProblemInstance):
    """
    PFSP instance.

    File format (Taillard): one ignored line, a line starting with
    "n_jobs n_machines", one ignored line, then the n_machines x n_jobs
    processing time matrix.

    Attributes:
        processing_times: n_machines x n_jobs matrix
    """

    problem_type = ProblemType.PFSP

    def __init__(self, processing_times):
        self.processing_times = np.asarray(processing_times, dtype=np.int64)
        if self.processing_times.ndim != 2:
            raise LengthError(
                f"PFSP processing times must be a matrix, got {self.processing_times.shape}"
            )

    @classmethod
    def _parse(cls, reader: InstanceReader) -> "Pfsp":
        reader.line()
        n_jobs, n_machines = reader.leading_integers(2)
        reader.line()
        return cls(reader.matrix(n_machines, n_jobs))

    @property
    def size(self) -> int:
        return self.processing_times.shape[1]

    @property
    def n_jobs(self) -> int:
        return self.processing_times.shape[1]

    @property
    def n_machines(self) -> int:
        return self.processing_times.shape[0]

    def _fitness(self, permu: np.ndarray) -> int:
        if self.n_machines == 0:
            return 0
        # b[m]: completion time of the last scheduled job on machine m
        b = np.zeros(self.n_machines, dtype=np.int64)
        total = 0
        for job in permu:
            times = self.processing_times[:, job]
            b[0] += times[0]
            for m in range(1, self.n_machines):
                b[m] = max(b[m - 1], b[m]) + times[m]
            total += int(b[-1])
        return total

    def __repr__(self) -> str:
        return f"Pfsp(jobs={self.n_jobs}, machines={self.n_machines})"

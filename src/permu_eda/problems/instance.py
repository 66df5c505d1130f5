"""
Problem instances used as fitness functions for permutations.

Instances are loaded from text files whose extension names the problem:
.dat (QAP), .fsp (PFSP) and .lop (LOP).
"""

import logging
import os
from enum import Enum
from typing import Dict, Optional, Type

import numpy as np

from ..core.permutation import PermuPopulation, Permutation
from ..errors import IncorrectProblemInstance, InstanceIOError, LengthError
from .reader import InstanceReader

logger = logging.getLogger(__name__)


class ProblemType(Enum):
    """Problem kinds, identified by instance file extension."""

    QAP = "dat"
    PFSP = "fsp"
    LOP = "lop"

    @classmethod
    def from_path(cls, path: str) -> "ProblemType":
        """
        Get the problem type from an instance file name.

        Raises:
            InstanceIOError: If the extension is missing or unknown
        """
        extension = os.path.splitext(os.fspath(path))[1]
        if not extension:
            raise InstanceIOError(f"instance extension not found in {path}")
        try:
            return cls(extension[1:])
        except ValueError:
            raise InstanceIOError(f"wrong instance extension {extension[1:]}") from None


class ProblemInstance:
    """
    Base class of problem instances.

    Subclasses set `problem_type`, implement `_parse` to build an instance
    from an InstanceReader, and `_fitness` to score one permutation given as
    an index array.

    Attributes:
        maximize: Whether larger fitness values are better
    """

    problem_type: Optional[ProblemType] = None
    maximize = False

    _registry: Dict[ProblemType, Type["ProblemInstance"]] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.problem_type is not None:
            ProblemInstance._registry[cls.problem_type] = cls

    @classmethod
    def load(cls, path) -> "ProblemInstance":
        """
        Load an instance from a file.

        Called on ProblemInstance the type is taken from the extension;
        called on a subclass the extension must match that subclass.

        Args:
            path: Instance file path

        Returns:
            The loaded instance

        Raises:
            IncorrectProblemInstance: If the file is of another problem type
            InstanceIOError: If the file cannot be read or is malformed
            ParseError: If a value cannot be parsed
        """
        problem_type = ProblemType.from_path(path)
        if cls.problem_type is None:
            target = cls._registry[problem_type]
        elif problem_type is cls.problem_type:
            target = cls
        else:
            raise IncorrectProblemInstance(
                f"{cls.__name__} cannot load a {problem_type.name} instance ({path})"
            )

        try:
            with open(path, "r") as handle:
                instance = target._parse(InstanceReader(handle, os.fspath(path)))
        except OSError as err:
            raise InstanceIOError(f"cannot read instance {path}: {err}") from err

        logger.debug("loaded %r from %s", instance, path)
        return instance

    @classmethod
    def _parse(cls, reader: InstanceReader) -> "ProblemInstance":
        raise NotImplementedError

    @property
    def size(self) -> int:
        """Length every solution must have."""
        raise NotImplementedError

    def _fitness(self, permu: np.ndarray) -> int:
        raise NotImplementedError

    def evaluate_one(self, permu: Permutation) -> int:
        """
        Compute the fitness of one permutation.

        Raises:
            LengthError: If the permutation length differs from the size
        """
        if len(permu) != self.size:
            raise LengthError(
                f"solution of length {len(permu)} for an instance of size {self.size}"
            )
        return int(self._fitness(permu.values.astype(np.intp)))

    def evaluate(
        self, population: PermuPopulation, out: Optional[np.ndarray] = None
    ) -> np.ndarray:
        """
        Compute the fitness of every permutation of a population.

        Args:
            population: Permutations of length `size`
            out: Optional int64 vector of length population.size to fill

        Returns:
            Fitness vector, position i scoring population[i]

        Raises:
            IncorrectProblemInstance: If the population is not of permutations
            LengthError: If the solution length or out's length is wrong
        """
        if not isinstance(population, PermuPopulation):
            raise IncorrectProblemInstance(
                f"{type(self).__name__} evaluates permutations, got {type(population).__name__}"
            )
        if population.length != self.size:
            raise LengthError(
                f"solutions of length {population.length} for an instance of size {self.size}"
            )
        if out is None:
            out = np.zeros(population.size, dtype=np.int64)
        elif len(out) != population.size:
            raise LengthError(
                f"fitness vector of length {len(out)} for {population.size} solutions"
            )

        indices = population.matrix.astype(np.intp)
        for i in range(population.size):
            out[i] = self._fitness(indices[i])
        return out

    def is_better(self, a: float, b: float) -> bool:
        """Whether fitness a is strictly better than fitness b."""
        return a > b if self.maximize else a < b

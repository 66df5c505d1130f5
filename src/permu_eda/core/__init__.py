"""Core components: element dtypes, Permutation, populations."""

from .dtypes import DEFAULT_DTYPE, ELEMENT_DTYPES
from .vector import IntVector
from .population import Population
from .permutation import Permutation, PermuPopulation

__all__ = [
    "DEFAULT_DTYPE",
    "ELEMENT_DTYPES",
    "IntVector",
    "Population",
    "Permutation",
    "PermuPopulation",
]

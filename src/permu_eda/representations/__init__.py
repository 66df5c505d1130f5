"""Alternative vector representations of permutations."""

from .inversion import Inversion, InversionPopulation
from .rim import Rim, RimPopulation

__all__ = ["Inversion", "InversionPopulation", "Rim", "RimPopulation"]

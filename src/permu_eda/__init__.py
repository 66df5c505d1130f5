"""
permu_eda

Permutation representations (inversion vectors, repeated insertion model)
and estimation of distribution algorithm primitives: learning positional
distributions from populations and sampling new populations from them.
QAP, PFSP and LOP instances are provided as fitness functions.
"""

from .errors import (
    PermuError,
    LengthError,
    NotPermutation,
    IncorrectDistrType,
    IncorrectProblemInstance,
    ParseError,
    InstanceIOError,
    ElementRangeError,
    InvalidVector,
)
from .core.permutation import Permutation, PermuPopulation
from .representations.inversion import Inversion, InversionPopulation
from .representations.rim import Rim, RimPopulation
from .distribution.engine import Distribution, Representation, learn, sample
from .problems import ProblemInstance, ProblemType, Qap, Pfsp, Lop
from .solvers.umda import UMDAConfig, UMDAResult, run_umda

__version__ = "1.0.0"

__all__ = [
    "PermuError",
    "LengthError",
    "NotPermutation",
    "IncorrectDistrType",
    "IncorrectProblemInstance",
    "ParseError",
    "InstanceIOError",
    "ElementRangeError",
    "InvalidVector",
    "Permutation",
    "PermuPopulation",
    "Inversion",
    "InversionPopulation",
    "Rim",
    "RimPopulation",
    "Distribution",
    "Representation",
    "learn",
    "sample",
    "ProblemInstance",
    "ProblemType",
    "Qap",
    "Pfsp",
    "Lop",
    "UMDAConfig",
    "UMDAResult",
    "run_umda",
]

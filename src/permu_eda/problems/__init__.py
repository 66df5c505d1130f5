"""Permutation problems used as fitness functions: QAP, PFSP and LOP."""

from .instance import ProblemInstance, ProblemType
from .reader import InstanceReader
from .qap import Qap
from .pfsp import Pfsp
from .lop import Lop

__all__ = ["ProblemInstance", "ProblemType", "InstanceReader", "Qap", "Pfsp", "Lop"]

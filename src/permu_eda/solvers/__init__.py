"""Estimation of distribution algorithms built on the distribution engine."""

from .umda import UMDAConfig, UMDAResult, run_umda

__all__ = ["UMDAConfig", "UMDAResult", "run_umda"]

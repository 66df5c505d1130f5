"""Positional distributions: learning and sampling."""

from .engine import Distribution, Representation, learn, sample

__all__ = ["Distribution", "Representation", "learn", "sample"]

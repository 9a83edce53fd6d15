"""Eligibility and skill-match simulation engine for a campus placement portal."""

from placement_engine.engine import aggregate, is_eligible, rank, score, simulate
from placement_engine.normalize import normalize

__version__ = "0.1.0"

__all__ = ["normalize", "is_eligible", "score", "aggregate", "simulate", "rank", "__version__"]

"""Approximate identifier resolution for documentation names."""

from resolution.distance import distance
from resolution.matcher import (
    Candidate,
    MatchResult,
    ResolverConfig,
    build_pool,
    resolve,
)
from resolution.normalize import normalize

__all__ = [
    "Candidate",
    "MatchResult",
    "ResolverConfig",
    "build_pool",
    "distance",
    "normalize",
    "resolve",
]

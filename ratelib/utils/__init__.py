"""Numerical utilities shared by the pricing and curve modules."""

from .distributions import CumulativeNormalDistribution, cumulative_normal, normal_density
from .observable import Observable
from .rootfinding import (
    Bisection,
    Brent,
    NewtonSafe,
    RootResult,
    create_solver,
)

__all__ = [
    "CumulativeNormalDistribution",
    "cumulative_normal",
    "normal_density",
    "Observable",
    "Bisection",
    "Brent",
    "NewtonSafe",
    "RootResult",
    "create_solver",
]

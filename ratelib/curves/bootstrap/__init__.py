"""Bootstrap engines for piecewise curves."""

from .engine import IterativeBootstrap
from .results import BootstrapResult

__all__ = ["IterativeBootstrap", "BootstrapResult"]

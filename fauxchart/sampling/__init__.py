"""Weighted sampling primitives."""

from fauxchart.sampling.pool import WeightedPool

__all__ = ["WeightedPool"]

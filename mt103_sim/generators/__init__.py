"""Generators for simulation fixtures."""

from mt103_sim.generators.holders import HolderGenerator

__all__ = ["HolderGenerator"]

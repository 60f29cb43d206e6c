"""
Force-directed layout of comparison graphs.
"""

from .force_simulation import ForceSimulation

__all__ = ['ForceSimulation']

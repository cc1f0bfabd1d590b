"""
Core aerodynamic components.

Tail aero table interpolation and the V-tail pitching moment model.
"""

from .aero_table import AeroTable, DataError
from .moment_model import MomentModel, PhysicalConstants

__all__ = [
    'AeroTable',
    'DataError',
    'MomentModel',
    'PhysicalConstants'
]

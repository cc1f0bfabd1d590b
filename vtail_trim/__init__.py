"""
V-tail longitudinal trim and static stability analysis.

Finds the tail angle that zeroes the total pitching moment of a V-tail
aircraft (tabulated tail Cm plus closed-form geometric terms) and checks
static pitch stability about the trimmed condition.
"""

from .core import AeroTable, DataError, MomentModel, PhysicalConstants
from .control import TrimSolver, TrimStatus, TrimState, TrimResult
from .analysis import StabilityResult, compute_static_stability, moment_sweep
from .io import DataLoadError, load_aero_data, load_aero_csv, save_aero_csv

__version__ = '1.0.0'

__all__ = [
    'AeroTable',
    'DataError',
    'MomentModel',
    'PhysicalConstants',
    'TrimSolver',
    'TrimStatus',
    'TrimState',
    'TrimResult',
    'StabilityResult',
    'compute_static_stability',
    'moment_sweep',
    'DataLoadError',
    'load_aero_data',
    'load_aero_csv',
    'save_aero_csv',
]

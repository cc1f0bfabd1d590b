"""
Analysis tools for longitudinal trim.

This module provides the static stability check and moment sweeps.
"""

from .stability import StabilityResult, compute_static_stability, moment_sweep

__all__ = ['StabilityResult', 'compute_static_stability', 'moment_sweep']

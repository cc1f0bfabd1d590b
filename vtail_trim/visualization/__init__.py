"""
Visualization Module

Provides plotting for aero tables, trim curves and solver convergence.
"""

from .plotting import (
    plot_aero_table,
    plot_moment_curve,
    plot_convergence,
    setup_plotting_style
)

__all__ = [
    'plot_aero_table',
    'plot_moment_curve',
    'plot_convergence',
    'setup_plotting_style'
]

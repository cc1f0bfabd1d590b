"""
Standard Plotting Functions

Plots of the tail aero table, the total moment trim curve and solver
convergence history.
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from typing import Optional, Tuple

from vtail_trim.core.aero_table import AeroTable
from vtail_trim.analysis.stability import moment_sweep


def plot_aero_table(
    table: AeroTable,
    title: str = "Tail Cm vs Alpha",
    margin_deg: float = 2.0,
    figsize: Tuple[float, float] = (8, 6),
    save_path: Optional[str] = None
) -> Figure:
    """
    Plot table samples and the interpolated (clamped) curve.

    Parameters
    ----------
    table : AeroTable
        Tail aero table
    title : str, optional
        Plot title
    margin_deg : float, optional
        Extra alpha range shown beyond the table ends (deg)
    figsize : Tuple[float, float], optional
        Figure size in inches
    save_path : Optional[str], optional
        Path to save figure

    Returns
    -------
    Figure
        Matplotlib figure object
    """
    fig, ax = plt.subplots(figsize=figsize)

    if not table.is_empty:
        alphas = table.alphas
        a_min = alphas.min() - margin_deg
        a_max = alphas.max() + margin_deg
        alpha_fine = np.linspace(a_min, a_max, 200)

        ax.plot(alpha_fine, table.query_many(alpha_fine), 'b-', linewidth=1.5,
                label='Interpolated')
        ax.plot(alphas, table.cms, 'ko', markersize=5, label='Data')
        ax.legend()

    ax.set_xlabel('Alpha (deg)')
    ax.set_ylabel('Cm')
    ax.set_title(title)
    ax.grid(True, alpha=0.3)

    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig


def plot_moment_curve(
    model,
    incidence_deg: float = 0.0,
    tail_range: Tuple[float, float] = (-10.0, 10.0),
    n_points: int = 201,
    trim_result=None,
    title: str = "Total Pitching Moment vs Tail Angle",
    figsize: Tuple[float, float] = (8, 6),
    save_path: Optional[str] = None
) -> Figure:
    """
    Plot Cm_total over a tail angle range, marking the trim point.

    Parameters
    ----------
    model : object
        Moment model exposing total_moment(tail_angle_deg, incidence_deg)
    incidence_deg : float, optional
        Incidence angle (deg)
    tail_range : Tuple[float, float], optional
        Tail angle range (deg)
    n_points : int, optional
        Number of sweep points
    trim_result : TrimResult, optional
        Trim solution to mark on the curve
    title : str, optional
        Plot title
    figsize : Tuple[float, float], optional
        Figure size in inches
    save_path : Optional[str], optional
        Path to save figure

    Returns
    -------
    Figure
        Matplotlib figure object
    """
    sweep = moment_sweep(model, np.linspace(tail_range[0], tail_range[1], n_points),
                         incidence_deg)

    fig, ax = plt.subplots(figsize=figsize)

    ax.plot(sweep['tail_angle_deg'], sweep['cm_total'], 'b-', linewidth=2,
            label=f'Cm (i = {incidence_deg:.1f} deg)')
    ax.axhline(0.0, color='k', linewidth=0.8)

    if trim_result is not None:
        ax.plot(trim_result.tail_angle_deg, trim_result.residual_moment, 'r*',
                markersize=14, label=f'Trim ({trim_result.status.value})')

    ax.set_xlabel('Tail Angle (deg)')
    ax.set_ylabel('Cm total')
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend()

    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig


def plot_convergence(
    trim_result,
    title: str = "Trim Convergence",
    figsize: Tuple[float, float] = (10, 6),
    save_path: Optional[str] = None
) -> Figure:
    """
    Plot tail angle and |Cm| per iteration.

    Parameters
    ----------
    trim_result : TrimResult
        Trim solution with iteration history
    title : str, optional
        Plot title
    figsize : Tuple[float, float], optional
        Figure size in inches
    save_path : Optional[str], optional
        Path to save figure

    Returns
    -------
    Figure
        Matplotlib figure object
    """
    history = trim_result.history_frame()

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=figsize, sharex=True)

    ax1.plot(history['iteration'], history['tail_angle_deg'], 'bo-', linewidth=1.5)
    ax1.set_ylabel('Tail Angle (deg)')
    ax1.grid(True, alpha=0.3)
    ax1.set_title(title)

    # Floor at machine epsilon so exact zeros stay on the log axis
    abs_cm = np.maximum(np.abs(history['cm'].to_numpy(dtype=float)), np.finfo(float).eps)
    ax2.semilogy(history['iteration'], abs_cm, 'ro-', linewidth=1.5, label='|Cm|')
    ax2.axhline(trim_result.tolerance if trim_result.tolerance > 0 else np.finfo(float).eps,
                color='k', linestyle='--', linewidth=1, label='Tolerance')

    nudged = history[history['nudged'].astype(bool)]
    if not nudged.empty:
        ax1.plot(nudged['iteration'], nudged['tail_angle_deg'], 'ys', markersize=8,
                 label='Stall nudge')
        ax1.legend()

    ax2.set_xlabel('Iteration')
    ax2.set_ylabel('|Cm|')
    ax2.grid(True, alpha=0.3, which='both')
    ax2.legend()

    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig


def setup_plotting_style():
    """Apply consistent plotting style."""
    plt.rcParams.update({
        'font.size': 10,
        'axes.labelsize': 11,
        'axes.titlesize': 12,
        'legend.fontsize': 9,
        'lines.linewidth': 1.5,
        'grid.alpha': 0.3,
    })

"""
Static Stability Analysis

Finite-difference pitch stability derivative about a trimmed condition and
moment sweeps for inspecting the trim curve.
"""

import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import Optional


@dataclass
class StabilityResult:
    """
    Static stability check result.

    Attributes
    ----------
    cma : float
        Stability derivative dCm/d(incidence) (per deg)
    delta : float
        Incidence perturbation used (deg)
    reference_moment : float
        Cm at the trimmed condition
    perturbed_moment : float
        Cm with incidence perturbed by delta
    """
    cma: float
    delta: float
    reference_moment: float
    perturbed_moment: float

    @property
    def is_stable(self) -> bool:
        """Negative Cma restores the aircraft after a pitch disturbance."""
        return self.cma < 0

    @property
    def verdict(self) -> str:
        return 'STABLE' if self.is_stable else 'UNSTABLE'


def compute_static_stability(model,
                             tail_angle_deg: float,
                             incidence_deg: float,
                             delta: float = 1.0,
                             reference_moment: Optional[float] = None) -> StabilityResult:
    """
    Compute Cma by perturbing incidence at a fixed tail angle.

    The tail angle is held at its trimmed value; no re-trim is performed.

    Parameters
    ----------
    model : object
        Moment model exposing total_moment(tail_angle_deg, incidence_deg)
    tail_angle_deg : float
        Trimmed tail angle (deg)
    incidence_deg : float
        Trim incidence angle (deg)
    delta : float
        Incidence perturbation (deg)
    reference_moment : float, optional
        Cm at (tail_angle_deg, incidence_deg), evaluated if not given

    Returns
    -------
    StabilityResult
        Stability derivative and classification
    """
    if delta == 0:
        raise ValueError("delta must be non-zero")

    if reference_moment is None:
        reference_moment = model.total_moment(tail_angle_deg, incidence_deg)

    perturbed = model.total_moment(tail_angle_deg, incidence_deg + delta)
    cma = (perturbed - reference_moment) / delta

    return StabilityResult(cma=cma,
                           delta=delta,
                           reference_moment=reference_moment,
                           perturbed_moment=perturbed)


def moment_sweep(model, tail_angles, incidence_deg: float = 0.0) -> pd.DataFrame:
    """
    Evaluate total moment over a range of tail angles.

    Parameters
    ----------
    model : object
        Moment model exposing total_moment(tail_angle_deg, incidence_deg)
    tail_angles : array_like
        Tail angles (deg)
    incidence_deg : float
        Incidence angle (deg)

    Returns
    -------
    DataFrame
        Columns 'tail_angle_deg' and 'cm_total'
    """
    tail_angles = np.asarray(tail_angles, dtype=float).ravel()
    cm = [model.total_moment(float(t), incidence_deg) for t in tail_angles]

    return pd.DataFrame({'tail_angle_deg': tail_angles, 'cm_total': cm})

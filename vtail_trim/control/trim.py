"""
Trim Calculation

Finds the tail angle that drives the total pitching moment to zero using
Newton-Raphson iteration with a forward-difference derivative, then checks
static stability about the trimmed condition.
"""

import numpy as np
import pandas as pd
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from vtail_trim.analysis.stability import StabilityResult, compute_static_stability


class TrimStatus(Enum):
    """Solver state."""
    ITERATING = 'ITERATING'
    CONVERGED = 'CONVERGED'
    MAX_ITER_EXCEEDED = 'MAX_ITER_EXCEEDED'


@dataclass
class TrimState:
    """
    Transient solver state.

    Attributes
    ----------
    tail_angle_deg : float
        Current tail angle estimate (deg)
    iteration : int
        Completed iterations
    last_moment : float
        Most recent total moment evaluation
    status : TrimStatus
        Current solver state
    """
    tail_angle_deg: float
    iteration: int = 0
    last_moment: float = np.nan
    status: TrimStatus = TrimStatus.ITERATING


@dataclass
class TrimResult:
    """
    Outcome of a trim solve.

    A MAX_ITER_EXCEEDED result is a valid partial result carrying the best
    available tail angle estimate.
    """
    status: TrimStatus
    tail_angle_deg: float
    incidence_deg: float
    iterations: int
    residual_moment: float
    tolerance: float
    history: List[Dict] = field(default_factory=list)

    @property
    def converged(self) -> bool:
        return self.status is TrimStatus.CONVERGED

    def history_frame(self) -> pd.DataFrame:
        """Iteration history as a DataFrame."""
        columns = ['iteration', 'tail_angle_deg', 'cm', 'gradient', 'nudged']
        return pd.DataFrame(self.history, columns=columns)

    def to_dict(self) -> Dict:
        return {
            'status': self.status.value,
            'tail_angle_deg': self.tail_angle_deg,
            'incidence_deg': self.incidence_deg,
            'iterations': self.iterations,
            'residual_moment': self.residual_moment,
            'tolerance': self.tolerance,
        }


class TrimSolver:
    """
    Newton-Raphson trim solver for a single control variable.

    Parameters
    ----------
    model : object
        Moment model exposing total_moment(tail_angle_deg, incidence_deg)
    tolerance : float
        Convergence threshold on |Cm_total|
    max_iterations : int
        Iteration budget
    fd_step : float
        Forward difference step for the numerical derivative (deg)
    gradient_floor : float
        Below this |dCm/d(tail)| a stall nudge is taken instead of a Newton step
    stall_nudge : float
        Tail angle increment applied on a near-zero gradient (deg)
    stability_delta : float
        Incidence perturbation for the stability derivative (deg)
    """

    def __init__(self,
                 model,
                 tolerance: float = 1e-6,
                 max_iterations: int = 100,
                 fd_step: float = 0.001,
                 gradient_floor: float = 1e-9,
                 stall_nudge: float = 0.1,
                 stability_delta: float = 1.0):
        """Initialize trim solver."""
        if tolerance < 0:
            raise ValueError(f"tolerance must be non-negative, got {tolerance}")
        if max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")
        if fd_step == 0:
            raise ValueError("fd_step must be non-zero")
        if stability_delta == 0:
            raise ValueError("stability_delta must be non-zero")

        self.model = model
        self.tolerance = tolerance
        self.max_iterations = int(max_iterations)
        self.fd_step = fd_step
        self.gradient_floor = gradient_floor
        self.stall_nudge = stall_nudge
        self.stability_delta = stability_delta

    def solve(self,
              initial_guess: float = -2.0,
              incidence: float = 0.0,
              verbose: bool = False) -> TrimResult:
        """
        Find the tail angle giving zero total pitching moment.

        Never raises on non-convergence: when the iteration budget runs out
        the result has status MAX_ITER_EXCEEDED and the last estimate.

        Parameters
        ----------
        initial_guess : float
            Starting tail angle (deg)
        incidence : float
            Aircraft incidence angle (deg), held fixed
        verbose : bool, optional
            Print iteration progress

        Returns
        -------
        TrimResult
            Terminal state, trimmed angle and residual
        """
        state = TrimState(tail_angle_deg=float(initial_guess))
        history = []

        while state.iteration < self.max_iterations:
            angle = state.tail_angle_deg
            cm = self.model.total_moment(angle, incidence)
            state.last_moment = cm

            if abs(cm) < self.tolerance:
                state.status = TrimStatus.CONVERGED
                history.append(self._record(state.iteration, angle, cm, np.nan, False))
                break

            cm_plus = self.model.total_moment(angle + self.fd_step, incidence)
            gradient = (cm_plus - cm) / self.fd_step

            if abs(gradient) < self.gradient_floor:
                # Flat region, step past it
                state.tail_angle_deg = angle + self.stall_nudge
                nudged = True
            else:
                state.tail_angle_deg = angle - cm / gradient
                nudged = False

            history.append(self._record(state.iteration, angle, cm, gradient, nudged))

            if verbose:
                step = 'nudge' if nudged else 'newton'
                print(f"  iter {state.iteration:3d}: tail = {angle:10.5f} deg, "
                      f"Cm = {cm: .6e}, dCm/dt = {gradient: .6e} ({step})")

            state.iteration += 1

        if state.status is TrimStatus.ITERATING:
            state.status = TrimStatus.MAX_ITER_EXCEEDED

        residual = self.model.total_moment(state.tail_angle_deg, incidence)

        if verbose:
            print(f"  {state.status.value} after {state.iteration} iterations, "
                  f"residual Cm = {residual:.6e}")

        return TrimResult(
            status=state.status,
            tail_angle_deg=state.tail_angle_deg,
            incidence_deg=incidence,
            iterations=state.iteration,
            residual_moment=residual,
            tolerance=self.tolerance,
            history=history,
        )

    def check_stability(self,
                        trim: Union[TrimResult, float],
                        incidence: Optional[float] = None) -> StabilityResult:
        """
        Static stability derivative about a trimmed tail angle.

        Parameters
        ----------
        trim : TrimResult or float
            Trim result, or a tail angle (deg)
        incidence : float, optional
            Incidence angle (deg). Taken from the trim result if omitted.

        Returns
        -------
        StabilityResult
            Cma and verdict
        """
        if isinstance(trim, TrimResult):
            tail_angle = trim.tail_angle_deg
            if incidence is None:
                incidence = trim.incidence_deg
            reference = trim.residual_moment if incidence == trim.incidence_deg else None
        else:
            tail_angle = float(trim)
            reference = None

        if incidence is None:
            incidence = 0.0

        return compute_static_stability(self.model, tail_angle, incidence,
                                        delta=self.stability_delta,
                                        reference_moment=reference)

    def trim(self,
             initial_guess: float = -2.0,
             incidence: float = 0.0,
             verbose: bool = False) -> Tuple[TrimResult, StabilityResult]:
        """Solve for trim, then check stability at the trimmed angle."""
        result = self.solve(initial_guess, incidence, verbose=verbose)
        stability = self.check_stability(result)
        return result, stability

    @staticmethod
    def _record(iteration, angle, cm, gradient, nudged) -> Dict:
        return {
            'iteration': iteration,
            'tail_angle_deg': angle,
            'cm': cm,
            'gradient': gradient,
            'nudged': nudged,
        }

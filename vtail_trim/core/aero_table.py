"""
Tail aerodynamic table.

Stores measured tail Cm vs. angle of attack samples and answers point
queries by clamped linear interpolation.
"""

import numpy as np
from typing import Iterable, Optional, Tuple


class DataError(Exception):
    """Raised when aerodynamic table data is malformed or cannot be obtained."""


class AeroTable:
    """
    Piecewise-linear Cm(alpha) table.

    Samples are kept in the order supplied by the caller (assumed sorted by
    alpha ascending, never re-sorted). Queries outside the table range clamp
    to the end samples. An empty table answers every query with 0.0.

    Parameters
    ----------
    samples : iterable of (alpha, cm), optional
        Angle of attack (deg) and moment coefficient pairs
    """

    def __init__(self, samples: Optional[Iterable[Tuple[float, float]]] = None):
        """Initialize table, optionally loading samples."""
        self._alphas = []
        self._cms = []

        if samples is not None:
            self.load(samples)

    @classmethod
    def from_arrays(cls, alphas, cms) -> 'AeroTable':
        """
        Build table from separate alpha and Cm arrays.

        Parameters
        ----------
        alphas : array_like
            Angle of attack values (deg)
        cms : array_like
            Moment coefficients, same length as alphas

        Returns
        -------
        AeroTable
            Loaded table
        """
        alphas = np.asarray(alphas, dtype=float).ravel()
        cms = np.asarray(cms, dtype=float).ravel()

        if alphas.shape != cms.shape:
            raise DataError(
                f"alpha and Cm arrays must have same length ({len(alphas)} != {len(cms)})"
            )

        return cls(zip(alphas.tolist(), cms.tolist()))

    def load(self, samples: Iterable[Tuple[float, float]]):
        """
        Replace table contents.

        Parameters
        ----------
        samples : iterable of (alpha, cm)
            New samples. An empty iterable leaves an empty table.
        """
        alphas = []
        cms = []

        for i, sample in enumerate(samples):
            try:
                alpha, cm = sample
                alphas.append(float(alpha))
                cms.append(float(cm))
            except (TypeError, ValueError) as e:
                raise DataError(f"Invalid sample at index {i}: {sample!r}") from e

        self._alphas = alphas
        self._cms = cms

    def query(self, alpha: float) -> float:
        """
        Interpolated Cm at given alpha.

        Parameters
        ----------
        alpha : float
            Angle of attack (deg)

        Returns
        -------
        float
            Moment coefficient (0.0 if table is empty)
        """
        if not self._alphas:
            return 0.0

        alphas = self._alphas
        cms = self._cms

        # Clamp to table range
        if alpha <= alphas[0]:
            return cms[0]
        if alpha >= alphas[-1]:
            return cms[-1]

        for i in range(len(alphas) - 1):
            if alphas[i] <= alpha < alphas[i + 1]:
                slope = (cms[i + 1] - cms[i]) / (alphas[i + 1] - alphas[i])
                return cms[i] + (alpha - alphas[i]) * slope

        # No bracketing interval (NaN query or NaN samples)
        return cms[-1]

    def query_many(self, alphas) -> np.ndarray:
        """Element-wise query over an array of angles (deg)."""
        return np.array([self.query(float(a)) for a in np.ravel(alphas)])

    def is_monotonic(self) -> bool:
        """True if alpha values are strictly increasing."""
        return all(a0 < a1 for a0, a1 in zip(self._alphas, self._alphas[1:]))

    @property
    def is_empty(self) -> bool:
        return not self._alphas

    @property
    def alphas(self) -> np.ndarray:
        return np.array(self._alphas)

    @property
    def cms(self) -> np.ndarray:
        return np.array(self._cms)

    @property
    def samples(self) -> Tuple[Tuple[float, float], ...]:
        return tuple(zip(self._alphas, self._cms))

    @property
    def alpha_range(self) -> Optional[Tuple[float, float]]:
        """(first alpha, last alpha) in table order, or None if empty."""
        if not self._alphas:
            return None
        return self._alphas[0], self._alphas[-1]

    def __len__(self):
        return len(self._alphas)

    def __repr__(self):
        if not self._alphas:
            return "AeroTable(empty)"
        return (f"AeroTable(n={len(self)}, "
                f"alpha=[{self._alphas[0]:.2f}, {self._alphas[-1]:.2f}] deg)")

"""
V-tail pitching moment model.

Total aircraft pitching moment coefficient as a function of tail angle and
aircraft incidence:

    Cm_total = Cm_wing + Cm_tail + Cm_prop

where the tail contribution combines the tabulated tail Cm (about its
aerodynamic center) with lift and drag based terms scaled by the
longitudinal and vertical tail volume coefficients.
"""

import numpy as np
from dataclasses import dataclass, asdict
from typing import Dict, Optional

from vtail_trim.core.aero_table import AeroTable


# Empirical quadratic term: 0.0046 + 0.1050 * (a_t * alpha)^2
QUAD_CONSTANT = 0.0046
QUAD_COEFF = 0.1050

DEG_TO_RAD = np.pi / 180.0


@dataclass(frozen=True)
class PhysicalConstants:
    """
    Fixed aircraft parameters for the moment model.

    Attributes
    ----------
    cm_wing : float
        Wing/body pitching moment coefficient about the aerodynamic center
    cm_propulsion : float
        Propulsion pitching moment contribution
    sin_dihedral : float
        Sine of V-tail dihedral angle
    cos_dihedral : float
        Cosine of V-tail dihedral angle
    vol_coeff_longitudinal : float
        Longitudinal tail volume ratio (lt*St)/(c*S)
    vol_coeff_vertical : float
        Vertical tail volume ratio (zt*St)/(c*S)
    correction_const : float
        3-D lift curve correction a_t (per deg)
    """
    cm_wing: float = -0.17413
    cm_propulsion: float = -0.0012
    sin_dihedral: float = 0.352      # Gamma = 20.6 deg
    cos_dihedral: float = 0.93606
    vol_coeff_longitudinal: float = 0.355
    vol_coeff_vertical: float = 0.0266
    correction_const: float = 0.0781

    @classmethod
    def from_dihedral_deg(cls, dihedral_deg: float, **kwargs) -> 'PhysicalConstants':
        """
        Create constants with sine/cosine computed from a dihedral angle.

        Parameters
        ----------
        dihedral_deg : float
            V-tail dihedral angle (deg)
        **kwargs
            Remaining constants (defaults used when omitted)
        """
        gamma = np.radians(dihedral_deg)
        return cls(sin_dihedral=float(np.sin(gamma)),
                   cos_dihedral=float(np.cos(gamma)),
                   **kwargs)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


class MomentModel:
    """
    Total pitching moment of a V-tail aircraft.

    The table lookup and the a_t*alpha term use the total angle in degrees;
    the sin/cos projections use the same angle in radians.

    Parameters
    ----------
    table : AeroTable
        Tail Cm(alpha) data
    constants : PhysicalConstants, optional
        Aircraft constants (XB defaults if None)
    """

    def __init__(self, table: AeroTable, constants: Optional[PhysicalConstants] = None):
        """Initialize moment model."""
        self.table = table
        self.constants = constants if constants is not None else PhysicalConstants()

    def breakdown(self, tail_angle_deg: float, incidence_deg: float) -> Dict[str, float]:
        """
        Evaluate all moment contributions.

        Parameters
        ----------
        tail_angle_deg : float
            Tail angle (deg)
        incidence_deg : float
            Aircraft incidence angle (deg)

        Returns
        -------
        dict
            Intermediate terms and 'cm_total'
        """
        c = self.constants

        total_angle_deg = tail_angle_deg + incidence_deg
        total_angle_rad = total_angle_deg * DEG_TO_RAD

        # Tail aerodynamic center contribution
        cm_ac_tail = self.table.query(total_angle_deg) * c.sin_dihedral

        geom = c.correction_const * total_angle_deg
        quad = QUAD_CONSTANT + QUAD_COEFF * geom ** 2

        cos_a = np.cos(total_angle_rad)
        sin_a = np.sin(total_angle_rad)

        # Lift based (longitudinal arm)
        lift_term = geom * cos_a * c.cos_dihedral + quad * sin_a
        longitudinal_term = lift_term * c.vol_coeff_longitudinal

        # Drag/tilt based (vertical arm)
        drag_term = geom * sin_a * c.cos_dihedral - quad * cos_a
        vertical_term = drag_term * c.vol_coeff_vertical

        cm_tail = cm_ac_tail - longitudinal_term + vertical_term
        cm_total = c.cm_wing + cm_tail + c.cm_propulsion

        return {
            'total_angle_deg': float(total_angle_deg),
            'cm_ac_tail': float(cm_ac_tail),
            'geom': float(geom),
            'quad': float(quad),
            'lift_term': float(lift_term),
            'longitudinal_term': float(longitudinal_term),
            'drag_term': float(drag_term),
            'vertical_term': float(vertical_term),
            'cm_tail': float(cm_tail),
            'cm_total': float(cm_total),
        }

    def total_moment(self, tail_angle_deg: float, incidence_deg: float) -> float:
        """
        Total pitching moment coefficient.

        Parameters
        ----------
        tail_angle_deg : float
            Tail angle (deg)
        incidence_deg : float
            Aircraft incidence angle (deg)

        Returns
        -------
        float
            Cm_total
        """
        return self.breakdown(tail_angle_deg, incidence_deg)['cm_total']

    def __call__(self, tail_angle_deg: float, incidence_deg: float) -> float:
        return self.total_moment(tail_angle_deg, incidence_deg)

    def __repr__(self):
        return f"MomentModel(table={self.table!r}, constants={self.constants!r})"

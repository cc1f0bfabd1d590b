"""
Moment Model Tests

Tests for the V-tail total pitching moment:
- Agreement with the closed-form expression
- Degree/radian usage
- Purity
- Physical constants
"""

import math
import pytest
import numpy as np
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from vtail_trim.core.aero_table import AeroTable
from vtail_trim.core.moment_model import MomentModel, PhysicalConstants


def reference_moment(table, c, tail, incidence):
    """Direct evaluation of the moment equation."""
    a_deg = tail + incidence
    a_rad = math.radians(a_deg)
    geom = c.correction_const * a_deg
    quad = 0.0046 + 0.1050 * geom ** 2
    lift = geom * math.cos(a_rad) * c.cos_dihedral + quad * math.sin(a_rad)
    drag = geom * math.sin(a_rad) * c.cos_dihedral - quad * math.cos(a_rad)
    cm_tail = (table.query(a_deg) * c.sin_dihedral
               - lift * c.vol_coeff_longitudinal
               + drag * c.vol_coeff_vertical)
    return c.cm_wing + cm_tail + c.cm_propulsion


@pytest.fixture
def table():
    return AeroTable([(-5.0, 0.10), (0.0, 0.02), (5.0, -0.06)])


@pytest.fixture
def model(table):
    return MomentModel(table)


class TestPhysicalConstants:
    """Test aircraft constants."""

    def test_defaults(self):
        c = PhysicalConstants()

        assert c.cm_wing == -0.17413
        assert c.cm_propulsion == -0.0012
        assert c.sin_dihedral == 0.352
        assert c.cos_dihedral == 0.93606
        assert c.vol_coeff_longitudinal == 0.355
        assert c.vol_coeff_vertical == 0.0266
        assert c.correction_const == 0.0781

    def test_from_dihedral(self):
        c = PhysicalConstants.from_dihedral_deg(20.6, cm_wing=-0.1)

        assert np.isclose(c.sin_dihedral, 0.352, atol=1e-3)
        assert np.isclose(c.cos_dihedral, 0.93606, atol=1e-3)
        assert c.cm_wing == -0.1

    def test_frozen(self):
        c = PhysicalConstants()

        with pytest.raises(Exception):
            c.cm_wing = 0.0

    def test_to_dict(self):
        d = PhysicalConstants().to_dict()

        assert set(d) == {'cm_wing', 'cm_propulsion', 'sin_dihedral', 'cos_dihedral',
                          'vol_coeff_longitudinal', 'vol_coeff_vertical',
                          'correction_const'}


class TestMomentModel:
    """Test total moment evaluation."""

    def test_zero_angle_empty_table(self):
        """At zero angle only the wing, propulsion and constant drag terms remain."""
        model = MomentModel(AeroTable())
        expected = -0.17413 - 0.0012 - 0.0046 * 0.0266

        assert np.isclose(model.total_moment(0.0, 0.0), expected, rtol=1e-12)

    @pytest.mark.parametrize('tail,incidence', [
        (-2.0, 0.0), (-5.4, 0.0), (3.0, 1.5), (-12.0, 2.0), (25.0, -5.0)
    ])
    def test_matches_closed_form(self, model, table, tail, incidence):
        expected = reference_moment(table, model.constants, tail, incidence)

        assert np.isclose(model.total_moment(tail, incidence), expected, rtol=1e-12)

    def test_depends_on_total_angle_only(self, model):
        assert np.isclose(model.total_moment(-3.0, 1.0), model.total_moment(-1.0, -1.0),
                          rtol=1e-12)

    def test_trig_terms_use_radians(self):
        """A 90 deg total angle gives cos = 0 in the lift/drag projections."""
        c = PhysicalConstants()
        model = MomentModel(AeroTable(), c)

        terms = model.breakdown(90.0, 0.0)
        geom = c.correction_const * 90.0
        quad = 0.0046 + 0.1050 * geom ** 2

        assert np.isclose(terms['geom'], geom)
        assert np.isclose(terms['lift_term'], quad, rtol=1e-9)
        assert np.isclose(terms['drag_term'], geom * c.cos_dihedral, rtol=1e-9)

    def test_pure_function(self, model):
        """Identical inputs give bit-identical output."""
        first = model.total_moment(-2.345, 0.7)
        second = model.total_moment(-2.345, 0.7)

        assert first == second
        assert model.total_moment(1.0, 0.0) == model.total_moment(1.0, 0.0)

    def test_breakdown_consistent(self, model):
        terms = model.breakdown(-2.0, 0.5)

        assert terms['total_angle_deg'] == -1.5
        assert terms['cm_total'] == model.total_moment(-2.0, 0.5)
        assert np.isclose(terms['cm_tail'],
                          terms['cm_ac_tail'] - terms['longitudinal_term'] + terms['vertical_term'])
        assert np.isclose(terms['cm_ac_tail'], model.table.query(-1.5) * 0.352)

    def test_callable(self, model):
        assert model(-2.0, 0.0) == model.total_moment(-2.0, 0.0)

    def test_custom_constants(self, table):
        c = PhysicalConstants(cm_wing=0.0, cm_propulsion=0.0)
        model = MomentModel(table, c)
        default = MomentModel(table)

        assert np.isclose(model.total_moment(1.0, 0.0) - default.total_moment(1.0, 0.0),
                          0.17413 + 0.0012)

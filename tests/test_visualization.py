"""
Visualization Tests

Tests for aero table, moment curve and convergence plots.
"""

import pytest
import numpy as np
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend for testing
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from vtail_trim.core.aero_table import AeroTable
from vtail_trim.core.moment_model import MomentModel
from vtail_trim.control.trim import TrimSolver
from vtail_trim.visualization.plotting import (
    plot_aero_table,
    plot_moment_curve,
    plot_convergence,
    setup_plotting_style
)


@pytest.fixture
def table():
    return AeroTable([(-5.0, 0.10), (0.0, 0.02), (5.0, -0.06)])


@pytest.fixture
def model(table):
    return MomentModel(table)


class TestPlotting:
    """Test plotting functions."""

    def teardown_method(self):
        plt.close('all')

    def test_plot_aero_table(self, table):
        fig = plot_aero_table(table)

        assert isinstance(fig, Figure)
        assert len(fig.axes) == 1
        assert len(fig.axes[0].lines) == 2

    def test_plot_empty_table(self):
        fig = plot_aero_table(AeroTable())

        assert isinstance(fig, Figure)
        assert len(fig.axes[0].lines) == 0

    def test_plot_moment_curve_with_trim(self, model):
        result = TrimSolver(model).solve(-2.0)
        fig = plot_moment_curve(model, trim_result=result, n_points=51)

        ax = fig.axes[0]
        x, y = ax.lines[0].get_data()
        assert len(x) == 51
        assert np.isclose(y[25], model.total_moment(0.0, 0.0))

    def test_plot_convergence(self, model):
        result = TrimSolver(model).solve(-2.0)
        fig = plot_convergence(result)

        assert len(fig.axes) == 2

    def test_plot_convergence_with_nudges(self):
        class FlatModel:
            def total_moment(self, tail_angle_deg, incidence_deg):
                return 1.0

        result = TrimSolver(FlatModel(), max_iterations=5).solve(0.0)
        fig = plot_convergence(result)

        assert fig.axes[0].get_legend() is not None

    def test_save_figure(self, table, tmp_path):
        save_path = tmp_path / 'table.png'
        plot_aero_table(table, save_path=str(save_path))

        assert save_path.exists()

    def test_setup_plotting_style(self):
        setup_plotting_style()

        assert plt.rcParams['axes.titlesize'] == 12

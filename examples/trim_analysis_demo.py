"""
Trim Analysis Demonstration - XB V-Tail

Demonstrates:
- Loading the tail aero table and configuration
- Moment breakdown at the initial guess
- Newton-Raphson trim and static stability check
- Trim over a range of incidence angles
- Moment curve and convergence plots
"""

import numpy as np
import matplotlib
matplotlib.use('Agg')
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from vtail_trim.io.config import load_trim_config
from vtail_trim.visualization.plotting import (plot_aero_table, plot_moment_curve,
                                               plot_convergence, setup_plotting_style)


def main():
    print("=" * 70)
    print("Trim Analysis Demonstration - XB V-Tail")
    print("=" * 70)
    print()

    config_path = os.path.join(os.path.dirname(__file__), '..', 'config', 'xb_vtail.yaml')
    config = load_trim_config(config_path)

    table = config.load_table()
    model = config.create_moment_model(table)
    solver = config.create_solver(model)

    print(f"Aircraft: {config.name}")
    print(f"Tail table: {len(table)} points, alpha {table.alpha_range[0]:.1f} "
          f"to {table.alpha_range[1]:.1f} deg")
    print()

    # Moment contributions at the initial guess
    guess = config.solver['initial_guess_deg']
    terms = model.breakdown(guess, 0.0)
    print(f"Moment breakdown at tail = {guess:.1f} deg:")
    for key in ['cm_ac_tail', 'longitudinal_term', 'vertical_term', 'cm_tail', 'cm_total']:
        print(f"  {key:18s} {terms[key]: .6f}")
    print()

    # Trim at the configured incidence
    print("Trimming (verbose)...")
    result, stability = solver.trim(initial_guess=guess,
                                    incidence=config.solver['incidence_deg'],
                                    verbose=True)
    print()
    print(f"  Trimmed tail angle: {result.tail_angle_deg:.5f} deg")
    print(f"  Cma: {stability.cma:.5f} /deg -> {stability.verdict}")
    print()

    # Trim across incidence angles
    print("Trim vs incidence:")
    print(f"  {'i (deg)':>8s} {'tail (deg)':>11s} {'iters':>6s} {'Cma':>10s}")
    for incidence in np.arange(-4.0, 4.1, 2.0):
        res, stab = solver.trim(initial_guess=guess, incidence=incidence)
        print(f"  {incidence:8.1f} {res.tail_angle_deg:11.5f} {res.iterations:6d} "
              f"{stab.cma:10.5f}")
    print()

    # Plots
    output_dir = os.path.join(os.path.dirname(__file__), '..', 'output')
    os.makedirs(output_dir, exist_ok=True)

    setup_plotting_style()
    plot_aero_table(table, save_path=os.path.join(output_dir, 'tail_cm_table.png'))
    plot_moment_curve(model, trim_result=result,
                      save_path=os.path.join(output_dir, 'trim_moment_curve.png'))
    plot_convergence(result, save_path=os.path.join(output_dir, 'trim_convergence.png'))

    print(f"Plots saved to: {os.path.abspath(output_dir)}")


if __name__ == "__main__":
    main()

"""
Longitudinal Static Stability & Trim Analyzer

Console program: loads the tail aero table, trims the aircraft with the
Newton-Raphson solver and reports the static stability derivative.

Usage:
------
    vtail-trim [DATA_FILE] [--config YAML] [--incidence DEG] [--plot PNG]
    python -m vtail_trim datat.txt --verbose

Exit codes: 0 on completion (converged or not), 1 if the aero data or the
configuration cannot be loaded.
"""

import argparse
import sys
from typing import List, Optional

import yaml

from vtail_trim.analysis.stability import StabilityResult
from vtail_trim.control.trim import TrimResult
from vtail_trim.io.config import TrimConfig, create_example_config, load_trim_config
from vtail_trim.io.data_loader import DEFAULT_DATA_FILE, DataLoadError


BANNER_WIDTH = 46
TRIM_HEADER = "[1] TRIMMING AIRCRAFT (Newton-Raphson Solver)..."


def format_banner() -> str:
    rule = "=" * BANNER_WIDTH
    return "\n".join([
        rule,
        "STABILITY SOLVER".center(BANNER_WIDTH),
        "Physics Model: V-Tail w/ Dihedral".center(BANNER_WIDTH),
        rule,
    ])


def format_header(n_points: int) -> str:
    return "\n".join([
        format_banner(),
        f"Database: Loaded {n_points} aerodynamic data points.",
    ])


def format_trim_section(result: TrimResult, header: bool = True) -> str:
    lines = [TRIM_HEADER] if header else []
    lines += [
        f"   -> Iterations: {result.iterations}",
        f"   -> Trimmed Tail Angle: {result.tail_angle_deg:.5f} deg",
        f"   -> Residual Moment:    {result.residual_moment:.5e}",
    ]
    if not result.converged:
        lines.append(f"   Warning: not converged within {result.iterations} iterations "
                     f"(tolerance {result.tolerance:g}); reporting best estimate.")
    return "\n".join(lines)


def format_stability_section(stability: StabilityResult) -> str:
    return "\n".join([
        "[2] CHECKING STATIC STABILITY...",
        f"   -> Stability Derivative (Cma): {stability.cma:.5f} /deg",
        f">>> RESULT: {stability.verdict} configuration.",
    ])


def format_report(n_points: int, result: TrimResult, stability: StabilityResult) -> str:
    """
    Full console report.

    Parameters
    ----------
    n_points : int
        Number of loaded aero data points
    result : TrimResult
        Trim solution
    stability : StabilityResult
        Stability check at the trimmed angle

    Returns
    -------
    str
        Human-readable report
    """
    return "\n".join([
        format_header(n_points),
        "",
        format_trim_section(result),
        "",
        format_stability_section(stability),
    ])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='vtail-trim',
        description="Longitudinal trim and static stability of a V-tail aircraft."
    )
    parser.add_argument('data_file', nargs='?', default=None,
                        help=f"two-column alpha/Cm tail data (default: {DEFAULT_DATA_FILE})")
    parser.add_argument('--config', help="YAML configuration file")
    parser.add_argument('--incidence', type=float, help="aircraft incidence angle (deg)")
    parser.add_argument('--initial-guess', type=float, help="initial tail angle (deg)")
    parser.add_argument('--tolerance', type=float, help="convergence tolerance on |Cm|")
    parser.add_argument('--max-iter', type=int, help="maximum solver iterations")
    parser.add_argument('--require-data', action='store_true',
                        help="fail if the data file holds no numeric pairs")
    parser.add_argument('--plot', metavar='PNG', help="save the moment curve plot")
    parser.add_argument('--verbose', '-v', action='store_true',
                        help="print solver iterations")
    return parser


def _build_config(args) -> TrimConfig:
    if args.config:
        config = load_trim_config(args.config)
    else:
        config = TrimConfig(create_example_config())

    if args.data_file:
        config.data_file = args.data_file
        config.base_dir = None
    if args.incidence is not None:
        config.solver['incidence_deg'] = args.incidence
    if args.initial_guess is not None:
        config.solver['initial_guess_deg'] = args.initial_guess
    if args.tolerance is not None:
        config.solver['tolerance'] = args.tolerance
    if args.max_iter is not None:
        config.solver['max_iterations'] = args.max_iter

    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Run trim analysis from the command line."""
    args = build_parser().parse_args(argv)

    try:
        config = _build_config(args)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"ERROR: Could not load configuration: {e}", file=sys.stderr)
        return 1

    try:
        table = config.load_table(require_data=args.require_data)
    except DataLoadError as e:
        print(f"ERROR: {e}!", file=sys.stderr)
        print(f"Please ensure {config.data_path.name} is in the expected directory.",
              file=sys.stderr)
        return 1

    try:
        model = config.create_moment_model(table)
        solver = config.create_solver(model)
        incidence = float(config.solver['incidence_deg'])
        initial_guess = float(config.solver['initial_guess_deg'])
    except (TypeError, ValueError) as e:
        print(f"ERROR: Invalid solver settings: {e}", file=sys.stderr)
        return 1

    print(format_header(len(table)))
    if table.is_empty:
        print("Warning: aero table is empty, tail Cm will be taken as 0.0")
    elif not table.is_monotonic():
        print("Warning: aero table alpha values are not strictly increasing")
    print()

    # Iteration lines print under the trim header
    print(TRIM_HEADER)
    result = solver.solve(initial_guess=initial_guess, incidence=incidence,
                          verbose=args.verbose)
    print(format_trim_section(result, header=False))
    print()

    stability = solver.check_stability(result)
    print(format_stability_section(stability))

    if args.plot:
        from vtail_trim.visualization.plotting import plot_moment_curve, setup_plotting_style

        setup_plotting_style()
        center = result.tail_angle_deg
        plot_moment_curve(model, incidence_deg=incidence,
                          tail_range=(center - 10.0, center + 10.0),
                          trim_result=result, save_path=args.plot)
        print(f"\nPlot saved to: {args.plot}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Trim Analysis Configuration

YAML-based configuration for aircraft constants, data source, solver
settings and the stability check.
"""

import yaml
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Union

from vtail_trim.core.aero_table import AeroTable
from vtail_trim.core.moment_model import MomentModel, PhysicalConstants
from vtail_trim.control.trim import TrimSolver
from vtail_trim.io.data_loader import DEFAULT_DATA_FILE, load_aero_csv, load_aero_data


SOLVER_DEFAULTS = {
    'incidence_deg': 0.0,
    'initial_guess_deg': -2.0,
    'tolerance': 1e-6,
    'max_iterations': 100,
    'fd_step': 0.001,
    'gradient_floor': 1e-9,
    'stall_nudge': 0.1,
}

STABILITY_DEFAULTS = {
    'delta_deg': 1.0,
}


class TrimConfig:
    """
    Trim analysis configuration loaded from YAML.

    Attributes
    ----------
    name : str
        Aircraft name
    constants : PhysicalConstants
        Moment model constants
    data_file : str
        Tail aero table path (relative paths resolved against base_dir)
    solver : dict
        Solver settings (see SOLVER_DEFAULTS)
    stability : dict
        Stability check settings (see STABILITY_DEFAULTS)
    """

    def __init__(self, config_dict: Dict[str, Any], base_dir: Union[str, Path, None] = None):
        """
        Initialize configuration from dictionary.

        Parameters
        ----------
        config_dict : dict
            Configuration dictionary (typically from YAML)
        base_dir : str or Path, optional
            Directory for resolving a relative data file path
        """
        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise ValueError(
                f"Configuration must be a mapping, got {type(config_dict).__name__}"
            )

        self.raw_config = config_dict
        self.base_dir = Path(base_dir) if base_dir is not None else None
        self._parse_config()

    def _parse_config(self):
        """Parse configuration dictionary."""
        aircraft = self.raw_config.get('aircraft', {}) or {}

        self.name = aircraft.get('name', 'Unnamed Aircraft')
        self.constants = parse_constants(aircraft.get('constants', {}) or {})

        data = self.raw_config.get('data', {}) or {}
        self.data_file = data.get('file', DEFAULT_DATA_FILE)

        self.solver = _merge_section(self.raw_config.get('solver'), SOLVER_DEFAULTS, 'solver')
        self.stability = _merge_section(self.raw_config.get('stability'), STABILITY_DEFAULTS,
                                        'stability')

        for key in ('incidence_deg', 'initial_guess_deg'):
            try:
                self.solver[key] = float(self.solver[key])
            except (TypeError, ValueError):
                raise ValueError(
                    f"solver.{key} must be a number, got {self.solver[key]!r}"
                ) from None

    @property
    def data_path(self) -> Path:
        path = Path(self.data_file)
        if self.base_dir is not None and not path.is_absolute():
            return self.base_dir / path
        return path

    def load_table(self, require_data: bool = False) -> AeroTable:
        """Load the configured aero table (CSV or two-column text)."""
        path = self.data_path
        if path.suffix.lower() == '.csv':
            return load_aero_csv(path, require_data=require_data)
        return load_aero_data(path, require_data=require_data)

    def create_moment_model(self, table: AeroTable) -> MomentModel:
        return MomentModel(table, self.constants)

    def create_solver(self, model) -> TrimSolver:
        """
        Create TrimSolver from configuration.

        Parameters
        ----------
        model : object
            Moment model

        Returns
        -------
        TrimSolver
            Configured solver
        """
        return TrimSolver(
            model,
            tolerance=float(self.solver['tolerance']),
            max_iterations=int(self.solver['max_iterations']),
            fd_step=float(self.solver['fd_step']),
            gradient_floor=float(self.solver['gradient_floor']),
            stall_nudge=float(self.solver['stall_nudge']),
            stability_delta=float(self.stability['delta_deg']),
        )

    def __repr__(self):
        return (f"TrimConfig(name='{self.name}', "
                f"data_file='{self.data_file}', "
                f"tolerance={self.solver['tolerance']})")


def parse_constants(constants_dict: Dict[str, Any]) -> PhysicalConstants:
    """
    Build PhysicalConstants from a config section.

    'dihedral_deg' may be given instead of sin_dihedral/cos_dihedral.

    Parameters
    ----------
    constants_dict : dict
        Constant name -> value

    Returns
    -------
    PhysicalConstants
        Constants with defaults for missing entries
    """
    known = {f.name for f in fields(PhysicalConstants)}
    values = dict(constants_dict)

    dihedral = values.pop('dihedral_deg', None)

    unknown = set(values) - known
    if unknown:
        raise ValueError(f"Unknown aircraft constants: {', '.join(sorted(unknown))}")

    values = {k: float(v) for k, v in values.items()}

    if dihedral is not None:
        if 'sin_dihedral' in values or 'cos_dihedral' in values:
            raise ValueError("Give either dihedral_deg or sin_dihedral/cos_dihedral, not both")
        return PhysicalConstants.from_dihedral_deg(float(dihedral), **values)

    return PhysicalConstants(**values)


def _merge_section(section, defaults: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = section or {}
    if not isinstance(section, dict):
        raise ValueError(f"{name} settings must be a mapping")
    unknown = set(section) - set(defaults)
    if unknown:
        raise ValueError(f"Unknown {name} settings: {', '.join(sorted(unknown))}")

    merged = dict(defaults)
    merged.update(section)
    return merged


def load_trim_config(yaml_file: Union[str, Path]) -> TrimConfig:
    """
    Load trim configuration from YAML file.

    Relative data file paths are resolved against the YAML file's directory.

    Parameters
    ----------
    yaml_file : str or Path
        Path to YAML configuration file

    Returns
    -------
    TrimConfig
        Loaded configuration

    Examples
    --------
    >>> config = load_trim_config('config/xb_vtail.yaml')
    >>> table = config.load_table()
    >>> solver = config.create_solver(config.create_moment_model(table))
    """
    with open(yaml_file, 'r') as f:
        config_dict = yaml.safe_load(f)

    return TrimConfig(config_dict, base_dir=Path(yaml_file).parent)


def save_trim_config(config: TrimConfig, yaml_file: Union[str, Path]):
    """
    Save trim configuration to YAML file.

    Parameters
    ----------
    config : TrimConfig
        Configuration to save
    yaml_file : str or Path
        Output YAML file path
    """
    with open(yaml_file, 'w') as f:
        yaml.dump(config.raw_config, f, default_flow_style=False, sort_keys=False)

    print(f"Configuration saved to: {yaml_file}")


def create_example_config() -> Dict[str, Any]:
    """
    Create example configuration dictionary (XB V-tail aircraft).

    Returns
    -------
    dict
        Example configuration
    """
    config = {
        'aircraft': {
            'name': 'XB V-Tail',
            'constants': {
                'cm_wing': -0.17413,
                'cm_propulsion': -0.0012,
                'sin_dihedral': 0.352,     # Gamma = 20.6 deg
                'cos_dihedral': 0.93606,
                'vol_coeff_longitudinal': 0.355,
                'vol_coeff_vertical': 0.0266,
                'correction_const': 0.0781
            }
        },
        'data': {
            'file': DEFAULT_DATA_FILE
        },
        'solver': dict(SOLVER_DEFAULTS),
        'stability': dict(STABILITY_DEFAULTS)
    }

    return config

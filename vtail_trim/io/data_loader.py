"""
Aerodynamic Table Readers

Load tail Cm(alpha) data from whitespace separated text files or CSV files,
and write tables back to CSV.
"""

import math
import pandas as pd
from pathlib import Path
from typing import List, Tuple, Union

from vtail_trim.core.aero_table import AeroTable, DataError


DEFAULT_DATA_FILE = 'datat.txt'


class DataLoadError(DataError):
    """Raised when an aerodynamic data file cannot be read."""

    def __init__(self, filepath, reason: str = ''):
        self.filepath = str(filepath)
        self.reason = reason
        message = f"Could not open '{self.filepath}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


def parse_aero_text(lines) -> List[Tuple[float, float]]:
    """
    Parse two-column alpha/Cm text.

    Blank lines are skipped. Reading stops at the first line that does not
    begin with two finite numbers (nan, inf and digit separators are
    rejected); anything after it is ignored.

    Parameters
    ----------
    lines : iterable of str
        Text lines

    Returns
    -------
    list of (alpha, cm)
        Parsed samples in file order
    """
    samples = []

    for line in lines:
        tokens = line.split()
        if not tokens:
            continue

        if len(tokens) < 2:
            break
        alpha = _parse_number(tokens[0])
        cm = _parse_number(tokens[1])
        if alpha is None or cm is None:
            break

        samples.append((alpha, cm))

    return samples


def _parse_number(token: str):
    """Finite float from a plain numeric token, else None."""
    if '_' in token:
        return None
    try:
        value = float(token)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def load_aero_data(filepath: Union[str, Path] = DEFAULT_DATA_FILE,
                   require_data: bool = False,
                   verbose: bool = False) -> AeroTable:
    """
    Load tail aero table from a two-column text file.

    Parameters
    ----------
    filepath : str or Path
        Path to '<alpha_deg> <cm>' text file
    require_data : bool, optional
        Raise if the file holds no numeric pairs. Otherwise an empty table
        is returned and every query on it gives 0.0.
    verbose : bool, optional
        Print a load summary

    Returns
    -------
    AeroTable
        Loaded table
    """
    path = Path(filepath)

    try:
        with open(path, 'r') as f:
            samples = parse_aero_text(f)
    except OSError as e:
        raise DataLoadError(path, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise DataLoadError(path, "not a text file") from e

    if not samples and require_data:
        raise DataLoadError(path, "no numeric alpha/Cm pairs found")

    table = AeroTable(samples)

    if verbose:
        print(f"Database: Loaded {len(table)} aerodynamic data points.")

    return table


def load_aero_csv(filepath: Union[str, Path], require_data: bool = False) -> AeroTable:
    """
    Load tail aero table from CSV.

    Parameters
    ----------
    filepath : str or Path
        CSV file with columns 'alpha' (or 'Alpha') and 'Cm' (or 'cm')
    require_data : bool, optional
        Raise if the file holds no data rows

    Returns
    -------
    AeroTable
        Loaded table, rows in file order
    """
    try:
        df = pd.read_csv(filepath)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise DataLoadError(filepath, str(e)) from e

    alpha_col = _find_column(df, ('alpha', 'Alpha', 'alpha_deg'))
    cm_col = _find_column(df, ('Cm', 'cm', 'CM'))

    if alpha_col is None or cm_col is None:
        raise DataLoadError(filepath, "CSV must contain 'alpha' and 'Cm' columns")

    try:
        table = AeroTable.from_arrays(df[alpha_col].values, df[cm_col].values)
    except (ValueError, DataError) as e:
        raise DataLoadError(filepath, f"non-numeric table data ({e})") from e

    if table.is_empty and require_data:
        raise DataLoadError(filepath, "no alpha/Cm rows found")

    return table


def save_aero_csv(table: AeroTable, filepath: Union[str, Path]):
    """
    Save table to CSV with columns 'alpha' and 'Cm'.

    Parameters
    ----------
    table : AeroTable
        Table to save
    filepath : str or Path
        Output file
    """
    df = pd.DataFrame({'alpha': table.alphas, 'Cm': table.cms})
    df.to_csv(filepath, index=False)

    print(f"Saved aero table to: {filepath}")


def _find_column(df: pd.DataFrame, candidates):
    for name in candidates:
        if name in df.columns:
            return name
    return None

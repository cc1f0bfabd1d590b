"""
Data file and configuration I/O.
"""

from .data_loader import (
    DEFAULT_DATA_FILE,
    DataLoadError,
    parse_aero_text,
    load_aero_data,
    load_aero_csv,
    save_aero_csv
)

__all__ = [
    'DEFAULT_DATA_FILE',
    'DataLoadError',
    'parse_aero_text',
    'load_aero_data',
    'load_aero_csv',
    'save_aero_csv'
]

"""
Trim solvers.
"""

from .trim import TrimSolver, TrimStatus, TrimState, TrimResult

__all__ = ['TrimSolver', 'TrimStatus', 'TrimState', 'TrimResult']

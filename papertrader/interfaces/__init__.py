"""
Trading interfaces - simulated execution.

The ledger is the only execution backend: every fill is a paper fill at the
bar's close, with no fees or slippage.
"""

from .ledger import PositionLedger

__all__ = [
    'PositionLedger',
]

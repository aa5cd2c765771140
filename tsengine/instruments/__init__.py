"""
Financial instruments valued over a price history.

Provides:
- CashFlow: amount due from an epoch on
- FinancialInstrument: value / cash-flow interface
- FutureContract: future valuation with a margin deposit at entry
"""
from .contracts import CashFlow, FinancialInstrument, FutureContract, future_from_prices

__all__ = [
    'CashFlow',
    'FinancialInstrument',
    'FutureContract',
    'future_from_prices',
]

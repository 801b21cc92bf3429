"""
Per-account derived metrics.
"""


def drawdown_pct(equity: float, balance: float) -> float:
    """Percentage of equity above (positive) or below (negative) balance.

    A non-positive balance carries no drawdown signal and yields 0.0.
    """
    if balance > 0:
        return (equity - balance) / balance * 100.0
    return 0.0

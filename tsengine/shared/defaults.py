"""
Centralized default values for indicator and sizing parameters.

This is the SINGLE SOURCE OF TRUTH for parameter defaults.
All modules should import from here to ensure consistency.
"""

# Position sizing
RISK_UNITS_K = 0.01  # Account fraction normalised by volatility
VOLATILITY_DEPTH = 252  # One trading year of daily returns

# Indicator defaults for the one-line systems
SMA_DEPTH = 22  # About one trading month
EMA_ALPHA = 0.05

# Moment orders understood by RollingMoment
MEAN = 1
VARIANCE = 2

# Futures
MARGIN_RATE = 0.2  # Margin deposit as a fraction of the entry price

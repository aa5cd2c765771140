"""
System configuration for the signal pipeline.

Config validation runs at construction time (fail fast with clear errors).
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .systems import TradingSystem, parameter_names
from ..shared.defaults import EMA_ALPHA, RISK_UNITS_K, SMA_DEPTH, VOLATILITY_DEPTH
from ..shared.errors import InvalidConstruction
from ..timeseries.series import NaNPolicy


DEFAULT_PARAMETERS: Dict[TradingSystem, Tuple[float, ...]] = {
    TradingSystem.SMA_ONE_LINE_POSITION: (SMA_DEPTH,),
    TradingSystem.EMA_ONE_LINE_POSITION: (EMA_ALPHA,),
}


def _validate_config(
    *,
    system: TradingSystem,
    parameters: Tuple[float, ...],
    volatility_depth: int,
    risk_units: float,
) -> None:
    """Validate system parameters and sizing. Raises InvalidConstruction with a clear message on failure."""
    expected = parameter_names(system)
    if len(parameters) != len(expected):
        raise InvalidConstruction(
            f"{system.name} expects parameters {expected}, got {len(parameters)} value(s)"
        )
    if system is TradingSystem.SMA_ONE_LINE_POSITION:
        depth = parameters[0]
        if int(depth) != depth or depth < 1:
            raise InvalidConstruction(f"SMA depth must be an integer >= 1, got {depth}")
    if system is TradingSystem.EMA_ONE_LINE_POSITION:
        alpha = parameters[0]
        if not (0 < alpha <= 1):
            raise InvalidConstruction(f"EMA alpha must be in (0, 1], got {alpha}")
    if volatility_depth < 2:
        raise InvalidConstruction(f"volatility_depth must be >= 2, got {volatility_depth}")
    if risk_units <= 0:
        raise InvalidConstruction(f"risk_units must be > 0, got {risk_units}")


@dataclass
class SystemConfig:
    """Configuration of one indicator → signal → position pipeline."""
    name: str = "default"
    description: str = ""

    system: TradingSystem = TradingSystem.SMA_ONE_LINE_POSITION
    parameters: Optional[Tuple[float, ...]] = None  # None = defaults of the system

    # Position sizing
    volatility_depth: int = VOLATILITY_DEPTH
    risk_units: float = RISK_UNITS_K

    # Construction policy for materialised series
    nan_policy: NaNPolicy = NaNPolicy.KEEP

    def __post_init__(self):
        if isinstance(self.system, str):
            self.system = TradingSystem(self.system)
        if isinstance(self.nan_policy, str):
            self.nan_policy = NaNPolicy(self.nan_policy)
        if self.parameters is None:
            self.parameters = DEFAULT_PARAMETERS[self.system]
        self.parameters = tuple(self.parameters)
        _validate_config(
            system=self.system,
            parameters=self.parameters,
            volatility_depth=self.volatility_depth,
            risk_units=self.risk_units,
        )


BASELINE_CONFIG = SystemConfig(name="baseline")

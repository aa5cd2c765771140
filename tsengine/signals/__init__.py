"""
Signal generation module.

Regime-based signal detection from a price stream and an indicator stream,
and volatility-normalised position sizing of the resulting signals.
"""
from .regime import RegimeSignalGenerator, next_regime, transition_signal
from .sizing import PositionSizer, nominal_for
from .systems import TradingSystem, build_signals, parameter_names
from .config import SystemConfig, BASELINE_CONFIG, DEFAULT_PARAMETERS
from .config_loader import load_config_from_yaml, save_config_to_yaml
from .runner import run_pipeline, run_on_mapping, series_prices, positions_frame

__all__ = [
    'RegimeSignalGenerator',
    'next_regime',
    'transition_signal',
    'PositionSizer',
    'nominal_for',
    'TradingSystem',
    'build_signals',
    'parameter_names',
    'SystemConfig',
    'BASELINE_CONFIG',
    'DEFAULT_PARAMETERS',
    'load_config_from_yaml',
    'save_config_to_yaml',
    'run_pipeline',
    'run_on_mapping',
    'series_prices',
    'positions_frame',
]

"""
YAML configuration loader for signal pipelines.

Loads SystemConfig objects from YAML files so systems can be shared and
tuned without code changes.

Layout::

    name: sma_22
    description: One-line SMA system
    system:
      type: sma_one_line_position
      parameters: [22]
    risk:
      volatility_depth: 252
      risk_units: 0.01
    data:
      nan_policy: fill_forward
"""
import logging
from pathlib import Path
from typing import Union

import yaml

from .config import SystemConfig
from ..shared.defaults import RISK_UNITS_K, VOLATILITY_DEPTH


logger = logging.getLogger(__name__)

_KNOWN_SECTIONS = {"name", "description", "system", "risk", "data"}


def load_config_from_yaml(yaml_path: Union[str, Path]) -> SystemConfig:
    """
    Load system configuration from a YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        SystemConfig object

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If YAML is empty or holds invalid values
    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    with open(yaml_path, 'r') as f:
        config_dict = yaml.safe_load(f)

    if not config_dict:
        raise ValueError(f"Empty config file: {yaml_path}")

    unknown = set(config_dict) - _KNOWN_SECTIONS
    if unknown:
        logger.warning(f"Ignoring unknown config sections in {yaml_path}: {sorted(unknown)}")

    system = config_dict.get('system', {})
    risk = config_dict.get('risk', {})
    data_params = config_dict.get('data', {})

    parameters = system.get('parameters')
    if parameters is not None and not isinstance(parameters, (list, tuple)):
        parameters = [parameters]

    config = SystemConfig(
        name=config_dict.get('name', yaml_path.stem),
        description=config_dict.get('description', ''),
        system=system.get('type', 'sma_one_line_position'),
        parameters=tuple(parameters) if parameters is not None else None,
        volatility_depth=risk.get('volatility_depth', VOLATILITY_DEPTH),
        risk_units=risk.get('risk_units', RISK_UNITS_K),
        nan_policy=data_params.get('nan_policy', 'keep'),
    )
    logger.debug(f"Loaded config {config.name} from {yaml_path}")
    return config


def save_config_to_yaml(config: SystemConfig, yaml_path: Union[str, Path]) -> None:
    """Write ``config`` in the layout read by load_config_from_yaml."""
    config_dict = {
        'name': config.name,
        'description': config.description,
        'system': {
            'type': config.system.value,
            'parameters': list(config.parameters),
        },
        'risk': {
            'volatility_depth': config.volatility_depth,
            'risk_units': config.risk_units,
        },
        'data': {
            'nan_policy': config.nan_policy.value,
        },
    }
    with open(yaml_path, 'w') as f:
        yaml.safe_dump(config_dict, f, sort_keys=False)

"""
TD(lambda) Run Configuration.

Dataclasses for the YAML run configuration, validated on construction.

Example (see config.yaml):

    training:
      episodes: 100
      alpha: {value: 0.1, schedule: {type: exponential, rate: 0.99}}
      gamma: 1.0
      lambda: 0.8
    domain:
      n_states: 5
      seed: 0
    logging:
      log_frequency: 10
    checkpoint:
      save_frequency: 50
      save_dir: checkpoints/td_lambda
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from algorithms.shared.parameter import Parameter, parameter_from_config


@dataclass
class TDLambdaConfig:
    """Configuration for a TD(lambda) prediction run.

    Attributes:
        episodes: Number of training episodes
        alpha: Learning rate parameter
        gamma: Discount factor parameter
        lambda_: Trace decay parameter
        n_states: Number of non-terminal random-walk states
        seed: Optional seed for the behaviour policy
        log_frequency: Print progress every this many episodes
        save_frequency: Save weights every this many episodes
        save_dir: Directory for weight checkpoints
    """
    episodes: int = 100
    alpha: Parameter = Parameter(0.1)
    gamma: Parameter = Parameter(1.0)
    lambda_: Parameter = Parameter(0.8)
    n_states: int = 5
    seed: Optional[int] = None
    log_frequency: int = 10
    save_frequency: int = 50
    save_dir: str = "checkpoints/td_lambda"

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.episodes <= 0:
            raise ValueError("episodes must be positive")
        if self.n_states <= 0:
            raise ValueError("n_states must be positive")
        if self.log_frequency <= 0:
            raise ValueError("log_frequency must be positive")
        if self.save_frequency <= 0:
            raise ValueError("save_frequency must be positive")
        if self.alpha.value() <= 0.0:
            raise ValueError("alpha must be positive")
        if not 0.0 <= self.gamma.value() <= 1.0:
            raise ValueError("gamma must be in [0, 1]")
        if not 0.0 <= self.lambda_.value() <= 1.0:
            raise ValueError("lambda must be in [0, 1]")

    @property
    def save_path(self) -> Path:
        return Path(self.save_dir)


def config_from_dict(raw: Dict[str, Any]) -> TDLambdaConfig:
    """Build a TDLambdaConfig from a parsed YAML mapping.

    Missing sections and keys fall back to the dataclass defaults.
    """
    defaults = TDLambdaConfig()

    training = raw.get("training", {}) or {}
    domain = raw.get("domain", {}) or {}
    logging_cfg = raw.get("logging", {}) or {}
    checkpoint = raw.get("checkpoint", {}) or {}

    def param(key: str, default: Parameter) -> Parameter:
        if key not in training:
            return default
        return parameter_from_config(training[key])

    return TDLambdaConfig(
        episodes=training.get("episodes", defaults.episodes),
        alpha=param("alpha", defaults.alpha),
        gamma=param("gamma", defaults.gamma),
        lambda_=param("lambda", defaults.lambda_),
        n_states=domain.get("n_states", defaults.n_states),
        seed=domain.get("seed", defaults.seed),
        log_frequency=logging_cfg.get("log_frequency", defaults.log_frequency),
        save_frequency=checkpoint.get("save_frequency", defaults.save_frequency),
        save_dir=checkpoint.get("save_dir", defaults.save_dir),
    )


def load_config(config_path: str) -> TDLambdaConfig:
    """Load run configuration from a YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated TDLambdaConfig

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is empty or invalid
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r') as f:
        raw = yaml.safe_load(f)

    if raw is None:
        raise ValueError("Config file is empty")

    return config_from_dict(raw)

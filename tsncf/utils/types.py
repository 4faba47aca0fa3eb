"""
TSN types and configuration data classes.

This module defines the cost sentinel, the configuration data classes of the
evaluator and the solver, and the common type aliases used across the package.
"""

import math
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional, Tuple

from tsncf.utils.exceptions import ConfigurationError


# Cost returned for any candidate that violates a capacity or a deadline
INFEASIBLE_COST = math.inf

ConfigDict = Dict[str, Any]
ValidationResult = Tuple[bool, Optional[str]]


def is_feasible(cost: float) -> bool:
    """Return True if *cost* denotes a schedulable candidate."""
    return not math.isinf(cost)


def _from_mapping(cls, config_dict: Optional[ConfigDict]):
    config_dict = dict(config_dict or {})
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(config_dict) - known)
    if unknown:
        raise ConfigurationError(f"Unknown {cls.__name__} parameters: {', '.join(unknown)}")
    config = cls(**config_dict)
    valid, message = config.validate()
    if not valid:
        raise ConfigurationError(message)
    return config


@dataclass(frozen=True)
class EvaluatorConfig:
    """Evaluator penalties and network constants.

    Times are in microseconds, rates in Mbps and frame sizes in bytes.
    """

    # Penalties
    hop_penalty: float = 1.0
    penalty_threshold: float = 0.8  # fraction of the deadline
    threshold_exceeded_penalty: float = 0.1  # per percentage point over the threshold

    # Network constants
    link_rate_mbps: float = 100.0
    max_allocation_ratio: float = 0.75  # remainder is kept for best-effort traffic
    max_be_frame_bytes: int = 1522
    device_latency: float = 5.12

    def validate(self) -> ValidationResult:
        """
        Validate evaluator parameters.

        Returns:
            Tuple of (is_valid, error_message)
        """
        errors = []
        if self.hop_penalty < 0:
            errors.append("hop_penalty must be non-negative")
        if not 0 < self.penalty_threshold <= 1:
            errors.append("penalty_threshold must be in (0, 1]")
        if self.threshold_exceeded_penalty < 0:
            errors.append("threshold_exceeded_penalty must be non-negative")
        if self.link_rate_mbps <= 0:
            errors.append("link_rate_mbps must be positive")
        if not 0 < self.max_allocation_ratio <= 1:
            errors.append("max_allocation_ratio must be in (0, 1]")
        if self.max_be_frame_bytes <= 0:
            errors.append("max_be_frame_bytes must be positive")
        if self.device_latency < 0:
            errors.append("device_latency must be non-negative")

        if errors:
            return False, "; ".join(errors)
        return True, None

    @classmethod
    def from_dict(cls, config_dict: Optional[ConfigDict]) -> "EvaluatorConfig":
        return _from_mapping(cls, config_dict)

    def to_dict(self) -> ConfigDict:
        return asdict(self)


@dataclass(frozen=True)
class SolverConfig:
    """GRASP solver parameters."""

    k: int = 5  # candidate paths per destination
    max_iterations: Optional[int] = 1000
    duration: Optional[float] = None  # seconds, None means no time limit
    rcl_size: int = 3  # restricted candidate list size
    local_search: bool = True
    seed: Optional[int] = None

    def validate(self) -> ValidationResult:
        errors = []
        if self.k <= 0:
            errors.append("k must be positive")
        if self.max_iterations is not None and self.max_iterations <= 0:
            errors.append("max_iterations must be positive")
        if self.duration is not None and self.duration <= 0:
            errors.append("duration must be positive")
        if self.rcl_size <= 0:
            errors.append("rcl_size must be positive")
        if self.max_iterations is None and self.duration is None:
            errors.append("either max_iterations or duration must bound the search")

        if errors:
            return False, "; ".join(errors)
        return True, None

    @classmethod
    def from_dict(cls, config_dict: Optional[ConfigDict]) -> "SolverConfig":
        return _from_mapping(cls, config_dict)

    def to_dict(self) -> ConfigDict:
        return asdict(self)

import logging
import os
from typing import Dict, Any, Tuple

import yaml

from tsncf.utils.exceptions import ConfigurationError
from tsncf.utils.types import EvaluatorConfig, SolverConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "default.yaml")


class ConfigLoader:
    """配置加载器"""

    def load_config(self, config_path: str) -> Dict[str, Any]:
        """从YAML文件加载配置"""
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(f"Config file not found at {config_path}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Error parsing YAML config file {config_path}: {e}") from e

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping")
        return config

    def save_config(self, config: Dict[str, Any], config_path: str):
        """将配置保存到YAML文件"""
        with open(config_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(config, f, indent=2)
        logger.info(f"Config saved to {config_path}")

    def load_run_config(self, config_path: str) -> Tuple[EvaluatorConfig, SolverConfig]:
        """读取 evaluator / solver 两个配置段"""
        config = self.load_config(config_path)
        unknown = set(config) - {"evaluator", "solver"}
        if unknown:
            raise ConfigurationError(f"Unknown config sections in {config_path}: {', '.join(sorted(unknown))}")
        evaluator_config = EvaluatorConfig.from_dict(config.get("evaluator"))
        solver_config = SolverConfig.from_dict(config.get("solver"))
        return evaluator_config, solver_config

    def save_run_config(self, evaluator_config: EvaluatorConfig, solver_config: SolverConfig, config_path: str):
        """保存 evaluator / solver 配置"""
        self.save_config({"evaluator": evaluator_config.to_dict(), "solver": solver_config.to_dict()}, config_path)

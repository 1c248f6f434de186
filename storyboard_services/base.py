"""
Base service class for the stages of the storyboard pipeline.
"""

import argparse
import logging
import logging.config
import os
import sys
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel

from .errors import ConfigurationError


class ServiceConfig(BaseModel):
    """Base configuration model for services."""
    pass


def load_yaml_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Read a YAML config file into a dict. An empty file yields an empty dict."""
    if not os.path.exists(config_path):
        raise ConfigurationError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        config_data = yaml.safe_load(f)

    if config_data is None:
        return {}
    if not isinstance(config_data, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {config_path}")
    return config_data


def setup_logging(service_name: str, level: str = "INFO", log_dir: Optional[str] = "logs") -> None:
    """Setup logging to stderr and, when log_dir is set, to a dated log file."""
    handlers = {
        "default": {
            "level": level,
            "formatter": "standard",
            "class": "logging.StreamHandler",
        },
    }

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        date_str = datetime.now().strftime("%Y-%m-%d")
        handlers["file"] = {
            "level": level,
            "formatter": "standard",
            "class": "logging.FileHandler",
            "filename": str(log_path / f"{date_str}_{service_name.lower()}.log"),
            "mode": "a",
        }

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
            },
        },
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers),
                "level": level,
                "propagate": False
            }
        }
    }

    logging.config.dictConfig(logging_config)


class BaseService(ABC):
    """Base class for all pipeline services.

    A service is built either from a YAML config path or from an already
    constructed config object.
    """

    def __init__(self, config: Union[str, Path, ServiceConfig], **kwargs):
        """Initialize the service with configuration."""
        if isinstance(config, ServiceConfig):
            self.config_path = None
            self.config = config
        else:
            self.config_path = str(config)
            self.config = self._create_config(load_yaml_config(config))
        self.logger = logging.getLogger(self.__class__.__name__)

        # Override config with kwargs
        for key, value in kwargs.items():
            if hasattr(self.config, key):
                setattr(self.config, key, value)

    def _create_config(self, config_data: Dict[str, Any]) -> ServiceConfig:
        """Create configuration object from data."""
        # Override in subclasses to use specific config classes
        return ServiceConfig(**config_data)

    @abstractmethod
    def run(self) -> int:
        """
        Run the service.

        Returns:
            int: Exit code (0 for success, non-zero for error)
        """
        pass

    def validate_inputs(self) -> bool:
        """Validate that required input files exist."""
        return True

    def validate_outputs(self) -> bool:
        """Validate that outputs were created successfully."""
        return True


def create_argument_parser(service_name: str) -> argparse.ArgumentParser:
    """Create a standardized argument parser for services."""
    parser = argparse.ArgumentParser(
        description=f"{service_name} service for the children's story storyboard pipeline"
    )
    parser.add_argument(
        "--config",
        type=str,
        required=True,
        help="Path to configuration YAML file"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    return parser


def run_service(service_class: type, service_name: str, argv=None) -> None:
    """Standard entry point for services."""
    parser = create_argument_parser(service_name)
    args = parser.parse_args(argv)

    try:
        service = service_class(args.config)
        logging_config = getattr(service.config, "logging", None)
        setup_logging(
            service_class.__name__,
            level=logging_config.level if logging_config else "INFO",
            log_dir=logging_config.log_dir if logging_config else "logs",
        )
        if args.verbose:
            logging.getLogger().setLevel(logging.DEBUG)

        exit_code = service.run()
        sys.exit(exit_code)

    except Exception as e:
        logging.error(f"Service failed: {e}")
        sys.exit(1)

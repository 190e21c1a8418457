"""
Environment-specific logging configuration
"""
import logging
import os
from typing import Dict, Any

from setup_logging_optimized import setup_logging


def get_logging_config() -> Dict[str, Any]:
    """Get logging configuration based on environment"""
    is_production = os.getenv("RENDER") is not None or os.getenv("ENV") == "production"
    is_debug = os.getenv("DEBUG", "false").lower() == "true"

    config = {
        "production": {
            # Production: warnings plus pipeline milestones
            "default_level": "WARNING",
            "console_format": "%(levelname)s - %(name)s - %(message)s",
            "verbose_modules": [
                "agents.generation.multi_phase_generator",
                "agents.generation.single_phase_generator",
            ],
        },
        "development": {
            "default_level": "INFO",
            "console_format": "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            "verbose_modules": [],
        },
        "debug": {
            "default_level": "DEBUG",
            "console_format": "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
            "verbose_modules": [],
        },
    }

    if is_debug:
        environment = "debug"
    elif is_production:
        environment = "production"
    else:
        environment = "development"

    selected = dict(config[environment])
    selected["environment"] = environment
    return selected


def apply_logging_config(config: Dict[str, Any] = None) -> Dict[str, Any]:
    """Apply logging configuration to Python's logging system"""
    if config is None:
        config = get_logging_config()

    setup_logging(config["default_level"], config["console_format"])

    # Keep phase progress visible even when the root level is WARNING
    for module in config.get("verbose_modules", []):
        logging.getLogger(module).setLevel(logging.INFO)

    return config

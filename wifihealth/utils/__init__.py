"""
Utility modules for wifi-health.

Provides logging setup, configuration loading and validation,
and safe system command execution.
"""

from .log import setup_logging, JsonFormatter, default_log_dir, default_log_path
from .common import (
    load_config,
    validate_config,
    valid_section_values,
    validate_hostname,
    validate_port,
    config_section,
    get_real_user_home,
)
from .system import run_command, validate_host, validate_interface

__all__ = [
    "setup_logging",
    "JsonFormatter",
    "default_log_dir",
    "default_log_path",
    "load_config",
    "validate_config",
    "valid_section_values",
    "validate_hostname",
    "validate_port",
    "config_section",
    "get_real_user_home",
    "run_command",
    "validate_host",
    "validate_interface",
]

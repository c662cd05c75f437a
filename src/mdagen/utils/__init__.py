"""Configuration and logging utilities.

Modules:
    config: YAML configuration loading and dot-path access
    logger: Rich component loggers
    log_filter: Temporary log suppression helpers
"""

from . import config, log_filter, logger

__all__ = ["config", "logger", "log_filter"]

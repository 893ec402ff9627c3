"""
Core module initialization
"""

from .config import Config, load_config
from .errors import CleanupError, ConfigurationError, StoreOperationFailure
from .logger import logger

__all__ = [
    "Config",
    "load_config",
    "CleanupError",
    "ConfigurationError",
    "StoreOperationFailure",
    "logger",
]

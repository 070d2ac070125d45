# Utils Package
# Utility Functions and Helpers

from .logger import logger, setup_logger
from .helpers import *
from .constants import *
from .decorators import timed
from .exceptions import GatewayError, ConfigurationError

__all__ = [
    "logger",
    "setup_logger",
    "timed",
    "GatewayError",
    "ConfigurationError"
]

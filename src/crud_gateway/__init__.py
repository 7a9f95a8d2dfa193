from . import api, app

from .exceptions import ConfigurationError, GatewayError
from .results import Err, ErrorKind, Ok, Outcome, capture

__all__ = [
    # Modules
    "app",
    "api",
    # Exceptions
    "ConfigurationError",
    "GatewayError",
    # Outcomes
    "Err",
    "ErrorKind",
    "Ok",
    "Outcome",
    "capture",
]

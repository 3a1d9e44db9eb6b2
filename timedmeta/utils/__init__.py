from .error_handler import log_exceptions, convert_exceptions
from .logging_config import LoggerManager, log_manager, configure_logging

__all__ = [
    "log_exceptions",
    "convert_exceptions",
    "LoggerManager",
    "log_manager",
    "configure_logging",
]

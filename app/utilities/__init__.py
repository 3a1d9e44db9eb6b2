"""
Utilities package for the subtitle API.
"""

from .execution_timer import ExecutionTimer

__all__ = ["ExecutionTimer"]

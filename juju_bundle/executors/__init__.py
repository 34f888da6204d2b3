#!/usr/bin/env python3
"""
Executor factory and package exports.
"""

from .base import BaseExecutor
from .local import LocalExecutor


def get_executor():
    """
    Factory function to create the command executor.

    Returns:
        LocalExecutor instance
    """
    return LocalExecutor()


# Package exports
__all__ = ['BaseExecutor', 'LocalExecutor', 'get_executor']

"""
Configuration and validation package.

This package contains modules for loading juju-bundle settings and
validating bundle manifests and command-line flag combinations.
"""

__all__ = ['settings', 'validation']

"""
juju-bundle: a juju plugin for building, deploying and publishing bundles.
"""

__version__ = '0.1.0'

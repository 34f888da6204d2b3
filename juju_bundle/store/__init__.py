"""
Charm store backend abstraction package.

This package provides abstraction for the places charms and bundles are
published to (the charm store via the `charm` CLI, or a local directory).
"""

from .base import StoreBackend
from .charmstore import CharmStore
from .local import LocalStore
from ..errors import ConfigurationError


def get_store_backend(settings, executor):
    """Factory function to get appropriate store backend."""
    store_mode = settings.get('store_backend', 'charmstore')

    if store_mode == 'charmstore':
        return CharmStore(executor)
    elif store_mode == 'local':
        return LocalStore(settings['local_store_dir'])
    else:
        raise ConfigurationError(f"Unknown store backend: {store_mode}")


__all__ = ['StoreBackend', 'CharmStore', 'LocalStore', 'get_store_backend']

#!/usr/bin/env python3
"""
Settings for juju-bundle.

Layers, lowest precedence first:
- built-in defaults
- optional YAML settings file ($JUJU_BUNDLE_CONFIG, default ~/.config/juju-bundle/config.yaml)
- environment overrides (CHARM_SOURCE_DIR, CHARM_BUILD_DIR, JUJU_BUNDLE_STORE)
"""

import os
from pathlib import Path

import yaml

from ..errors import ConfigurationError

DEFAULT_CONFIG_PATH = Path('~/.config/juju-bundle/config.yaml')

ENV_OVERRIDES = {
    'CHARM_SOURCE_DIR': 'charm_source_dir',
    'CHARM_BUILD_DIR': 'charm_build_dir',
    'JUJU_BUNDLE_STORE': 'store_backend',
}


def default_settings():
    repository = os.environ.get('JUJU_REPOSITORY')
    return {
        'charm_source_dir': repository if repository else './charms',
        'charm_build_dir': '/tmp/charm-builds',
        'store_backend': 'charmstore',
        'local_store_dir': '~/.local/share/juju-bundle/store',
        'max_workers': None,
    }


def deep_merge(base, override):
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def settings_path():
    return Path(os.environ.get('JUJU_BUNDLE_CONFIG', str(DEFAULT_CONFIG_PATH))).expanduser()


def load_settings(path=None):
    """
    Load settings with optional file and environment overrides.

    A missing settings file is a valid state; an unreadable or malformed one
    raises ConfigurationError.
    """
    settings = default_settings()

    path = Path(path) if path else settings_path()
    if path.exists():
        try:
            with open(path, 'r') as f:
                overrides = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid settings file {path}: {e}")
        if not isinstance(overrides, dict):
            raise ConfigurationError(f"Settings file {path} must contain a mapping")
        settings = deep_merge(settings, overrides)

    for env_name, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_name, '').strip()
        if value:
            settings[key] = value

    worker_count(settings)
    return settings


def worker_count(settings):
    """Thread pool size for concurrent builds. None means one thread per CPU."""
    value = settings.get('max_workers')
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigurationError(f"max_workers must be a positive integer, got {value!r}")
    return value


def charm_source_dir(settings):
    """Directory that non-relative `source:` values are looked up in."""
    return Path(settings['charm_source_dir']).expanduser()


def charm_build_dir(settings):
    """Directory built charms are placed under."""
    return Path(settings['charm_build_dir']).expanduser()


def resolve_source_path(source, bundle_path, settings):
    """
    Resolve an application's `source:` value to a charm source directory.

    Values starting with `.` are relative to the bundle file being operated
    on; anything else is looked up in the charm source directory.
    """
    if source.startswith('.'):
        return Path(bundle_path).parent / source
    return charm_source_dir(settings) / source

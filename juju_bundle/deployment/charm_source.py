#!/usr/bin/env python3
"""
Charm source directories and the `charm build` step.
"""

from pathlib import Path

import yaml

from .utils import load_yaml
from ..errors import BundleValidationError


class CharmSource:
    """A charm source tree, identified by its metadata.yaml."""

    def __init__(self, path, metadata):
        self.path = Path(path)
        self.metadata = metadata

    @classmethod
    def load(cls, path):
        """Read metadata.yaml from a charm source directory."""
        metadata_file = Path(path) / 'metadata.yaml'
        try:
            metadata = load_yaml(metadata_file) or {}
        except yaml.YAMLError as e:
            raise BundleValidationError(f"Invalid charm metadata ({metadata_file}): {e}")
        return cls(path, metadata)

    @property
    def name(self):
        return self.metadata.get('name') or self.path.name

    def upstream_sources(self):
        """Map resource name -> upstream-source for resources that declare one."""
        sources = {}
        for name, resource in (self.metadata.get('resources') or {}).items():
            upstream = (resource or {}).get('upstream-source')
            if upstream is not None:
                sources[name] = upstream
        return sources

    def built_path(self, build_dir):
        return Path(build_dir) / self.name

    def build(self, app_name, executor, build_dir):
        """Build the charm into build_dir and return the built charm path."""
        print(f"Building {app_name} from {self.path}")
        executor.run_check('charm', ['build', str(self.path), '--build-dir', str(build_dir)])
        built = self.built_path(build_dir)
        print(f"✓ Built {app_name}: {built}")
        return built

#!/usr/bin/env python3
"""
Bundle manifest model.

A loaded Bundle is never modified in place. Operations that need a different
bundle (filtered apps, built charm paths, pinned revisions) derive a new value
with the with_* helpers and save that instead.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

import yaml

from .utils import load_yaml
from ..config.validation import validate_bundle
from ..errors import BundleValidationError

APP_KEYS = ('charm', 'source', 'resources')


def is_local_charm(charm):
    """True if the charm reference is a filesystem path rather than a store URL."""
    return charm.startswith(('/', './', '../', '~', 'local:'))


@dataclass(frozen=True)
class Application:
    """One entry under `applications:` in a bundle."""

    charm: Optional[str] = None
    source: Optional[str] = None
    resources: Dict[str, Any] = field(default_factory=dict)

    # num_units, scale, options, constraints etc. Written back untouched.
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data):
        data = dict(data or {})
        return cls(
            charm=data.get('charm'),
            source=data.get('source'),
            resources=dict(data.get('resources') or {}),
            extra={k: v for k, v in data.items() if k not in APP_KEYS},
        )

    def to_dict(self):
        data = {}
        if self.charm is not None:
            data['charm'] = self.charm
        if self.source is not None:
            data['source'] = self.source
        data.update(self.extra)
        if self.resources:
            data['resources'] = dict(self.resources)
        return data

    def with_charm(self, charm):
        return replace(self, charm=charm)

    def with_resources(self, resources):
        return replace(self, resources=dict(resources))


@dataclass(frozen=True)
class Bundle:
    applications: Dict[str, Application] = field(default_factory=dict)
    relations: List[List[str]] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, manifest, source=None):
        validate_bundle(manifest, source)

        # Older bundles use `services:` for what is now `applications:`
        apps = manifest.get('applications')
        if apps is None:
            apps = manifest.get('services') or {}

        return cls(
            applications={name: Application.from_dict(app) for name, app in apps.items()},
            relations=[list(rel) for rel in manifest.get('relations') or []],
            extra={k: v for k, v in manifest.items() if k not in ('applications', 'services', 'relations')},
        )

    @classmethod
    def load(cls, path):
        """Load and validate a bundle manifest from disk."""
        try:
            manifest = load_yaml(path)
        except yaml.YAMLError as e:
            raise BundleValidationError(f"Invalid bundle ({path}): {e}")
        return cls.from_dict(manifest, source=str(path))

    def to_dict(self):
        data = dict(self.extra)
        data['applications'] = {name: app.to_dict() for name, app in self.applications.items()}
        if self.relations:
            data['relations'] = [list(rel) for rel in self.relations]
        return data

    def save(self, path):
        with open(path, 'w') as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def with_applications(self, applications):
        return replace(self, applications=dict(applications))

    def with_relations(self, relations):
        return replace(self, relations=[list(rel) for rel in relations])

    def with_charm(self, name, charm):
        """Return a copy with a single application's charm replaced."""
        applications = dict(self.applications)
        applications[name] = applications[name].with_charm(charm)
        return self.with_applications(applications)

    def upgrade_charms(self, executor):
        """Run `juju upgrade-charm` for every application instead of redeploying."""
        for name, app in self.applications.items():
            if app.charm is None:
                continue

            flag = '--path' if is_local_charm(app.charm) else '--switch'
            args = ['upgrade-charm', name, flag, app.charm]
            for resource, value in app.resources.items():
                args.extend(['--resource', f"{resource}={value}"])

            print(f"Upgrading {name}")
            executor.run_check('juju', args)

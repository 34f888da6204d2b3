#!/usr/bin/env python3
"""
Publish a bundle and its charms to the store.

Every charm with both `charm:` (its store URL) and `source:` is built, pushed
and released to edge. The bundle is then pushed with each of those charms
pinned to the revision just published, and released to edge as well. Use
`promote` to move things on from edge.
"""

import tempfile
from pathlib import Path

from .bundle import Bundle
from .charm_source import CharmSource
from .parallel import run_parallel
from .utils import copy_readme, print_phase
from ..config.settings import charm_build_dir, resolve_source_path, worker_count
from ..config.validation import validate_publish_flags

DEFAULT_CHANNEL = 'edge'


def publishable_applications(bundle):
    """Apps with both a store URL and a source; anything else has nothing to publish."""
    return [
        (name, app) for name, app in bundle.applications.items()
        if app.charm is not None and app.source is not None
    ]


def publish_application(name, app, bundle_path, settings, executor, store, prune=False):
    """Build, push and release one charm. Returns (name, revision URL)."""
    charm_path = resolve_source_path(app.source, bundle_path, settings)
    charm = CharmSource.load(charm_path)

    built = charm.build(name, executor, charm_build_dir(settings))
    revision = store.push_charm(built, app.charm, app.resources)
    store.release(revision, DEFAULT_CHANNEL)

    if prune:
        executor.run_check('docker', ['system', 'prune', '-af'])

    return name, revision


def pin_revisions(bundle, revisions):
    """Derive a bundle with each published charm replaced by its exact revision."""
    pinned = bundle
    for name, revision in revisions:
        pinned = pinned.with_charm(name, revision)
    return pinned


def publish(bundle_path, url, executor, store, settings, serial=False, prune=False):
    """
    Run `publish` subcommand.

    Returns the released bundle revision URL.
    """
    validate_publish_flags(serial, prune)

    print_phase("PUBLISH", bundle_path)
    bundle = Bundle.load(bundle_path)

    store.login()

    apps = publishable_applications(bundle)
    print(f"Publishing {len(apps)} apps:")
    for name, _ in apps:
        print(f"  - {name}")
    print()

    if serial:
        revisions = [
            publish_application(name, app, bundle_path, settings, executor, store, prune)
            for name, app in apps
        ]
    else:
        def task_for(name, app):
            return lambda: publish_application(name, app, bundle_path, settings, executor, store)

        revisions = run_parallel([task_for(name, app) for name, app in apps], worker_count(settings))

    pinned = pin_revisions(bundle, revisions)

    # Push from a scratch directory so the bundle.yaml on disk is left alone
    with tempfile.TemporaryDirectory() as temp_dir:
        pinned.save(Path(temp_dir) / 'bundle.yaml')
        copy_readme(bundle_path, temp_dir)

        bundle_revision = store.push_bundle(temp_dir, url)

    store.release(bundle_revision, DEFAULT_CHANNEL)

    print(f"\n✓ Published {bundle_revision} with {len(revisions)} charms to {DEFAULT_CHANNEL}")
    print("=" * 60)
    return bundle_revision

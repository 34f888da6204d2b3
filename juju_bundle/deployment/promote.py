#!/usr/bin/env python3
"""
Promote a bundle and its charms from one channel to another.

Charms go first. The bundle is only promoted once every charm in scope made
it, so a channel never carries a bundle pointing at unreleased charms.
"""

from .utils import print_phase


def promotable_applications(bundle, excluded):
    """Apps without a `source:` are managed elsewhere and are never promoted."""
    return [
        (name, app) for name, app in bundle.applications.items()
        if name not in excluded and app.source is not None
    ]


def promote(bundle_url, from_channel, to_channel, store, excluded=()):
    """Run `promote` subcommand. Returns the promoted bundle revision URL."""
    print_phase("PROMOTE", f"{from_channel} -> {to_channel}")

    revision, bundle = store.load_bundle(bundle_url, from_channel)
    print(f"Found bundle revision {revision}")

    for name, app in promotable_applications(bundle, set(excluded)):
        print(f"Promoting {name} to {to_channel}.")
        store.release(app.charm, to_channel, app.resources)

    print("Bundle charms successfully promoted, promoting bundle.")

    bundle_revision = f"{bundle_url}-{revision}"
    store.release(bundle_revision, to_channel)

    print(f"\n✓ Promoted {bundle_revision} to {to_channel}")
    print("=" * 60)
    return bundle_revision

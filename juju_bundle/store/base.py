#!/usr/bin/env python3
"""
Base charm store backend interface.
"""


class StoreBackend:
    """Base interface for charm store backends."""

    def login(self):
        """Make sure later store calls are authenticated. Safe to call repeatedly."""
        raise NotImplementedError

    def push_charm(self, charm_path, url, resources=None):
        """Upload a built charm and return its revision URL."""
        raise NotImplementedError

    def push_bundle(self, bundle_dir, url):
        """Upload a bundle directory (bundle.yaml + README.md) and return its revision URL."""
        raise NotImplementedError

    def release(self, revision, channel, resources=None):
        """Make a charm or bundle revision available on a channel."""
        raise NotImplementedError

    def load_bundle(self, url, channel):
        """Fetch the bundle released on a channel. Returns (revision, Bundle)."""
        raise NotImplementedError


def split_revision(revision_url):
    """`cs:~me/foo-7` => (`cs:~me/foo`, 7)"""
    entity, sep, number = revision_url.rpartition('-')
    if not sep or not number.isdigit():
        return revision_url, None
    return entity, int(number)

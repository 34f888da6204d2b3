#!/usr/bin/env python3
"""
Local directory store for offline and dry runs.

Layout:
    <root>/<entity>/<revision>/...   pushed charm or bundle contents
    <root>/channels.yaml             {channel: {entity url: revision url}}
"""

import shutil
import threading
from pathlib import Path

import yaml

from .base import StoreBackend, split_revision
from ..deployment.bundle import Bundle
from ..deployment.utils import load_yaml
from ..errors import StoreError


def _entity_dir_name(url):
    return url.replace(':', '_').replace('/', '_').replace('~', '')


class LocalStore(StoreBackend):
    """Local storage backend for mock/development mode."""

    def __init__(self, root):
        self.root = Path(root).expanduser()
        self._lock = threading.Lock()

    @property
    def channels_file(self):
        return self.root / 'channels.yaml'

    def _load_channels(self):
        if not self.channels_file.exists():
            return {}
        try:
            return load_yaml(self.channels_file) or {}
        except yaml.YAMLError as e:
            raise StoreError(f"Invalid channel index ({self.channels_file}): {e}")

    def login(self):
        """No-op for local mode."""
        print(f"Using local store at {self.root}")

    def _push(self, path, url):
        entity_dir = self.root / _entity_dir_name(url)
        with self._lock:
            entity_dir.mkdir(parents=True, exist_ok=True)
            existing = [int(p.name) for p in entity_dir.iterdir() if p.name.isdigit()]
            number = max(existing, default=-1) + 1
            target = entity_dir / str(number)
            target.mkdir()

        if Path(path).is_dir():
            shutil.copytree(path, target, dirs_exist_ok=True)
        else:
            shutil.copy(path, target)

        revision = f"{url}-{number}"
        print(f"✓ Pushed {url} as {revision} (LOCAL)")
        return revision

    def push_charm(self, charm_path, url, resources=None):
        return self._push(charm_path, url)

    def push_bundle(self, bundle_dir, url):
        return self._push(bundle_dir, url)

    def release(self, revision, channel, resources=None):
        entity, number = split_revision(revision)
        if number is None:
            raise StoreError(f"Not a revision URL: {revision}")

        with self._lock:
            channels = self._load_channels()
            channels.setdefault(channel, {})[entity] = revision
            self.root.mkdir(parents=True, exist_ok=True)
            with open(self.channels_file, 'w') as f:
                yaml.safe_dump(channels, f, default_flow_style=False)
        print(f"Released {revision} to {channel} (LOCAL)")

    def released(self, url, channel):
        """Revision URL currently released for an entity on a channel, or None."""
        return self._load_channels().get(channel, {}).get(url)

    def load_bundle(self, url, channel):
        revision_url = self.released(url, channel)
        if revision_url is None:
            raise StoreError(f"No revision of {url} released to {channel}")

        _, number = split_revision(revision_url)
        bundle_file = self.root / _entity_dir_name(url) / str(number) / 'bundle.yaml'
        return number, Bundle.load(bundle_file)

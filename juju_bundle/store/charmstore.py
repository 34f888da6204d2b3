#!/usr/bin/env python3
"""Charm store backend driven through the `charm` CLI."""

import re
import tempfile
from pathlib import Path

import yaml

from .base import StoreBackend
from ..deployment.bundle import Bundle
from ..errors import StoreError

PUSH_URL_RE = re.compile(r"^url:\s*(\S+)", re.MULTILINE)


class CharmStore(StoreBackend):
    """Charm store backend for production use."""

    def __init__(self, executor):
        self.executor = executor

    def login(self):
        # Logging in up front avoids a browser window per `charm push`.
        print("Logging in to charm store, this may open up a browser window.")
        self.executor.run_check('charm', ['login'])

    def _push(self, path, url, resources=None):
        args = ['push', str(path), url]
        for name, value in (resources or {}).items():
            args.extend(['--resource', f"{name}={value}"])

        output = self.executor.capture('charm', args)
        match = PUSH_URL_RE.search(output)
        if not match:
            raise StoreError(f"Could not find revision URL in `charm push` output for {url}:\n{output}")
        revision = match.group(1)
        print(f"✓ Pushed {url} as {revision}")
        return revision

    def push_charm(self, charm_path, url, resources=None):
        return self._push(charm_path, url, resources)

    def push_bundle(self, bundle_dir, url):
        return self._push(bundle_dir, url)

    def release(self, revision, channel, resources=None):
        args = ['release', revision, '--channel', channel]
        # Only store resource revisions can be released alongside a charm
        for name, value in (resources or {}).items():
            if isinstance(value, int) or str(value).isdigit():
                args.extend(['--resource', f"{name}-{value}"])

        print(f"Releasing {revision} to {channel}")
        self.executor.run_check('charm', args)

    def bundle_revision(self, url, channel):
        output = self.executor.capture('charm', ['show', url, '--channel', channel, 'id', '--format', 'yaml'])
        try:
            return int((yaml.safe_load(output) or {})['id']['Revision'])
        except (yaml.YAMLError, KeyError, TypeError, ValueError):
            raise StoreError(f"Could not find revision for {url} on {channel}:\n{output}")

    def load_bundle(self, url, channel):
        revision = self.bundle_revision(url, channel)
        with tempfile.TemporaryDirectory() as temp_dir:
            target = Path(temp_dir) / 'bundle'
            self.executor.run_check('charm', ['pull', url, '--channel', channel, str(target)])
            bundle = Bundle.load(target / 'bundle.yaml')
        return revision, bundle

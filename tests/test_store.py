from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

import yaml

from _fakes import RecordingExecutor, make_settings

from juju_bundle.deployment.bundle import Bundle
from juju_bundle.errors import ConfigurationError, StoreError
from juju_bundle.store import CharmStore, LocalStore, get_store_backend
from juju_bundle.store.base import split_revision


class TestCharmStore(unittest.TestCase):
    def test_push_parses_revision(self) -> None:
        executor = RecordingExecutor(outputs={("charm", "push"): "url: cs:~me/web-7\nchannel: unpublished\n"})
        store = CharmStore(executor)

        revision = store.push_charm(Path("/build/web"), "cs:~me/web", {"img": "example/web:1"})

        self.assertEqual(revision, "cs:~me/web-7")
        self.assertEqual(executor.calls, [
            ("charm", ["push", "/build/web", "cs:~me/web", "--resource", "img=example/web:1"]),
        ])

    def test_push_without_url_in_output(self) -> None:
        executor = RecordingExecutor(outputs={("charm", "push"): "something unexpected"})
        with self.assertRaises(StoreError):
            CharmStore(executor).push_bundle("/tmp/bundle", "cs:~me/bundle/foo")

    def test_release_only_passes_resource_revisions(self) -> None:
        executor = RecordingExecutor()
        CharmStore(executor).release("cs:~me/web-7", "stable", {"img": 3, "other": "example/x:1", "cfg": "5"})
        self.assertEqual(executor.calls, [
            ("charm", ["release", "cs:~me/web-7", "--channel", "stable", "--resource", "img-3", "--resource", "cfg-5"]),
        ])

    def test_login(self) -> None:
        executor = RecordingExecutor()
        CharmStore(executor).login()
        self.assertEqual(executor.calls, [("charm", ["login"])])

    def test_load_bundle(self) -> None:
        executor = RecordingExecutor(outputs={
            ("charm", "show"): "id:\n  Id: cs:~me/bundle/foo-5\n  Revision: 5\n",
        })
        original_run = executor.run

        def run(name, args):
            returncode = original_run(name, args)
            if args[0] == "pull":
                target = Path(args[-1])
                target.mkdir(parents=True)
                (target / "bundle.yaml").write_text(yaml.safe_dump({"applications": {"web": {"charm": "cs:~me/web-7"}}}))
            return returncode

        executor.run = run
        revision, bundle = CharmStore(executor).load_bundle("cs:~me/bundle/foo", "edge")

        self.assertEqual(revision, 5)
        self.assertEqual(bundle.applications["web"].charm, "cs:~me/web-7")
        self.assertEqual(executor.calls[0], ("charm", ["show", "cs:~me/bundle/foo", "--channel", "edge", "id", "--format", "yaml"]))
        self.assertEqual(executor.calls[1][1][:4], ["pull", "cs:~me/bundle/foo", "--channel", "edge"])

    def test_unreadable_show_output(self) -> None:
        executor = RecordingExecutor(outputs={("charm", "show"): "not: [the, id]"})
        with self.assertRaises(StoreError):
            CharmStore(executor).bundle_revision("cs:~me/bundle/foo", "edge")


class TestLocalStore(unittest.TestCase):
    def test_push_release_load(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            store = LocalStore(root / "store")
            bundle_dir = root / "pushme"
            bundle_dir.mkdir()
            Bundle.from_dict({"applications": {"web": {"charm": "cs:~me/web-0"}}}).save(bundle_dir / "bundle.yaml")

            first = store.push_bundle(bundle_dir, "cs:~me/bundle/foo")
            second = store.push_bundle(bundle_dir, "cs:~me/bundle/foo")
            self.assertEqual((first, second), ("cs:~me/bundle/foo-0", "cs:~me/bundle/foo-1"))

            store.release(second, "edge")
            self.assertEqual(store.released("cs:~me/bundle/foo", "edge"), second)
            self.assertIsNone(store.released("cs:~me/bundle/foo", "stable"))

            revision, bundle = store.load_bundle("cs:~me/bundle/foo", "edge")
            self.assertEqual(revision, 1)
            self.assertEqual(bundle.applications["web"].charm, "cs:~me/web-0")

    def test_load_unreleased(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(StoreError):
                LocalStore(td).load_bundle("cs:~me/bundle/foo", "stable")

    def test_release_requires_revision(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(StoreError):
                LocalStore(td).release("cs:~me/web", "edge")

    def test_malformed_channel_index(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            (Path(td) / "channels.yaml").write_text("edge: [unclosed\n")
            with self.assertRaises(StoreError):
                LocalStore(td).released("cs:~me/web", "edge")


class TestStoreFactory(unittest.TestCase):
    def test_backends(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            executor = RecordingExecutor()
            self.assertIsInstance(get_store_backend(make_settings(td), executor), CharmStore)
            self.assertIsInstance(get_store_backend(make_settings(td, store_backend="local"), executor), LocalStore)
            with self.assertRaises(ConfigurationError):
                get_store_backend(make_settings(td, store_backend="s3"), executor)

    def test_split_revision(self) -> None:
        self.assertEqual(split_revision("cs:~me/web-7"), ("cs:~me/web", 7))
        self.assertEqual(split_revision("cs:~me/my-web"), ("cs:~me/my-web", None))
        self.assertEqual(split_revision("web"), ("web", None))


if __name__ == "__main__":
    unittest.main()

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from _fakes import RecordingExecutor, make_settings, write_charm

from juju_bundle.deployment.bundle import Application
from juju_bundle.deployment.resolution import (
    Resolution,
    merge_resources,
    resolution_for,
    resolve_application,
    resolve_applications,
)
from juju_bundle.errors import CommandError, ResolutionError


class TestResolutionTable(unittest.TestCase):
    def test_all_combinations(self) -> None:
        expected = {
            # (build, charm, source)
            (False, True, True): Resolution.USE_CHARM,
            (False, True, False): Resolution.USE_CHARM,
            (True, True, False): Resolution.USE_CHARM,
            (True, True, True): Resolution.BUILD,
            (True, False, True): Resolution.BUILD,
            (False, False, True): Resolution.BUILD,
            (True, False, False): Resolution.MISSING,
            (False, False, False): Resolution.MISSING,
        }
        for (build, has_charm, has_source), outcome in expected.items():
            app = Application(
                charm="cs:foo" if has_charm else None,
                source="./foo" if has_source else None,
            )
            with self.subTest(build=build, charm=has_charm, source=has_source):
                self.assertIs(resolution_for(build, app), outcome)

    def test_explicit_resources_win(self) -> None:
        merged = merge_resources({"X": "explicit"}, {"X": "built", "Y": "built-y"})
        self.assertEqual(merged, {"X": "explicit", "Y": "built-y"})


class TestResolveApplication(unittest.TestCase):
    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        self.root = Path(self._td.name)
        self.settings = make_settings(self.root)
        self.bundle_path = self.root / "bundle" / "bundle.yaml"
        self.bundle_path.parent.mkdir()

    def tearDown(self) -> None:
        self._td.cleanup()

    def test_charm_used_as_is_without_build(self) -> None:
        executor = RecordingExecutor()
        app = Application(charm="cs:~me/web-3", source="./web")
        resolved = resolve_application("web", app, False, self.bundle_path, self.settings, executor)
        self.assertIs(resolved, app)
        self.assertEqual(executor.calls, [])

    def test_neither_charm_nor_source_is_fatal(self) -> None:
        executor = RecordingExecutor()
        with self.assertRaises(ResolutionError) as ctx:
            resolve_application("web", Application(), True, self.bundle_path, self.settings, executor)
        self.assertIn("web", str(ctx.exception))
        self.assertEqual(executor.calls, [])

    def test_relative_source_builds_next_to_bundle(self) -> None:
        write_charm(self.bundle_path.parent / "charms", "web", resources={"X": "built", "img": "web:1.0"})
        executor = RecordingExecutor()
        app = Application(source="./charms/web", resources={"X": "explicit"})

        resolved = resolve_application("web", app, False, self.bundle_path, self.settings, executor)

        self.assertEqual(executor.commands("charm", "build"), [
            ("charm", ["build", str(self.bundle_path.parent / "./charms/web"), "--build-dir", str(self.root / "build")]),
        ])
        self.assertEqual(resolved.charm, str(self.root / "build" / "web"))
        self.assertEqual(resolved.resources, {"X": "explicit", "img": "web:1.0"})
        # The input application is left alone
        self.assertIsNone(app.charm)
        self.assertEqual(app.resources, {"X": "explicit"})

    def test_named_source_uses_source_dir(self) -> None:
        write_charm(self.root / "charms", "web-src", name="web")
        executor = RecordingExecutor()
        app = Application(charm="cs:~me/web", source="web-src")

        resolved = resolve_application("web", app, True, self.bundle_path, self.settings, executor)

        (_, args), = executor.commands("charm", "build")
        self.assertEqual(args[1], str(self.root / "charms" / "web-src"))
        self.assertEqual(resolved.charm, str(self.root / "build" / "web"))

    def test_build_failure_propagates(self) -> None:
        write_charm(self.root / "charms", "web")
        executor = RecordingExecutor(fail_when=lambda name, args: args[0] == "build")
        with self.assertRaises(CommandError):
            resolve_application("web", Application(source="web"), True, self.bundle_path, self.settings, executor)


class TestResolveApplications(unittest.TestCase):
    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        self.root = Path(self._td.name)
        self.settings = make_settings(self.root)
        self.bundle_path = self.root / "bundle.yaml"

    def tearDown(self) -> None:
        self._td.cleanup()

    def test_one_entry_per_app_in_input_order(self) -> None:
        for name in ("a", "b", "c"):
            write_charm(self.root / "charms", name)
        # First app finishes last
        delays = {("charm", "build"): lambda args: 0.2 if args[1].endswith("a") else 0}
        executor = RecordingExecutor(delays=delays)
        apps = {
            "a": Application(source="a"),
            "b": Application(source="b"),
            "c": Application(charm="cs:c"),
        }

        resolved = resolve_applications(apps, False, self.bundle_path, self.settings, executor)

        self.assertEqual(list(resolved), ["a", "b", "c"])
        self.assertEqual(resolved["a"].charm, str(self.root / "build" / "a"))
        self.assertEqual(resolved["c"].charm, "cs:c")
        self.assertEqual(len(executor.commands("charm", "build")), 2)

    def test_failure_does_not_undo_sibling_builds(self) -> None:
        write_charm(self.root / "charms", "a")
        executor = RecordingExecutor()
        apps = {"a": Application(source="a"), "b": Application()}

        with self.assertRaises(ResolutionError):
            resolve_applications(apps, False, self.bundle_path, self.settings, executor)

        builds = executor.commands("charm", "build")
        self.assertEqual(len(builds), 1)
        self.assertTrue(builds[0][1][1].endswith("a"))
        self.assertTrue((self.root / "build" / "a").is_dir())


if __name__ == "__main__":
    unittest.main()

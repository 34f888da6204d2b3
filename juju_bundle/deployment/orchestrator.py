#!/usr/bin/env python3
"""
juju-bundle
Deploys, removes, publishes and promotes a bundle and the charms in it
"""

import sys
import argparse
import tempfile
from pathlib import Path

from .bundle import Bundle
from .promote import promote
from .publish import publish
from .resolution import resolve_applications
from .selection import select_bundle
from .utils import print_phase
from ..config.settings import load_settings
from ..errors import BundleError
from ..executors import get_executor
from ..store import get_store_backend

CHANNELS = ('edge', 'beta', 'candidate', 'stable')


def remove_command(bundle_path, apps, executor):
    """Remove the selected applications from the current model, one at a time."""
    bundle = select_bundle(Bundle.load(bundle_path), apps)

    for name in bundle.applications:
        print(f"Removing {name}")
        executor.run_check('juju', ['remove-application', name])

    print(f"\n✓ Removed {len(bundle.applications)} applications")


def wait_for_stability(executor, wait):
    print("\n\nWaiting for stability before deploying.")
    executor.run_check('juju', ['wait', '-wv', '-t', str(wait)])


def deploy_command(bundle_path, apps, executor, settings, build=False, recreate=False,
                   upgrade_charms=False, wait=60, deploy_args=()):
    """Deploy a bundle, optionally building and/or recreating it."""
    print_phase("DEPLOY", bundle_path)

    bundle = select_bundle(Bundle.load(bundle_path), apps)
    build_count = sum(1 for app in bundle.applications.values() if app.source is not None)

    print(f"Found {len(bundle.applications)} total applications")
    print(f"Found {build_count} applications to build.\n")

    applications = resolve_applications(bundle.applications, build, bundle_path, settings, executor)
    bundle = bundle.with_applications(applications)

    # Upgrading in place skips teardown and deploy entirely
    if upgrade_charms:
        bundle.upgrade_charms(executor)
        return

    with tempfile.TemporaryDirectory() as temp_dir:
        temp_bundle = Path(temp_dir) / 'bundle.yaml'
        bundle.save(temp_bundle)

        if recreate:
            print("\n\nRemoving bundle before deploy.")
            remove_command(bundle_path, apps, executor)

        if wait > 0:
            wait_for_stability(executor, wait)

        print("\n\nDeploying bundle")
        executor.run_check('juju', ['deploy', str(temp_bundle)] + list(deploy_args))

    print(f"\n✓ Deployed {len(bundle.applications)} applications")
    print("=" * 60)


def _passthrough(args):
    # argparse keeps the `--` separator in REMAINDER values
    if args and args[0] == '--':
        return args[1:]
    return args


def build_parser():
    parser = argparse.ArgumentParser(
        prog='juju-bundle',
        description='Interact with a bundle and the charms contained therein.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  juju bundle deploy --build -a kubeflow-dashboard -- --model kubeflow
  juju bundle remove -b bundle.yaml
  juju bundle publish --url cs:~me/bundle/kubeflow --serial --prune
  juju bundle promote -b cs:~me/bundle/kubeflow --from edge --to stable -e jupyter-web
        """
    )
    subparsers = parser.add_subparsers(dest='command', metavar='command')
    subparsers.required = True

    deploy = subparsers.add_parser(
        'deploy', help='Deploys a bundle, optionally building and/or recreating it.',
        description='If a subset of apps are chosen, bundle relations are only included if both apps are selected.')
    deploy.add_argument('--recreate', action='store_true', help="Recreate the bundle by ensuring that it's removed before deploying")
    deploy.add_argument('--upgrade-charms', action='store_true', help='Runs upgrade-charm on each individual charm instead of redeploying')
    deploy.add_argument('--build', action='store_true', help='Build the bundle before deploying it. Requires `source:` to be defined')
    deploy.add_argument('--wait', type=int, default=60, help='How long to wait in seconds for model to stabilize before deploying it')
    deploy.add_argument('-a', '--app', dest='apps', action='append', default=[], help='Select particular apps to deploy')
    deploy.add_argument('-b', '--bundle', default='bundle.yaml', help='The bundle file to deploy')
    deploy.add_argument('deploy_args', nargs=argparse.REMAINDER, help='Arguments that are collected and passed on to `juju deploy`')

    remove = subparsers.add_parser(
        'remove', help='Removes a bundle from the current model.',
        description='If a subset of apps are chosen, bundle relations are only included if both apps are selected.')
    remove.add_argument('-a', '--app', dest='apps', action='append', default=[], help='Select particular apps to remove')
    remove.add_argument('-b', '--bundle', default='bundle.yaml', help='The bundle file to remove')

    publish_parser = subparsers.add_parser(
        'publish', help='Publishes a bundle and its charms to the charm store',
        description='Publishes them to the edge channel. To migrate the bundle and its charms '
                    'to other channels, use `juju bundle promote`.')
    publish_parser.add_argument('-b', '--bundle', default='bundle.yaml', help='The bundle file to publish')
    publish_parser.add_argument('--url', dest='cs_url', required=True, help='The charm store URL for the bundle')
    publish_parser.add_argument('--serial', action='store_true', help='If set, only one charm will be built and published at a time')
    publish_parser.add_argument('--prune', action='store_true', help='If set, docker will be pruned between each charm. Enforces --serial also set.')

    promote_parser = subparsers.add_parser('promote', help='Promotes a bundle and its charms from one channel to another')
    promote_parser.add_argument('-b', '--bundle', required=True, help='The bundle to promote')
    promote_parser.add_argument('--from', dest='from_channel', required=True, choices=CHANNELS, help='The bundle channel to promote from')
    promote_parser.add_argument('--to', dest='to_channel', required=True, choices=CHANNELS, help='The bundle channel to promote to')
    promote_parser.add_argument('-e', '--exclude', dest='excluded', action='append', default=[], help='Select particular apps to exclude from promoting')

    return parser


def run(args, executor=None, store=None, settings=None):
    """Execute a parsed command."""
    settings = settings if settings is not None else load_settings()
    executor = executor if executor is not None else get_executor()

    if args.command == 'deploy':
        deploy_command(
            args.bundle, args.apps, executor, settings,
            build=args.build, recreate=args.recreate, upgrade_charms=args.upgrade_charms,
            wait=args.wait, deploy_args=_passthrough(args.deploy_args),
        )
    elif args.command == 'remove':
        remove_command(args.bundle, args.apps, executor)
    elif args.command == 'publish':
        store = store if store is not None else get_store_backend(settings, executor)
        publish(args.bundle, args.cs_url, executor, store, settings, serial=args.serial, prune=args.prune)
    elif args.command == 'promote':
        store = store if store is not None else get_store_backend(settings, executor)
        promote(args.bundle, args.from_channel, args.to_channel, store, args.excluded)


def main(argv=None, executor=None, store=None, settings=None):
    """Main entry point - parse command line and run the command. Returns the exit code."""
    args = build_parser().parse_args(argv)

    try:
        run(args, executor=executor, store=store, settings=settings)
    except (BundleError, OSError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())

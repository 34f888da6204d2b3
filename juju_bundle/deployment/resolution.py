#!/usr/bin/env python3
"""
Charm resolution: deploy an existing charm reference or build one from source.

    charm | source | --build | outcome
    ------+--------+---------+----------------------------
    yes   | any    | no      | use charm
    yes   | no     | any     | use charm
    no    | no     | any     | error: neither charm nor source
    any   | yes    | yes     | build from source
    no    | yes    | any     | build from source
"""

from enum import Enum, unique

from .charm_source import CharmSource
from .parallel import run_parallel
from ..config.settings import charm_build_dir, resolve_source_path, worker_count
from ..errors import ResolutionError


@unique
class Resolution(Enum):
    USE_CHARM = 'use-charm'
    BUILD = 'build'
    MISSING = 'missing'


# (build flag, has charm, has source) -> outcome
RESOLUTION_TABLE = {
    (False, True, True): Resolution.USE_CHARM,
    (False, True, False): Resolution.USE_CHARM,
    (True, True, False): Resolution.USE_CHARM,
    (False, False, False): Resolution.MISSING,
    (True, False, False): Resolution.MISSING,
    (True, True, True): Resolution.BUILD,
    (True, False, True): Resolution.BUILD,
    (False, False, True): Resolution.BUILD,
}


def resolution_for(build, application):
    return RESOLUTION_TABLE[(bool(build), application.charm is not None, application.source is not None)]


def merge_resources(declared, built):
    """Add build-derived resources without overriding anything declared in the bundle."""
    merged = dict(declared)
    for name, source in built.items():
        merged.setdefault(name, source)
    return merged


def resolve_application(name, application, build, bundle_path, settings, executor):
    """
    Decide how an application gets its charm and return the application to deploy.

    When building, the returned application points at the built charm and
    carries the charm's upstream resource sources.
    """
    outcome = resolution_for(build, application)

    if outcome is Resolution.USE_CHARM:
        return application

    if outcome is Resolution.MISSING:
        raise ResolutionError(f"Application {name} has neither `charm` nor `source` set.")

    charm_path = resolve_source_path(application.source, bundle_path, settings)
    charm = CharmSource.load(charm_path)
    built = charm.build(name, executor, charm_build_dir(settings))

    resolved = application.with_resources(merge_resources(application.resources, charm.upstream_sources()))
    return resolved.with_charm(str(built))


def resolve_applications(applications, build, bundle_path, settings, executor):
    """
    Resolve every application concurrently.

    Returns a dict keyed by application name in the same order as the input.
    """
    names = list(applications)

    def task_for(name):
        return lambda: resolve_application(name, applications[name], build, bundle_path, settings, executor)

    resolved = run_parallel([task_for(name) for name in names], worker_count(settings))
    return dict(zip(names, resolved))

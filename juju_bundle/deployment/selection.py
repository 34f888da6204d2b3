#!/usr/bin/env python3
"""
Application selection for `-a/--app` subsets.

A requested application that is missing from the bundle is an error. A
relation that points at an application outside the subset is just dropped.
"""

from ..errors import ApplicationNotFoundError


def select_applications(applications, names):
    """Return the named applications, or all of them if no names were given."""
    if not names:
        return dict(applications)

    missing = [name for name in names if name not in applications]
    if missing:
        raise ApplicationNotFoundError(missing)

    return {name: applications[name] for name in names}


def endpoint_application(endpoint):
    """Strip interface-style syntax, e.g. `foo:bar` => `foo`."""
    return endpoint.split(':', 1)[0]


def filter_relations(relations, selected_names):
    """Keep only relations whose applications were all selected."""
    selected = set(selected_names)
    return [
        rel for rel in relations
        if {endpoint_application(endpoint) for endpoint in rel}.issubset(selected)
    ]


def select_bundle(bundle, names):
    """Derive a bundle restricted to the named applications and their relations."""
    applications = select_applications(bundle.applications, names)
    relations = filter_relations(bundle.relations, applications.keys())
    return bundle.with_applications(applications).with_relations(relations)

#!/usr/bin/env python3
"""
Bundle Validation
Validates bundle manifests for schema compliance and CLI flag combinations
"""

import json
from pathlib import Path

import jsonschema

from ..errors import BundleValidationError, ConfigurationError

SCHEMA_FILE = Path(__file__).parent.parent / 'schemas' / 'bundle-schema.json'


def load_schema():
    with open(SCHEMA_FILE, 'r') as f:
        return json.load(f)


def validate_against_schema(manifest):
    """
    Validate a parsed manifest against the bundle JSON schema.
    Returns (is_valid, errors_list)
    """
    if not isinstance(manifest, dict):
        return False, ["Bundle manifest must be a mapping"]

    try:
        jsonschema.validate(instance=manifest, schema=load_schema())
        return True, []
    except jsonschema.ValidationError as e:
        error_path = ' -> '.join(str(p) for p in e.path) if e.path else 'root'
        return False, [f"Schema validation failed at '{error_path}': {e.message}"]
    except jsonschema.SchemaError as e:
        return False, [f"Schema file is invalid: {e.message}"]


def validate_bundle(manifest, source=None):
    """Raise BundleValidationError if the manifest is not a valid bundle."""
    is_valid, errors = validate_against_schema(manifest)
    if not is_valid:
        where = f" ({source})" if source else ""
        raise BundleValidationError(f"Invalid bundle{where}: " + '; '.join(errors))


def validate_publish_flags(serial, prune):
    """--prune only makes sense between charms, so it requires --serial."""
    if prune and not serial:
        raise ConfigurationError("To use --prune, you must set the --serial flag as well.")

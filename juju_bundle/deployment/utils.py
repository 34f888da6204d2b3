#!/usr/bin/env python3
"""
Deployment utilities - shared helper functions.
"""

import shutil
from pathlib import Path

import yaml


def load_yaml(file_path):
    with open(file_path, 'r') as f:
        return yaml.safe_load(f)


def print_phase(phase_name, detail=None):
    """Helper to print phase headers."""
    print(f"\n{'='*60}")
    if detail:
        print(f"{phase_name} ({detail})")
    else:
        print(phase_name)
    print(f"{'='*60}")


def copy_readme(bundle_path, target_dir):
    """
    Copy the README.md that sits beside the bundle into target_dir.

    `charm push` refuses bundles without one, so a missing file is an error.
    """
    readme = Path(bundle_path).with_name('README.md')
    destination = Path(target_dir) / 'README.md'
    shutil.copy(readme, destination)
    return destination

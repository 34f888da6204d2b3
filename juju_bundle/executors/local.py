#!/usr/bin/env python3
"""
Local executor for external tools (uses subprocess).
"""

import subprocess

from .base import BaseExecutor
from ..errors import CommandError


class LocalExecutor(BaseExecutor):
    """Runs commands on this machine. Safe to call from several threads at once."""

    def run(self, name, args):
        cmd = [name] + [str(a) for a in args]
        print(f"$ {' '.join(cmd)}")

        result = subprocess.run(cmd)
        return result.returncode

    def capture(self, name, args):
        cmd = [name] + [str(a) for a in args]
        print(f"$ {' '.join(cmd)}")

        result = subprocess.run(cmd, capture_output=True, text=True)
        if result.returncode != 0:
            raise CommandError(name, args, result.returncode, result.stderr)

        print(result.stdout)
        return result.stdout

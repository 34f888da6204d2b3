#!/usr/bin/env python3
"""
Base executor interface for external tool invocations.
"""

from ..errors import CommandError


class BaseExecutor:
    """Interface for running external tools (juju, charm, docker)."""

    def run(self, name, args):
        """
        Run a command with output going straight to the terminal.

        Args:
            name: Executable name (e.g., 'juju')
            args: List of arguments

        Returns:
            Process exit code
        """
        raise NotImplementedError("Subclasses must implement run()")

    def capture(self, name, args):
        """Run a command and return its stdout. Raises CommandError on non-zero exit."""
        raise NotImplementedError("Subclasses must implement capture()")

    def run_check(self, name, args):
        """Execute command and raise error if it fails."""
        returncode = self.run(name, args)
        if returncode != 0:
            raise CommandError(name, args, returncode)

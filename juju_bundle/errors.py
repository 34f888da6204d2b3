#!/usr/bin/env python3
"""
Error types raised by bundle operations.
"""


class BundleError(Exception):
    """Base class for juju-bundle errors."""


class ConfigurationError(BundleError):
    """Raised for invalid flag combinations or settings, before any work starts."""


class ApplicationNotFoundError(BundleError, LookupError):
    """Raised when an explicitly requested application is not in the bundle."""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"Applications not found in bundle: {', '.join(self.missing)}")


class ResolutionError(BundleError):
    """Raised when an application can be neither referenced nor built."""


class BundleValidationError(BundleError):
    """Raised when a bundle manifest is not valid YAML or fails schema validation."""


class StoreError(BundleError):
    """Raised when charm store output cannot be interpreted."""


class CommandError(BundleError):
    """Raised when an external command exits non-zero."""

    def __init__(self, name, args, returncode, stderr=None):
        self.name = name
        self.args_list = list(args)
        self.returncode = returncode
        self.stderr = stderr
        cmd = ' '.join([name] + self.args_list)
        message = f"Command failed (exit {returncode}): {cmd}"
        if stderr:
            message += f"\n{stderr.strip()}"
        super().__init__(message)

"""
Exception types raised by the registry persistence layer.
"""

from __future__ import annotations

from typing import Sequence


class RegistryError(RuntimeError):
    """Base class for failures talking to the settings store."""


class StoreUnavailable(RegistryError):
    """The external registry command could not be run at all."""


class CommandFailed(RegistryError):
    """The registry command ran but reported a non-zero exit status."""

    def __init__(self, argv: Sequence[str], returncode: int, output: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.output = output
        super().__init__(
            "%s exited with code %s: %s" % (" ".join(self.argv), returncode, output.strip())
        )


class SourceUnavailable(RegistryError):
    """A setting's value could not be read from the host application."""


class EncodeError(RegistryError):
    """A value could not be turned into its stored string form."""

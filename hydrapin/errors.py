"""Error taxonomy for hydrapin.

Every failure aborts the current operation; nothing is retried. The CLI
turns any ``HydraPinError`` into a one-line message and exit status 1.
"""

from __future__ import annotations


class HydraPinError(RuntimeError):
    """Base class for all hydrapin failures."""


class ExternalToolError(HydraPinError):
    """An external binary could not be run, exited non-zero, or printed nothing usable."""


class MalformedResponse(HydraPinError):
    """Output from hydra-check or the Hydra API did not have the expected shape."""


class ApiError(HydraPinError):
    """The Hydra HTTP API could not be reached or answered with an error status."""


class MalformedApiResponse(ApiError, MalformedResponse):
    """The Hydra API answered, but the body was not the expected JSON."""


class NoPackagesFound(HydraPinError):
    """hydra-check reported no jobs at all for the package."""


class NoSuccessfulBuild(HydraPinError):
    """None of the reported jobs built successfully."""


class MissingNixpkgsInput(HydraPinError):
    """The evaluation has no input named ``nixpkgs``."""


class UnrecognizedSourceUri(HydraPinError):
    """The nixpkgs input URI is missing or is not a GitHub ``.git`` URL."""


class MissingRevision(HydraPinError):
    """The nixpkgs input carries no revision."""


class FileIoError(HydraPinError):
    """Reading or writing the overlay file failed."""


class InvalidPackageName(HydraPinError):
    """The package name is empty or contains whitespace, so it cannot be recorded."""

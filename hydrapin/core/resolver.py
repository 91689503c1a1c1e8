"""Resolve a package name to a pinned nixpkgs tarball.

The chain is: hydra-check finds a successful build, Hydra says which
evaluation produced it, the evaluation says which nixpkgs revision it
used, and nix-prefetch-url hashes the GitHub tarball of that revision.
"""

from __future__ import annotations

import logging
import re

from pydantic import ValidationError

from hydrapin.config import config
from hydrapin.core.hydra_client import HydraClient
from hydrapin.core.tools import prefetch_tarball, run_hydra_check
from hydrapin.errors import (
    InvalidPackageName,
    MalformedApiResponse,
    MalformedResponse,
    MissingNixpkgsInput,
    MissingRevision,
    NoPackagesFound,
    NoSuccessfulBuild,
    UnrecognizedSourceUri,
)
from hydrapin.models.hydra import EvalInput, HydraJob
from hydrapin.models.package import Package

logger = logging.getLogger(__name__)

GITHUB_URI_RE = re.compile(r"https://github\.com/(.*?)/(.*?)\.git")
PACKAGE_NAME_RE = re.compile(r"\S+")

NIXPKGS_INPUT = "nixpkgs"


def tarball_url(source: EvalInput) -> str:
    """GitHub archive URL for the revision recorded in an evaluation input."""
    if source.uri is None:
        raise UnrecognizedSourceUri("nixpkgs input does not have a uri")
    match = GITHUB_URI_RE.search(source.uri)
    if match is None:
        raise UnrecognizedSourceUri(
            f"nixpkgs input uri {source.uri!r} is not a github.com git url"
        )
    if source.revision is None:
        raise MissingRevision("nixpkgs input does not have a revision")
    owner, repo = match.group(1), match.group(2)
    return f"https://github.com/{owner}/{repo}/archive/{source.revision}.tar.gz"


def select_successful_job(report: dict[str, list[HydraJob]]) -> HydraJob:
    """Pick the build to pin from a hydra-check report.

    Only the first entry of the report is considered, and within it the
    first successful job in the order hydra-check printed them. That order
    is the tool's, not a guarantee of recency.
    """
    if not report:
        raise NoPackagesFound("hydra-check response contained no packages")
    job_name, jobs = next(iter(report.items()))
    for job in jobs:
        if job.success:
            logger.info("Selected build %s of %s", job.build_id, job_name)
            return job
    raise NoSuccessfulBuild(f"there are no succeeding builds of {job_name} on hydra")


class Resolver:
    """Turns a package name into a ``Package`` ready to be pinned.

    Parameters
    ----------
    hydra_check:
        hydra-check binary name or path.
    prefetch_binary:
        nix-prefetch-url binary name or path.
    client:
        Hydra API client. Built from the configured URL when omitted, in
        which case ``close`` also closes it; an injected client is left open.
    """

    def __init__(
        self,
        hydra_check: str | None = None,
        *,
        prefetch_binary: str | None = None,
        client: HydraClient | None = None,
    ) -> None:
        self.hydra_check = hydra_check or config.hydra_check
        self.prefetch_binary = prefetch_binary or config.prefetch_binary
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> HydraClient:
        if self._client is None:
            self._client = HydraClient(config.hydra_url, timeout=config.http_timeout)
        return self._client

    def close(self) -> None:
        """Close the Hydra client if this resolver built it."""
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> Resolver:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def nixpkgs_input(self, build_id: str) -> EvalInput:
        """The nixpkgs input of the first evaluation that produced *build_id*."""
        build = self.client.get_build(build_id)
        if not build.jobsetevals:
            raise MalformedApiResponse(f"build {build_id} lists no evaluations")
        evaluation = self.client.get_eval(build.jobsetevals[0])
        source = evaluation.jobsetevalinputs.get(NIXPKGS_INPUT)
        if source is None:
            raise MissingNixpkgsInput("package does not use nixpkgs in input")
        return source

    def resolve(self, package_name: str) -> Package:
        """Resolve *package_name* to its pinned tarball URL and hash."""
        if not PACKAGE_NAME_RE.fullmatch(package_name):
            raise InvalidPackageName(
                f"package name {package_name!r} is empty or contains whitespace"
            )
        report = run_hydra_check(self.hydra_check, package_name)
        job = select_successful_job(report)
        url = tarball_url(self.nixpkgs_input(job.build_id))
        logger.info("Prefetching %s", url)
        sha256 = prefetch_tarball(self.prefetch_binary, url)
        try:
            return Package(name=package_name, url=url, sha256=sha256)
        except ValidationError as exc:
            raise MalformedResponse(
                f"resolved url {url!r} or hash {sha256!r} contains whitespace"
            ) from exc


def resolve(package_name: str, hydra_check: str | None = None) -> Package:
    """Resolve *package_name* with a one-off ``Resolver``."""
    with Resolver(hydra_check) as resolver:
        return resolver.resolve(package_name)

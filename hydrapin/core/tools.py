"""Invocation of the external binaries hydrapin depends on.

- ``hydra-check <package> --json`` reports recent Hydra builds of a package.
- ``nix-prefetch-url --unpack <url>`` downloads a tarball and prints its
  unpacked content hash.

Both calls block until the process exits; there is no timeout.
"""

from __future__ import annotations

import json
import logging
import subprocess
from typing import Any

from hydrapin.errors import ExternalToolError, MalformedResponse
from hydrapin.models.hydra import HydraJob

logger = logging.getLogger(__name__)


def _run(argv: list[str], *, capture_stderr: bool) -> subprocess.CompletedProcess[str]:
    """Run *argv* and capture stdout, decoded lossily.

    Raises ExternalToolError if the process cannot start.
    """
    logger.debug("Running %s", " ".join(argv))
    try:
        return subprocess.run(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE if capture_stderr else None,
            text=True,
            errors="replace",
            check=False,
        )
    except OSError as exc:
        raise ExternalToolError(f"could not run {argv[0]!r}: {exc}") from exc


def run_hydra_check(binary: str, package_name: str) -> dict[str, list[HydraJob]]:
    """Ask hydra-check for the builds of *package_name*.

    Returns the parsed report: a mapping from the job name hydra-check
    queried to the list of build attempts it found, in the tool's order.
    """
    result = _run([binary, package_name, "--json"], capture_stderr=True)

    try:
        payload: Any = json.loads(result.stdout)
    except ValueError as exc:
        if result.returncode != 0:
            detail = (result.stderr or "").strip() or "no output"
            raise ExternalToolError(
                f"{binary} exited with status {result.returncode}: {detail}"
            ) from exc
        raise MalformedResponse(f"{binary} did not print JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise MalformedResponse(f"{binary} printed {type(payload).__name__}, expected an object")

    report: dict[str, list[HydraJob]] = {}
    for key, jobs in payload.items():
        if not isinstance(jobs, list):
            raise MalformedResponse(f"{binary} entry {key!r} is not a list of jobs")
        try:
            report[key] = [HydraJob.model_validate(job) for job in jobs]
        except ValueError as exc:
            raise MalformedResponse(f"{binary} entry {key!r} has a malformed job: {exc}") from exc
    return report


def prefetch_tarball(binary: str, url: str) -> str:
    """Prefetch *url* in unpack mode and return the hash it prints.

    stderr is left attached to the terminal so download progress stays
    visible. A non-zero exit or empty output is an error rather than an
    empty hash.
    """
    result = _run([binary, "--unpack", url], capture_stderr=False)
    if result.returncode != 0:
        raise ExternalToolError(f"{binary} exited with status {result.returncode} for {url}")

    digest = result.stdout.strip()
    if not digest:
        raise ExternalToolError(f"{binary} printed no hash for {url}")
    logger.debug("Prefetched %s -> %s", url, digest)
    return digest

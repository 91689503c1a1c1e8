"""The two user-facing operations: pin and unpin.

Both reload the overlay file from disk, change it, and write it back.
Nothing is kept between invocations.
"""

from __future__ import annotations

import logging
from pathlib import Path

from hydrapin.core.overlay_store import OverlayStore
from hydrapin.core.resolver import Resolver
from hydrapin.models.package import Package

logger = logging.getLogger(__name__)


def pin(
    package_name: str,
    output_path: Path | str,
    *,
    hydra_check: str | None = None,
    resolver: Resolver | None = None,
) -> Package:
    """Resolve *package_name* and append it to the overlay at *output_path*.

    The package is appended even if it is already pinned. Resolution runs
    first, so a failure leaves the file untouched.
    """
    if resolver is None:
        with Resolver(hydra_check) as owned:
            package = owned.resolve(package_name)
    else:
        package = resolver.resolve(package_name)

    store = OverlayStore(output_path)
    store.save(store.load().with_package(package))
    logger.info("Pinned %s to %s", package.name, package.url)
    return package


def unpin(package_name: str, output_path: Path | str) -> int:
    """Remove every entry named *package_name*; returns how many were removed.

    The file is rewritten even when nothing matched.
    """
    store = OverlayStore(output_path)
    overlay = store.load()
    remaining = overlay.without(package_name)
    store.save(remaining)
    removed = len(overlay) - len(remaining)
    logger.info("Unpinned %d entr%s of %s", removed, "y" if removed == 1 else "ies", package_name)
    return removed

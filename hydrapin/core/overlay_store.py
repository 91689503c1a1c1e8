"""The overlay file: a Nix overlay whose comment prologue is hydrapin's database.

Layout::

    # <name> <url> <sha256>        one line per pinned package
                                   blank line, ends the prologue
    {pkgs}: {
        overlay = (final: prev: {
    ...one binding per package...
        });
    }

Only the prologue is ever read back. The Nix body is regenerated from it on
every write, so hand edits to the body are lost.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from hydrapin.errors import FileIoError
from hydrapin.models.package import Overlay, Package

logger = logging.getLogger(__name__)

_OVERLAY_HEADER = "\n{pkgs}: {\n    overlay = (final: prev: {\n"
_OVERLAY_FOOTER = "        \n    });\n}"


def parse_overlay(text: str) -> Overlay:
    """Read the pinned packages back out of an overlay file's prologue.

    Scanning stops at the first line not starting with ``#``. Comment lines
    that are not ``# `` followed by at least three non-empty space-separated
    fields are skipped; fields past the third are ignored.
    """
    packages: list[Package] = []
    for line in text.split("\n"):
        if not line.startswith("#"):
            break
        if not line.startswith("# "):
            continue
        fields = line[2:].split(" ")
        if len(fields) < 3:
            logger.debug("Skipping malformed pin line: %r", line)
            continue
        name, url, sha256 = fields[:3]
        try:
            packages.append(Package(name=name, url=url, sha256=sha256))
        except ValidationError:
            logger.debug("Skipping pin line with an empty or invalid field: %r", line)
    return Overlay(packages=packages)


def render_overlay(overlay: Overlay) -> str:
    """Render the full overlay file for *overlay*."""
    prologue = "".join(f"{pkg.comment_line()}\n" for pkg in overlay.packages)
    bindings = "".join(f"{pkg.to_nix()}\n" for pkg in overlay.packages)
    return f"{prologue}{_OVERLAY_HEADER}{bindings}{_OVERLAY_FOOTER}"


class OverlayStore:
    """Loads and saves the overlay file at *path*.

    Writes are plain overwrites: not atomic, not locked. Concurrent
    invocations against the same file race and the last writer wins.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self) -> Overlay:
        """Load the pinned packages. A missing file is an empty overlay."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("%s does not exist yet, starting empty", self.path)
            return Overlay()
        except (OSError, UnicodeDecodeError) as exc:
            raise FileIoError(f"cannot read {self.path}: {exc}") from exc
        return parse_overlay(text)

    def save(self, overlay: Overlay) -> None:
        """Overwrite the file with the rendering of *overlay*."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(render_overlay(overlay), encoding="utf-8")
        except OSError as exc:
            raise FileIoError(f"cannot write {self.path}: {exc}") from exc
        logger.debug("Wrote %d package(s) to %s", len(overlay), self.path)

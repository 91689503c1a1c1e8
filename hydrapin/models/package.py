"""Pinned package and overlay models (immutable)."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

# Fields are stored space-separated on one comment line.
OverlayField = Annotated[str, Field(pattern=r"^\S+$")]

_PACKAGE_TEMPLATE = (
    '{name} = (import (fetchTarball {{\n'
    '            url = "{url}";\n'
    '            sha256 = "{sha256}";\n'
    '        }}) {{ system = pkgs.system; }}).{name};\n'
    '        '
)


class Package(BaseModel):
    """One pinned package: a name, the nixpkgs tarball it comes from, and its hash.

    The sha256 is whatever nix-prefetch-url printed; it is never parsed.
    No field may be empty or contain whitespace.
    """

    model_config = ConfigDict(frozen=True)

    name: OverlayField
    url: OverlayField
    sha256: OverlayField

    def comment_line(self) -> str:
        """The prologue line that records this package in the overlay file."""
        return f"# {self.name} {self.url} {self.sha256}"

    def to_nix(self) -> str:
        """The overlay binding that imports this package from its pinned tarball."""
        return _PACKAGE_TEMPLATE.format(name=self.name, url=self.url, sha256=self.sha256)


class Overlay(BaseModel):
    """Ordered list of pinned packages.

    Order is insertion order. Names are not required to be unique: pinning
    the same package twice keeps both entries.
    """

    model_config = ConfigDict(frozen=True)

    packages: list[Package] = []

    def __len__(self) -> int:
        return len(self.packages)

    def names(self) -> list[str]:
        return [pkg.name for pkg in self.packages]

    def with_package(self, package: Package) -> Overlay:
        """Return a new overlay with *package* appended at the end."""
        return Overlay(packages=[*self.packages, package])

    def without(self, name: str) -> Overlay:
        """Return a new overlay with every package called *name* removed."""
        return Overlay(packages=[pkg for pkg in self.packages if pkg.name != name])

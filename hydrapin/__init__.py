"""hydrapin: pin Hydra-built packages into a reproducible Nix overlay.

Resolves the nixpkgs revision behind the latest successful Hydra build of a
package, prefetches the matching GitHub tarball, and records the result in
an overlay file that Nix can import directly.
"""

__version__ = "0.1.0"
__description__ = "Pin Hydra builds of nixpkgs packages into a local overlay file"

from hydrapin.core.commands import pin, unpin
from hydrapin.core.overlay_store import OverlayStore
from hydrapin.core.resolver import Resolver, resolve
from hydrapin.models.package import Overlay, Package

__all__ = [
    "Overlay",
    "OverlayStore",
    "Package",
    "Resolver",
    "pin",
    "resolve",
    "unpin",
    "__version__",
]

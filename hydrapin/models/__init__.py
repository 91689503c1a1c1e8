"""hydrapin data models, all Pydantic v2."""

from hydrapin.models.hydra import EvalInput, HydraBuild, HydraEval, HydraJob
from hydrapin.models.package import Overlay, Package

__all__ = [
    # package
    "Package",
    "Overlay",
    # hydra
    "HydraJob",
    "HydraBuild",
    "EvalInput",
    "HydraEval",
]

"""Shapes of the JSON documents returned by hydra-check and the Hydra API.

Only the fields hydrapin reads are declared; anything else in the payload
is ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class HydraJob(BaseModel):
    """A single build attempt as reported by ``hydra-check --json``."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    success: bool
    build_id: str


class HydraBuild(BaseModel):
    """``GET /build/<id>``: the evaluations that produced the build."""

    model_config = ConfigDict(frozen=True)

    jobsetevals: list[int]


class EvalInput(BaseModel):
    """One input of an evaluation, e.g. the nixpkgs git checkout."""

    model_config = ConfigDict(frozen=True)

    uri: str | None = None
    type: str | None = None
    revision: str | None = None


class HydraEval(BaseModel):
    """``GET /eval/<id>``: the resolved inputs of an evaluation."""

    model_config = ConfigDict(frozen=True)

    jobsetevalinputs: dict[str, EvalInput]

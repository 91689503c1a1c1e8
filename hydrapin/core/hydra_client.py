"""Minimal client for the Hydra JSON API.

Only two endpoints are used:

- ``GET /build/<id>`` for the evaluations that produced a build
- ``GET /eval/<id>`` for the inputs of an evaluation

Hydra serves HTML unless asked otherwise, so every request carries
``Accept: application/json``.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from hydrapin.errors import ApiError, MalformedApiResponse
from hydrapin.models.hydra import HydraBuild, HydraEval

logger = logging.getLogger(__name__)

DEFAULT_HYDRA_URL = "https://hydra.nixos.org"

_ModelT = TypeVar("_ModelT", bound=BaseModel)


class HydraClient:
    """Synchronous Hydra API client.

    Parameters
    ----------
    base_url:
        Root of the Hydra instance.
    timeout:
        Request timeout in seconds. ``None`` waits indefinitely.
    client:
        Pre-built ``httpx.Client``; used as-is instead of building one.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_HYDRA_URL,
        *,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HydraClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _get_json(self, path: str) -> Any:
        try:
            response = self._client.get(path, headers={"Accept": "application/json"})
        except httpx.HTTPError as exc:
            raise ApiError(f"request to {self.base_url}{path} failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise ApiError(
                f"{self.base_url}{path} answered with status {response.status_code}"
            )
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedApiResponse(f"{self.base_url}{path} did not return JSON") from exc

    def _get_model(self, path: str, model: type[_ModelT]) -> _ModelT:
        payload = self._get_json(path)
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise MalformedApiResponse(
                f"{self.base_url}{path} returned an unexpected document: {exc}"
            ) from exc

    def get_build(self, build_id: str) -> HydraBuild:
        """Fetch build metadata for *build_id*."""
        logger.debug("Fetching Hydra build %s", build_id)
        return self._get_model(f"/build/{build_id}", HydraBuild)

    def get_eval(self, eval_id: int) -> HydraEval:
        """Fetch evaluation metadata for *eval_id*."""
        logger.debug("Fetching Hydra evaluation %s", eval_id)
        return self._get_model(f"/eval/{eval_id}", HydraEval)

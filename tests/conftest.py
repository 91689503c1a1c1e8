"""Shared test fixtures for hydrapin."""

from __future__ import annotations

import json
import shlex
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

from hydrapin.core.hydra_client import HydraClient
from hydrapin.models.package import Package

NIXPKGS_URI = "https://github.com/NixOS/nixpkgs.git"
NIXPKGS_REV = "0f2ba1f3c6a9e8d7b5a4c3d2e1f0a9b8c7d6e5f4"
PREFETCH_HASH = "1b4mg3vsvvnsbfmvwh8zlmkg0v2jyfbch4dxbbzaxvd9rz5ilnkv"


@pytest.fixture
def make_package() -> Callable[..., Package]:
    """Factory fixture: build a Package with sensible defaults."""

    def _factory(name: str = "hello", **overrides: Any) -> Package:
        defaults: dict[str, Any] = {
            "name": name,
            "url": f"https://github.com/NixOS/nixpkgs/archive/{NIXPKGS_REV}.tar.gz",
            "sha256": PREFETCH_HASH,
        }
        defaults.update(overrides)
        return Package(**defaults)

    return _factory


@pytest.fixture
def make_tool(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture: write an executable shell script standing in for a binary.

    The script records its arguments in ``<name>.args``, prints *stdout*
    and exits with *exit_code*.
    """

    def _factory(name: str, stdout: str = "", exit_code: int = 0) -> Path:
        script = tmp_path / name
        args_file = tmp_path / f"{name}.args"
        script.write_text(
            "#!/bin/sh\n"
            f'echo "$@" > {shlex.quote(str(args_file))}\n'
            f"printf '%s' {shlex.quote(stdout)}\n"
            f"exit {exit_code}\n",
            encoding="utf-8",
        )
        script.chmod(0o755)
        return script

    return _factory


@pytest.fixture
def hydra_check_tool(make_tool: Callable[..., Path]) -> Path:
    """A hydra-check stand-in whose second job is the first successful one."""
    report = {
        "hello": [
            {"success": False, "build_id": "1"},
            {"success": True, "build_id": "2"},
            {"success": True, "build_id": "3"},
        ]
    }
    return make_tool("hydra-check", stdout=json.dumps(report))


@pytest.fixture
def prefetch_tool(make_tool: Callable[..., Path]) -> Path:
    """A nix-prefetch-url stand-in printing a hash surrounded by whitespace."""
    return make_tool("nix-prefetch-url", stdout=f"\n{PREFETCH_HASH}\n")


@pytest.fixture
def hydra_payloads() -> dict[str, Any]:
    """JSON documents served by the fake Hydra API, keyed by path."""
    return {
        "/build/2": {"id": 2, "jobsetevals": [1807000, 1806990]},
        "/eval/1807000": {
            "id": 1807000,
            "jobsetevalinputs": {
                "nixpkgs": {"uri": NIXPKGS_URI, "type": "git", "revision": NIXPKGS_REV},
                "officialRelease": {"type": "boolean", "value": "0"},
            },
        },
    }


@pytest.fixture
def hydra_requests() -> list[httpx.Request]:
    """Requests seen by the fake Hydra API, in order."""
    return []


@pytest.fixture
def hydra_client(
    hydra_payloads: dict[str, Any], hydra_requests: list[httpx.Request]
) -> HydraClient:
    """HydraClient wired to an in-memory transport serving ``hydra_payloads``."""

    def handler(request: httpx.Request) -> httpx.Response:
        hydra_requests.append(request)
        payload = hydra_payloads.get(request.url.path)
        if payload is None:
            return httpx.Response(404, text="<html>not found</html>")
        return httpx.Response(200, json=payload)

    client = httpx.Client(
        base_url="https://hydra.test", transport=httpx.MockTransport(handler)
    )
    return HydraClient("https://hydra.test", client=client)


@pytest.fixture
def prefetch_hash() -> str:
    return PREFETCH_HASH


@pytest.fixture
def nixpkgs_rev() -> str:
    return NIXPKGS_REV

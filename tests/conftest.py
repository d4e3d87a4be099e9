"""Pytest configuration and fixtures."""

import json
import os
from pathlib import Path
from typing import Callable, Optional, Union

import httpx
import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"

TINY_PNG = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="

Route = Union[httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]


class FakeWeb:
    """Canned HTTP responses keyed by method and URL.

    Every request is recorded; unknown URLs answer 404.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], Route] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, url: str, route: Route) -> "FakeWeb":
        self.routes[(method.upper(), str(httpx.URL(url)))] = route
        return self

    def get(self, url: str, route: Route) -> "FakeWeb":
        return self.add("GET", url, route)

    def head(self, url: str, route: Route) -> "FakeWeb":
        return self.add("HEAD", url, route)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, str(request.url)))
        if route is None:
            return httpx.Response(404)
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(request)
        return route

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def requested(self, method: Optional[str] = None) -> list[str]:
        return [
            str(r.url) for r in self.requests if method is None or r.method == method.upper()
        ]


class StubIconResolver:
    """Icon resolver that never touches the network."""

    def __init__(self, icon: str = "https://example.org/icon.png"):
        self.icon = icon
        self.calls: list[str] = []

    async def resolve(self, source_url: str) -> str:
        self.calls.append(source_url)
        return self.icon


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Keep NBEMBED_* variables from the developer's shell out of tests."""
    for name in list(os.environ):
        if name.startswith("NBEMBED_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_web():
    """Fresh fake web for a test."""
    return FakeWeb()


@pytest.fixture
def stub_icons():
    """Icon resolver returning a fixed URL."""
    return StubIconResolver()


@pytest.fixture
def sample_notebook_path():
    """Path to the on-disk sample notebook."""
    return FIXTURES_DIR / "sample_notebook.ipynb"


@pytest.fixture
def sample_notebook_data():
    """Sample notebook data for testing."""
    return {
        "cells": [
            {
                "cell_type": "markdown",
                "source": "# First Principles Analysis\n\nThis explores the fundamentals.",
                "metadata": {},
            },
            {
                "cell_type": "code",
                "execution_count": 1,
                "source": ["import numpy as np\n", "print(np.pi)"],
                "outputs": [
                    {"output_type": "stream", "name": "stdout", "text": ["3.14159\n"]},
                ],
                "metadata": {},
            },
            {
                "cell_type": "code",
                "execution_count": 2,
                "source": "plt.plot([1, 2, 3], [1, 4, 9])\nplt.show()",
                "outputs": [
                    {
                        "data": {"image/png": TINY_PNG},
                        "metadata": {},
                        "output_type": "display_data",
                    }
                ],
                "metadata": {},
            },
        ],
        "metadata": {
            "kernelspec": {
                "display_name": "Python 3",
                "language": "python",
                "name": "python3",
            }
        },
        "nbformat": 4,
        "nbformat_minor": 4,
    }


@pytest.fixture
def sample_notebook_json(sample_notebook_data):
    """Sample notebook serialized as it would be downloaded."""
    return json.dumps(sample_notebook_data)

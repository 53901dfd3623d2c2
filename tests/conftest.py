"""Pytest configuration and fixtures."""

import json
import os

import httpx
import pytest

# Set test environment
os.environ["DRY_RUN"] = "true"
os.environ["DEBUG"] = "true"
os.environ.pop("WALLET_PRIVATE_KEY", None)
os.environ.pop("ONEINCH_API_KEY", None)

from oneswap.aggregator.oneinch import OneInchClient

BASE_URL = "https://aggregator.test/v5.0"

# Arbitrum One
WETH = "0x82aF49447D8a07e3bd95BD0d56f35241523fBab1"
USDC = "0xFF970A61A04b1cA14834A43f5dE4533eBDDB5CC8"
ARB = "0x912CE59144191C1204E64559FE8253a0e49E6548"

# Well-known development key (never holds funds)
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


class StubAggregator:
    """Records requests and answers each one with a canned body."""

    def __init__(self, body=None, status_code: int = 200, raw: bytes = None):
        self.body = body
        self.status_code = status_code
        self.raw = raw
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        content = self.raw if self.raw is not None else json.dumps(self.body).encode()
        return httpx.Response(
            self.status_code,
            content=content,
            headers={"Content-Type": "application/json"},
        )

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def make_client():
    """Build a OneInchClient whose HTTP traffic goes to a handler."""

    def _make(handler, api_key=None) -> OneInchClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return OneInchClient(base_url=BASE_URL, api_key=api_key, http_client=http_client)

    return _make

"""DEX aggregator client.

- base: request dataclasses and the unsigned transaction payload
- http: JSON fetcher with error classification
- oneinch: 1inch quote / allowance / approve / swap client
"""

from oneswap.aggregator.base import (
    AllowanceRequest,
    ApprovalRequest,
    QuoteRequest,
    SwapRequest,
    UnsignedTx,
)
from oneswap.aggregator.http import fetch_json
from oneswap.aggregator.oneinch import OneInchClient, create_oneinch_client

__all__ = [
    # Requests / payloads
    "QuoteRequest",
    "AllowanceRequest",
    "ApprovalRequest",
    "SwapRequest",
    "UnsignedTx",
    # Client
    "OneInchClient",
    "create_oneinch_client",
    "fetch_json",
]

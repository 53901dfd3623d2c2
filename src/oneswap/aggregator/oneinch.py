"""1inch DEX aggregator client.

Wraps the quote, allowance, approve and swap endpoints of the 1inch
aggregation API (v5 query parameter names).
API docs: https://portal.1inch.dev/documentation/apis/swap/introduction
"""

import logging
from typing import Any, Optional

import httpx

from oneswap.aggregator.base import (
    AllowanceRequest,
    ApprovalRequest,
    QuoteRequest,
    SwapRequest,
    UnsignedTx,
)
from oneswap.aggregator.http import DEFAULT_TIMEOUT, fetch_json
from oneswap.exceptions import MalformedResponseError

logger = logging.getLogger(__name__)

ONEINCH_API_V5 = "https://api.1inch.exchange/v5.0"


def _require(payload: Any, field: str) -> Any:
    """Return ``payload[field]``, failing when it is absent or null.

    Zero and ``"0"`` are valid values.
    """
    value = payload.get(field) if isinstance(payload, dict) else None
    if value is None:
        logger.warning(f"Aggregator response missing '{field}': {payload}")
        raise MalformedResponseError(
            f"expected '{field}' in aggregator response", payload=payload, field=field
        )
    return value


def _to_unsigned_tx(tx: dict) -> UnsignedTx:
    return UnsignedTx(data=tx["data"], to=tx.get("to"), value=tx.get("value"))


class OneInchClient:
    """Client for the 1inch aggregation API.

    Holds only immutable configuration; every call is an independent
    request/response round trip with no retries.
    """

    def __init__(
        self,
        base_url: str = ONEINCH_API_V5,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the client.

        Args:
            base_url: API root, without the chain id segment
            api_key: 1inch API key (sent as a bearer token when set)
            timeout: Per-request timeout in seconds
            http_client: Shared httpx client, mainly for tests
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._http_client = http_client

    def _get_headers(self) -> dict:
        """Get API headers with authorization."""
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _url(self, chain_id: int, path: str) -> str:
        return f"{self.base_url}/{chain_id}/{path}"

    async def _get(self, chain_id: int, path: str, params: dict) -> Any:
        return await fetch_json(
            self._url(chain_id, path),
            params=params,
            headers=self._get_headers(),
            client=self._http_client,
            timeout=self.timeout,
        )

    async def get_quote(self, request: QuoteRequest) -> str:
        """Get the expected output amount for a swap.

        Returns:
            ``toTokenAmount`` exactly as the API returned it (smallest unit)
        """
        result = await self._get(
            request.chain_id,
            "quote",
            {
                "fromTokenAddress": request.from_token,
                "toTokenAddress": request.to_token,
                "amount": str(request.amount),
            },
        )
        return _require(result, "toTokenAmount")

    async def get_allowance(self, request: AllowanceRequest) -> str:
        """Get how much of a token the 1inch router may spend for a wallet."""
        result = await self._get(
            request.chain_id,
            "approve/allowance",
            {
                "tokenAddress": request.token_address,
                "walletAddress": request.wallet_address,
            },
        )
        return _require(result, "allowance")

    async def get_approve_tx(self, request: ApprovalRequest) -> UnsignedTx:
        """Build an approval transaction for the 1inch router."""
        result = await self._get(
            request.chain_id,
            "approve/transaction",
            {
                "amount": str(request.amount),
                "tokenAddress": request.token_address,
            },
        )
        _require(result, "data")
        return _to_unsigned_tx(result)

    async def get_swap_tx(self, request: SwapRequest) -> UnsignedTx:
        """Build a swap transaction.

        Note: the returned transaction still has to be signed and broadcast
        by the caller's wallet.
        """
        result = await self._get(
            request.chain_id,
            "swap",
            {
                "fromTokenAddress": request.from_token,
                "toTokenAddress": request.to_token,
                "amount": str(request.amount),
                "fromAddress": request.from_address,
                "slippage": str(request.slippage),
            },
        )
        tx = _require(result, "tx")
        if not isinstance(tx, dict) or tx.get("data") is None:
            logger.warning(f"Aggregator swap response has no tx data: {result}")
            raise MalformedResponseError(
                "expected 'tx.data' in aggregator response", payload=result, field="tx.data"
            )
        return _to_unsigned_tx(tx)


def create_oneinch_client(
    base_url: str = ONEINCH_API_V5,
    api_key: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> OneInchClient:
    """Create a 1inch client instance."""
    return OneInchClient(base_url=base_url, api_key=api_key, timeout=timeout)

"""Error types raised by the aggregator client and the wallet."""

from typing import Any, Optional


class AggregatorError(Exception):
    """Base class for failures talking to the aggregator API."""


class NetworkError(AggregatorError):
    """The HTTP request to the aggregator could not complete."""


class EmptyResponseError(AggregatorError):
    """The aggregator answered with an empty or null body."""


class RemoteError(AggregatorError):
    """The aggregator answered with an explicit ``error`` payload."""

    def __init__(self, message: str, payload: Optional[dict] = None):
        super().__init__(message)
        self.payload = payload or {}


class MalformedResponseError(AggregatorError):
    """The aggregator answered without the field(s) the caller needs."""

    def __init__(self, message: str, payload: Any = None, field: Optional[str] = None):
        super().__init__(message)
        self.payload = payload
        self.field = field


class WalletError(Exception):
    """Base class for signing and broadcast failures."""


class TransactionRevertedError(WalletError):
    """Raised when the transaction was mined but its receipt has status 0.

    Gas was already paid; nothing else about the chain state is known.
    """

    def __init__(self, tx_hash: str, receipt: Any):
        super().__init__(f"Transaction {tx_hash} reverted")
        self.tx_hash = tx_hash
        self.receipt = receipt

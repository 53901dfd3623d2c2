"""Request and response types for the aggregator client."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class QuoteRequest:
    """Price quote for swapping ``amount`` of ``from_token`` into ``to_token``."""

    chain_id: int
    from_token: str
    to_token: str
    amount: int  # smallest unit of from_token


@dataclass(frozen=True)
class AllowanceRequest:
    """How much of ``token_address`` the aggregator router may spend for a wallet."""

    chain_id: int
    token_address: str
    wallet_address: str


@dataclass(frozen=True)
class ApprovalRequest:
    """Approval transaction letting the aggregator router spend ``amount``."""

    chain_id: int
    token_address: str
    amount: int


@dataclass(frozen=True)
class SwapRequest:
    """Executable swap transaction for ``from_address``."""

    chain_id: int
    from_token: str
    to_token: str
    from_address: str
    amount: int
    slippage: Decimal = Decimal("1")  # percent, 1 = 1%


@dataclass(frozen=True)
class UnsignedTx:
    """Transaction payload that still has to be signed and broadcast."""

    data: str
    to: str
    value: str

    def to_dict(self) -> dict:
        return {"data": self.data, "to": self.to, "value": self.value}

"""Token registry and unit conversion.

Amounts sent to the aggregator are integers in the token's smallest unit;
these helpers convert from the human-readable amounts used on the command line.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, localcontext
from typing import Optional, Union

# Chain IDs
CHAIN_IDS = {
    "ethereum": 1,
    "optimism": 10,
    "bsc": 56,
    "polygon": 137,
    "base": 8453,
    "arbitrum": 42161,
}

# Token addresses by chain id
TOKENS = {
    42161: {
        "ARB": ("0x912CE59144191C1204E64559FE8253a0e49E6548", 18),
        "USDC": ("0xFF970A61A04b1cA14834A43f5dE4533eBDDB5CC8", 6),  # bridged USDC.e
        "WETH": ("0x82aF49447D8a07e3bd95BD0d56f35241523fBab1", 18),
    },
    1: {
        "WETH": ("0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", 18),
        "USDC": ("0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48", 6),
        "USDT": ("0xdAC17F958D2ee523a2206206994597C13D831ec7", 6),
        "DAI": ("0x6B175474E89094C44Da98b954EedcdeCB5BE3830", 18),
    },
}

DEFAULT_DECIMALS = 18

# Enough precision for any uint256 value
UINT256_DIGITS = 78


@dataclass(frozen=True)
class Token:
    symbol: str
    address: str
    decimals: int


def resolve_token(chain_id: int, token: str, decimals: Optional[int] = None) -> Token:
    """Look up a token by symbol or contract address.

    Args:
        chain_id: Chain the token lives on
        token: Symbol (e.g. "WETH") or 0x-prefixed contract address
        decimals: Overrides the registry; used for unlisted addresses

    Raises:
        ValueError: unknown symbol
    """
    registry = TOKENS.get(chain_id, {})

    if token.lower().startswith("0x"):
        for symbol, (address, known_decimals) in registry.items():
            if address.lower() == token.lower():
                return Token(symbol, address, decimals if decimals is not None else known_decimals)
        return Token(token, token, decimals if decimals is not None else DEFAULT_DECIMALS)

    entry = registry.get(token.upper())
    if entry is None:
        raise ValueError(f"Unknown token {token} on chain {chain_id}")
    address, known_decimals = entry
    return Token(token.upper(), address, decimals if decimals is not None else known_decimals)


def to_base_units(amount: Union[str, Decimal, int], decimals: int) -> int:
    """Convert a human amount to the token's smallest unit ("1.5", 18 -> 1.5e18).

    Raises:
        ValueError: not a number, negative, or more fractional digits than
            the token supports
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {amount}") from e

    if not value.is_finite() or value < 0:
        raise ValueError(f"Amount must be a non-negative number: {amount}")

    with localcontext() as ctx:
        ctx.prec = UINT256_DIGITS
        scaled = value.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"Amount {amount} has more than {decimals} decimal places")
    return int(scaled)


def from_base_units(raw: Union[str, int], decimals: int) -> Decimal:
    """Convert a smallest-unit amount back to human units."""
    with localcontext() as ctx:
        ctx.prec = UINT256_DIGITS
        return Decimal(int(raw)).scaleb(-decimals)

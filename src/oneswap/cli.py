"""Command-line swap: quote, allowance, approval, swap, broadcast.

Example:
    python -m oneswap ARB WETH 1 --slippage 1 --broadcast
"""

import argparse
import asyncio
import logging
import sys
from decimal import Decimal, InvalidOperation
from typing import Optional

from oneswap.aggregator import (
    AllowanceRequest,
    ApprovalRequest,
    OneInchClient,
    QuoteRequest,
    SwapRequest,
    create_oneinch_client,
)
from oneswap.config import Settings, get_settings
from oneswap.exceptions import AggregatorError, WalletError
from oneswap.tokens import CHAIN_IDS, Token, from_base_units, resolve_token, to_base_units
from oneswap.wallet import EVMWallet

logger = logging.getLogger(__name__)


def _chain_id(value: str) -> int:
    if value.isdigit():
        return int(value)
    try:
        return CHAIN_IDS[value.lower()]
    except KeyError:
        raise argparse.ArgumentTypeError(f"unknown chain: {value}")


def _decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {value}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oneswap",
        description="Swap tokens through the 1inch aggregator",
    )
    parser.add_argument("from_token", help="Token to sell (symbol or address)")
    parser.add_argument("to_token", help="Token to buy (symbol or address)")
    parser.add_argument("amount", help="Amount to sell in human units, e.g. 1.5")
    parser.add_argument("--slippage", type=_decimal, help="Slippage tolerance in percent")
    parser.add_argument("--decimals", type=int, help="Decimals of an unlisted from_token")
    parser.add_argument("--chain", type=_chain_id, help="Chain name or id")
    parser.add_argument(
        "--from-address",
        help="Wallet address for quoting without a private key (dry run only)",
    )
    parser.add_argument(
        "--broadcast",
        action="store_true",
        help="Sign and broadcast transactions (overrides DRY_RUN)",
    )
    return parser


async def _log_block_number(wallet: EVMWallet) -> None:
    try:
        block_number = await wallet.get_block_number()
        logger.info(f"RPC block number: {block_number}")
    except WalletError as e:
        logger.warning(f"RPC health check failed: {e}")


async def run_swap(
    client: OneInchClient,
    wallet: Optional[EVMWallet],
    from_address: str,
    chain_id: int,
    from_token: Token,
    to_token: Token,
    amount: int,
    slippage: Decimal,
    dry_run: bool = True,
    receipt_timeout: float = 120.0,
) -> Optional[str]:
    """Run one swap end to end.

    Every step is awaited before the next one starts; the first failure
    aborts the run. An approval broadcast earlier in the run is not undone.

    Returns:
        Swap transaction hash, or None in dry-run mode
    """
    if not dry_run and wallet is None:
        raise WalletError("A private key is required to broadcast")

    block_task = asyncio.create_task(_log_block_number(wallet)) if wallet else None

    try:
        to_amount = await client.get_quote(
            QuoteRequest(
                chain_id=chain_id,
                from_token=from_token.address,
                to_token=to_token.address,
                amount=amount,
            )
        )
        logger.info(
            f"Quote: {from_base_units(amount, from_token.decimals)} {from_token.symbol} -> "
            f"{from_base_units(to_amount, to_token.decimals)} {to_token.symbol}"
        )

        allowance = await client.get_allowance(
            AllowanceRequest(
                chain_id=chain_id,
                token_address=from_token.address,
                wallet_address=from_address,
            )
        )
        logger.info(f"Allowance: {allowance}")

        if int(allowance) < amount:
            approve_tx = await client.get_approve_tx(
                ApprovalRequest(chain_id=chain_id, token_address=from_token.address, amount=amount)
            )
            logger.info(f"Approve tx: {approve_tx.to_dict()}")
            if not dry_run:
                approve_hash = await wallet.send_transaction(approve_tx)
                await wallet.wait_for_receipt(approve_hash, timeout=receipt_timeout)

        swap_tx = await client.get_swap_tx(
            SwapRequest(
                chain_id=chain_id,
                from_token=from_token.address,
                to_token=to_token.address,
                from_address=from_address,
                amount=amount,
                slippage=slippage,
            )
        )
        logger.info(f"Swap tx: to={swap_tx.to} value={swap_tx.value}")

        if dry_run:
            logger.info("[DRY RUN] Not broadcasting swap")
            return None

        tx_hash = await wallet.send_transaction(swap_tx)
        await wallet.wait_for_receipt(tx_hash, timeout=receipt_timeout)
        logger.info("done")
        return tx_hash
    finally:
        if block_task is not None and not block_task.done():
            block_task.cancel()


async def _main(args: argparse.Namespace, settings: Settings) -> int:
    chain_id = args.chain or settings.chain_id
    slippage = args.slippage if args.slippage is not None else settings.default_slippage
    dry_run = settings.dry_run and not args.broadcast

    from_token = resolve_token(chain_id, args.from_token, args.decimals)
    to_token = resolve_token(chain_id, args.to_token)
    amount = to_base_units(args.amount, from_token.decimals)

    wallet = None
    if settings.has_wallet:
        wallet = EVMWallet(settings.wallet_private_key, rpc_url=settings.rpc_url)
        from_address = wallet.address
    elif args.from_address and dry_run:
        from_address = args.from_address
    else:
        logger.error("WALLET_PRIVATE_KEY not set (use --from-address for a dry run)")
        return 1

    client = create_oneinch_client(
        base_url=settings.oneinch_api_url,
        api_key=settings.oneinch_api_key,
        timeout=settings.http_timeout,
    )

    try:
        tx_hash = await run_swap(
            client,
            wallet,
            from_address,
            chain_id,
            from_token,
            to_token,
            amount,
            slippage,
            dry_run=dry_run,
            receipt_timeout=settings.receipt_timeout,
        )
    finally:
        if wallet is not None:
            await wallet.close()

    if tx_hash:
        print(tx_hash)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.debug(f"Settings: {settings.get_safe_dict()}")

    try:
        return asyncio.run(_main(args, settings))
    except (AggregatorError, WalletError, ValueError) as e:
        logger.error(f"Swap aborted: {type(e).__name__}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""EVM wallet: signs aggregator transactions locally and broadcasts them."""

import logging
from typing import Any, Optional, Union

from eth_account import Account
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3

from oneswap.aggregator.base import UnsignedTx
from oneswap.exceptions import TransactionRevertedError, WalletError

logger = logging.getLogger(__name__)


def _parse_int(raw: Union[str, int, None]) -> int:
    """Parse a tx field that can be int, decimal string or hex string."""
    if raw is None or raw == "":
        return 0
    if isinstance(raw, str):
        if raw.startswith("0x"):
            return int(raw, 16)
        return int(raw)
    return int(raw)


class EVMWallet:
    """Signer plus RPC connection for a single account."""

    def __init__(
        self,
        private_key: str,
        rpc_url: Optional[str] = None,
        web3: Optional[AsyncWeb3] = None,
    ):
        if web3 is None and rpc_url is None:
            raise ValueError("Either rpc_url or web3 is required")
        self.account = Account.from_key(private_key)
        self.web3 = web3 or AsyncWeb3(AsyncHTTPProvider(rpc_url))

    @property
    def address(self) -> str:
        return self.account.address

    async def get_block_number(self) -> int:
        try:
            return await self.web3.eth.block_number
        except Exception as e:
            raise WalletError(f"Failed to get block number: {e}") from e

    async def send_transaction(self, unsigned: UnsignedTx) -> str:
        """Sign and broadcast an aggregator transaction.

        Fills in nonce, chain id, gas price and gas limit from the node.

        Returns:
            Transaction hash as 0x-prefixed hex
        """
        eth = self.web3.eth
        try:
            tx = {
                "to": Web3.to_checksum_address(unsigned.to),
                "data": unsigned.data,
                "value": _parse_int(unsigned.value),
                "nonce": await eth.get_transaction_count(self.address, "pending"),
                "chainId": await eth.chain_id,
                "gasPrice": await eth.gas_price,
            }
            tx["gas"] = await eth.estimate_gas({**tx, "from": self.address})

            logger.info(f"Signing transaction: to={tx['to']} nonce={tx['nonce']} gas={tx['gas']}")
            signed = self.account.sign_transaction(tx)
            tx_hash = await eth.send_raw_transaction(signed.raw_transaction)
        except Exception as e:
            logger.error(f"Transaction submission failed: {e}")
            raise WalletError(f"Failed to send transaction: {e}") from e

        txid = Web3.to_hex(tx_hash)
        logger.info(f"Transaction broadcast: {txid}")
        return txid

    async def wait_for_receipt(self, tx_hash: str, timeout: float = 120.0) -> Any:
        """Wait once for the transaction to be mined.

        Raises:
            TransactionRevertedError: mined with status 0
            WalletError: not mined within ``timeout`` or RPC failure
        """
        try:
            receipt = await self.web3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)
        except Exception as e:
            raise WalletError(f"No receipt for {tx_hash}: {e}") from e

        if receipt["status"] == 0:
            logger.error(f"Transaction reverted: {tx_hash}")
            raise TransactionRevertedError(tx_hash, receipt)

        logger.info(f"Transaction confirmed in block {receipt['blockNumber']}: {tx_hash}")
        return receipt

    async def close(self) -> None:
        """Close the RPC provider session."""
        await self.web3.provider.disconnect()

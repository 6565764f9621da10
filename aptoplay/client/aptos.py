"""Aptos faucet and fullnode client.

Minting goes through the faucet service, which signs and submits the
transfer from its own funded account. No keys are held by the SDK.
"""

from typing import List

from aptoplay.logging import get_logger
from aptoplay.normalization import normalize_error
from aptoplay.transport import BaseClient, TransportError

from .models import ErrorKind

logger = get_logger(__name__, component="aptos")

COIN_STORE_RESOURCE = "0x1::coin::CoinStore<0x1::aptos_coin::AptosCoin>"


def _validate_address(kind: str, address: str) -> str:
    if not isinstance(address, str) or not address.strip():
        raise normalize_error(kind, ValueError("address is required"))
    address = address.strip().lower()
    if not address.startswith("0x"):
        address = f"0x{address}"
    try:
        int(address, 16)
    except ValueError as e:
        raise normalize_error(kind, ValueError(f"address is not hex: {address!r}")) from e
    return address


class AptosClient(BaseClient):
    """Mints test coins through the faucet and reads balances from a fullnode."""

    def mint(self, address: str, amount: int) -> List[str]:
        """Fund ``address`` with ``amount`` octas from the faucet.

        Args:
            address: Hex account address, with or without 0x prefix
            amount: Number of octas to mint, must be positive

        Returns:
            Hashes of the transactions submitted by the faucet

        Raises:
            AptoPlayError: kind APTOS_MINT_ERROR
        """
        kind = ErrorKind.APTOS_MINT.value
        address = _validate_address(kind, address)
        if not isinstance(amount, int) or isinstance(amount, bool) or amount <= 0:
            raise normalize_error(kind, ValueError(f"amount must be a positive integer, got {amount!r}"))

        try:
            hashes = self._make_request(
                f"{self.config.aptos_faucet_url}/mint",
                method="POST",
                params={"address": address, "amount": amount},
            )
        except TransportError as e:
            raise normalize_error(kind, e) from e

        if isinstance(hashes, str):
            hashes = [hashes]
        if not isinstance(hashes, list):
            raise normalize_error(
                kind, ValueError(f"Expected list of transaction hashes, got {type(hashes).__name__}")
            )

        logger.info(
            "Minted coins from faucet",
            extra={
                "event": "aptos.mint.succeeded",
                "address": address,
                "amount": amount,
                "transactions": len(hashes),
            },
        )
        return hashes

    def get_balance(self, address: str) -> int:
        """Return the AptosCoin balance of ``address`` in octas.

        Raises:
            AptoPlayError: kind APTOS_GET_BALANCE_ERROR
        """
        kind = ErrorKind.APTOS_GET_BALANCE.value
        address = _validate_address(kind, address)

        try:
            resource = self._make_request(
                f"{self.config.aptos_node_url}/accounts/{address}/resource/{COIN_STORE_RESOURCE}"
            )
        except TransportError as e:
            raise normalize_error(kind, e) from e

        try:
            return int(resource["data"]["coin"]["value"])
        except (KeyError, TypeError, ValueError) as e:
            raise normalize_error(kind, e) from e

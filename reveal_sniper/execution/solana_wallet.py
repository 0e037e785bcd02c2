from __future__ import annotations

import base64
from dataclasses import dataclass

import base58
from loguru import logger
from solana.rpc.async_api import AsyncClient
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction

from reveal_sniper.errors import StartupError, SwapBuildError


def keypair_from_base58(private_key: str | None) -> Keypair:
    if not private_key:
        raise StartupError("PRIVATE_KEY environment variable is not set.")
    try:
        secret = base58.b58decode(private_key.strip())
        return Keypair.from_bytes(secret)
    except Exception as e:  # noqa: BLE001
        raise StartupError(f"PRIVATE_KEY is not a valid base58 secret key: {e}") from e


@dataclass
class SolanaWallet:
    client: AsyncClient
    keypair: Keypair

    @classmethod
    def create(cls, rpc_url: str, private_key: str | None) -> SolanaWallet:
        kp = keypair_from_base58(private_key)
        client = AsyncClient(rpc_url)
        logger.info("Wallet {} connected to Solana RPC: {}", kp.pubkey(), rpc_url)
        return cls(client=client, keypair=kp)

    @property
    def pubkey(self) -> Pubkey:
        return self.keypair.pubkey()

    def sign_swap_transaction(self, swap_tx_b64: str) -> bytes:
        """Deserialize a base64 Jupiter swap transaction and sign it with our keypair."""
        try:
            raw = base64.b64decode(swap_tx_b64, validate=True)
            vtx = VersionedTransaction.from_bytes(raw)
            # Reconstruct signed transaction using message + signer
            signed = VersionedTransaction(vtx.message, [self.keypair])
        except Exception as e:  # noqa: BLE001
            raise SwapBuildError(f"Unable to deserialize/sign Jupiter swap tx: {e}") from e
        return bytes(signed)

    async def close(self) -> None:
        await self.client.close()

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Iterable

from loguru import logger
from solana.rpc.types import TxOpts

from reveal_sniper.aggregators import jupiter
from reveal_sniper.config import AppSettings, Target
from reveal_sniper.errors import ConfirmationError, SubmissionError, SwapError
from reveal_sniper.execution.confirmation import SwapOutcome, interpret_confirmation
from reveal_sniper.execution.solana_wallet import SolanaWallet


@dataclass
class SwapExecutor:
    settings: AppSettings
    wallet: SolanaWallet

    @classmethod
    def create(cls, settings: AppSettings) -> SwapExecutor:
        wallet = SolanaWallet.create(settings.rpc_url, settings.private_key)
        return cls(settings=settings, wallet=wallet)

    async def execute(self, target: Target, address: str | None) -> SwapOutcome:
        """Buy ``address`` with SOL through Jupiter. Never raises."""
        mint = (address or "").strip()
        if not mint:
            logger.warning("[{}] Swap called with invalid output mint: {!r}", target.name, address)
            return SwapOutcome(target=target, address="", success=False, skipped=True)

        try:
            return await self._swap(target, mint)
        except SwapError as e:
            logger.error(
                "[{}] Jupiter swap failed at {} for {}: {}: {}",
                target.name,
                e.stage,
                mint,
                type(e).__name__,
                e,
            )
            return SwapOutcome(
                target=target,
                address=mint,
                success=False,
                error_detail=f"{type(e).__name__}: {e}",
            )
        except Exception as e:
            logger.exception("[{}] Unexpected swap error for {}: {}", target.name, mint, e)
            return SwapOutcome(
                target=target,
                address=mint,
                success=False,
                error_detail=f"{type(e).__name__}: {e}",
            )

    async def execute_all(self, candidates: Iterable[tuple[Target, str]]) -> list[SwapOutcome]:
        # Each sub-flow catches its own failures, so gather waits for all of them
        return list(await asyncio.gather(*(self.execute(t, a) for t, a in candidates)))

    async def _swap(self, target: Target, mint: str) -> SwapOutcome:
        s = self.settings
        logger.info("[{}] Attempting to buy token: {}", target.name, mint)

        # 1) Quote SOL -> mint
        quote = await asyncio.to_thread(
            jupiter.get_quote,
            s.jupiter_quote_url,
            input_mint=s.input_mint,
            output_mint=mint,
            amount=s.amount_lamports,
            slippage_bps=s.slippage_bps,
            timeout=s.jupiter_timeout_sec,
        )
        logger.debug("[{}] Quote received: outAmount={}", target.name, quote.get("outAmount"))

        # 2) Prebuilt unsigned swap transaction
        swap_tx_b64 = await asyncio.to_thread(
            jupiter.get_swap_transaction,
            s.jupiter_swap_url,
            quote,
            str(self.wallet.pubkey),
            timeout=s.jupiter_timeout_sec,
        )

        # 3) Deserialize & sign
        raw_signed = self.wallet.sign_swap_transaction(swap_tx_b64)

        # 4) Submit without preflight
        client = self.wallet.client
        try:
            resp = await client.send_raw_transaction(
                raw_signed,
                opts=TxOpts(
                    skip_confirmation=True,
                    skip_preflight=s.skip_preflight,
                    max_retries=s.send_max_retries,
                ),
            )
        except Exception as e:
            raise SubmissionError(f"send_raw_transaction failed: {e}") from e
        signature = resp.value
        logger.info("[{}] Submitted swap tx {}", target.name, signature)

        # 5) Confirm within the latest blockhash validity window
        try:
            latest = await client.get_latest_blockhash()
            confirmation = await client.confirm_transaction(
                signature,
                last_valid_block_height=latest.value.last_valid_block_height,
            )
        except Exception as e:
            raise ConfirmationError(f"Confirmation of {signature} failed: {e}") from e

        return interpret_confirmation(
            target, mint, str(signature), confirmation, explorer_tx_url=s.explorer_tx_url
        )

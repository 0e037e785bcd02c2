from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest


class FakeRpc:
    def __init__(self, err: Any = None):
        self.err = err
        self.sent: list[tuple[bytes, Any]] = []
        self.confirmed: list[tuple[str, int | None]] = []

    async def send_raw_transaction(self, raw, opts=None):
        self.sent.append((raw, opts))
        return SimpleNamespace(value=f"Sig{len(self.sent)}")

    async def get_latest_blockhash(self):
        return SimpleNamespace(
            value=SimpleNamespace(blockhash="Hash111", last_valid_block_height=1234)
        )

    async def confirm_transaction(self, tx_sig, last_valid_block_height=None):
        self.confirmed.append((tx_sig, last_valid_block_height))
        return {"value": {"err": self.err}}

    async def close(self):
        pass


class FakeWallet:
    pubkey = "WalletPubkey1111111111111111111111111111111"

    def __init__(self, client: FakeRpc | None = None):
        self.client = client or FakeRpc()
        self.signed: list[str] = []

    def sign_swap_transaction(self, swap_tx_b64: str) -> bytes:
        self.signed.append(swap_tx_b64)
        return f"signed:{swap_tx_b64}".encode()

    async def close(self):
        pass


class JupiterStub:
    """Records quote/swap calls. Per-mint failures go in ``quote_errors``/``build_errors``."""

    def __init__(self):
        self.quotes: list[dict[str, Any]] = []
        self.swaps: list[tuple[dict, str]] = []
        self.quote_errors: dict[str, Exception] = {}
        self.build_errors: dict[str, Exception] = {}

    def get_quote(self, quote_url, input_mint, output_mint, amount, slippage_bps, timeout=15):
        self.quotes.append(
            {
                "input_mint": input_mint,
                "output_mint": output_mint,
                "amount": amount,
                "slippage_bps": slippage_bps,
            }
        )
        if output_mint in self.quote_errors:
            raise self.quote_errors[output_mint]
        return {"outputMint": output_mint, "outAmount": "1"}

    def get_swap_transaction(self, swap_url, quote, user_public_key, timeout=20):
        self.swaps.append((quote, user_public_key))
        mint = quote["outputMint"]
        if mint in self.build_errors:
            raise self.build_errors[mint]
        return f"tx-{mint}"


@pytest.fixture
def jupiter_stub(monkeypatch):
    from reveal_sniper.aggregators import jupiter

    stub = JupiterStub()
    monkeypatch.setattr(jupiter, "get_quote", stub.get_quote)
    monkeypatch.setattr(jupiter, "get_swap_transaction", stub.get_swap_transaction)
    return stub


@pytest.fixture
def settings(monkeypatch):
    from reveal_sniper.config import AppSettings

    monkeypatch.delenv("PRIVATE_KEY", raising=False)
    return AppSettings(poll_interval_ms=0)


@pytest.fixture
def executor(settings):
    from reveal_sniper.execution.swap_executor import SwapExecutor

    return SwapExecutor(settings=settings, wallet=FakeWallet())  # type: ignore[arg-type]

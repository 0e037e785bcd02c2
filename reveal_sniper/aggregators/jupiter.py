from __future__ import annotations

import requests

from reveal_sniper.errors import QuoteError, SwapBuildError


def _json_or_none(r: requests.Response):
    try:
        return r.json()
    except ValueError:
        return None


def get_quote(
    quote_url: str,
    input_mint: str,
    output_mint: str,
    amount: int,
    slippage_bps: int,
    timeout: float = 15,
) -> dict:
    params = {
        "inputMint": input_mint,
        "outputMint": output_mint,
        "amount": str(amount),
        "slippageBps": str(slippage_bps),
    }
    try:
        r = requests.get(quote_url, params=params, timeout=timeout)
    except requests.RequestException as e:
        raise QuoteError(f"Quote request failed: {e}") from e
    # Jupiter reports errors in the body, often with a 4xx status
    data = _json_or_none(r)
    if not data or not isinstance(data, dict) or data.get("error"):
        err = data.get("error") if isinstance(data, dict) else None
        raise QuoteError(f"Quote API returned an error: {err or r.status_code}")
    return data


def get_swap_transaction(
    swap_url: str, quote: dict, user_public_key: str, timeout: float = 20
) -> str:
    payload = {
        "quoteResponse": quote,
        "userPublicKey": user_public_key,
        "wrapAndUnwrapSol": True,
    }
    try:
        r = requests.post(swap_url, json=payload, timeout=timeout)
    except requests.RequestException as e:
        raise SwapBuildError(f"Swap request failed: {e}") from e
    data = _json_or_none(r)
    if not data or not isinstance(data, dict) or data.get("error"):
        err = data.get("error") if isinstance(data, dict) else None
        raise SwapBuildError(f"Swap API returned an error: {err or 'Unknown error'}")
    swap_tx = data.get("swapTransaction")
    if not swap_tx:
        raise SwapBuildError("No swapTransaction found in response.")
    return swap_tx

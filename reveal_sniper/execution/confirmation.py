from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from loguru import logger

from reveal_sniper.config import Target

_MISSING = object()


@dataclass(frozen=True)
class SwapOutcome:
    target: Target
    address: str
    success: bool
    signature: str | None = None
    error_detail: str | None = None
    skipped: bool = False
    explorer_url: str | None = None


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name, _MISSING)
    return getattr(obj, name, _MISSING)


def extract_error(result: Any) -> tuple[bool, Any]:
    """Return ``(found, err)`` from a confirmation result.

    Accepts ``{"value": {"err": ...}}`` dicts as well as solana-py responses, whose
    ``value`` is a list of signature statuses.
    """
    value = _field(result, "value")
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is _MISSING or value is None:
        return False, None
    err = _field(value, "err")
    if err is _MISSING:
        return False, None
    return True, err


def interpret_confirmation(
    target: Target,
    address: str,
    signature: str,
    result: Any,
    explorer_tx_url: str = "https://solscan.io/tx/{signature}",
) -> SwapOutcome:
    try:
        found, err = extract_error(result)
    except Exception as e:  # noqa: BLE001
        found, err = True, f"Unreadable confirmation result: {e}"
    if not found:
        err = "No signature status in confirmation result"

    if err is None:
        url = explorer_tx_url.replace("{signature}", signature)
        logger.info("[{}] Swap successful for {}: {}", target.name, address, signature)
        logger.info("View on explorer: {}", url)
        return SwapOutcome(
            target=target,
            address=address,
            success=True,
            signature=signature,
            explorer_url=url,
        )

    logger.error("[{}] Transaction error for {} ({}): {}", target.name, address, signature, err)
    return SwapOutcome(
        target=target,
        address=address,
        success=False,
        signature=signature,
        error_detail=str(err),
    )

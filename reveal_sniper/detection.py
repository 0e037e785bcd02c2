from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from reveal_sniper.config import Target
from reveal_sniper.feed.spore import Snapshot


@dataclass(frozen=True)
class RevealResult:
    target: Target
    address: str


def candidate_addresses(snapshot: Snapshot, targets: Iterable[Target]) -> list[tuple[Target, str]]:
    """Trimmed token address per target, ``""`` when the agent is missing or unrevealed."""
    out: list[tuple[Target, str]] = []
    for t in targets:
        agent = snapshot.agent(t.id)
        raw = agent.token_address if agent else None
        out.append((t, (raw or "").strip()))
    return out


def detect_reveals(snapshot: Snapshot, targets: Iterable[Target]) -> list[RevealResult]:
    # Order follows targets, not the agent order in the snapshot
    return [
        RevealResult(target=t, address=addr)
        for t, addr in candidate_addresses(snapshot, targets)
        if addr
    ]

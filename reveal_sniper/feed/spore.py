from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import requests
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from reveal_sniper.errors import FeedError


class Agent(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: int
    token_address: str | None = Field(default=None, alias="tokenAddress")
    # Descriptive only; kept loose so odd values never hide a reveal
    name: Any = None
    slug: Any = None
    wallet_address: Any = Field(default=None, alias="walletAddress")
    status: Any = None
    breed_status: Any = Field(default=None, alias="breedStatus")
    generation: Any = None
    parent_id: Any = Field(default=None, alias="parentId")
    market_cap: Any = Field(default=None, alias="marketCap")
    created_at: Any = Field(default=None, alias="createdAt")


class Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    agents: tuple[Agent, ...] = ()
    breeding_count: Any = None
    active_count: Any = None

    def agent(self, agent_id: int) -> Agent | None:
        for a in self.agents:
            if a.id == agent_id:
                return a
        return None


def _json_at(item: Any, *keys: str) -> Any:
    cur = item
    for k in keys:
        if not isinstance(cur, dict):
            return None
        cur = cur.get(k)
    return cur


def parse_snapshot(payload: Any) -> Snapshot:
    """Parse the batched tRPC response ``[status, listAgent]`` into a Snapshot.

    Agent records that fail validation are skipped, not fatal.
    """
    if not isinstance(payload, list) or len(payload) < 2:
        raise FeedError(f"Unexpected feed payload shape: {type(payload).__name__}")
    status = _json_at(payload[0], "result", "data", "json")
    if not isinstance(status, dict):
        status = {}
    records = _json_at(payload[1], "result", "data", "json")
    if not isinstance(records, list):
        raise FeedError("Feed payload carries no agent list")
    agents: list[Agent] = []
    for rec in records:
        try:
            agents.append(Agent.model_validate(rec))
        except ValidationError as e:
            logger.debug("Skipping unreadable agent record {!r}: {}", rec, e)
    return Snapshot(
        agents=tuple(agents),
        breeding_count=status.get("breedingCount"),
        active_count=status.get("activeCount"),
    )


@dataclass
class SporeFeed:
    url: str
    timeout: float = 10.0

    def fetch_snapshot(self) -> Snapshot:
        try:
            r = requests.get(self.url, timeout=self.timeout)
            r.raise_for_status()
            payload = r.json()
        except requests.RequestException as e:
            raise FeedError(f"Spore feed request failed: {e}") from e
        except ValueError as e:
            raise FeedError(f"Spore feed returned invalid JSON: {e}") from e
        return parse_snapshot(payload)

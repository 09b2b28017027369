# riftrewind/services/leaderboard.py
# ============================================================================
# Leaderboard local des joueurs déjà recherchés
#   • 1 entrée par (player_id, region)
#   • trié par score décroissant, 100 entrées max
#   • persisté en un seul blob JSON
# ============================================================================

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any, Callable, List, Mapping, Optional, Sequence

from riftrewind.models.player import PlayerLookup, PlayerObservation, solo_queue_entry
from riftrewind.services.scoring import score_entry
from riftrewind.storage import BlobStore

log = logging.getLogger(__name__)

LEADERBOARD_KEY = "rift-rewind-leaderboard"
MAX_ENTRIES = 100
ALL_REGIONS = "all"


class LeaderboardStore:
    """Ranked, deduplicated and size-capped set of observed players."""

    def __init__(
        self,
        store: BlobStore,
        scorer: Callable[[Mapping[str, Any]], int] = score_entry,
        key: str = LEADERBOARD_KEY,
        max_entries: int = MAX_ENTRIES,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.scorer = scorer
        self.key = key
        self.max_entries = max_entries
        self._clock = clock
        # un seul writer à la fois pour le read-modify-write
        self._lock = asyncio.Lock()

    async def close(self) -> None:
        await self.store.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def load(self) -> List[PlayerObservation]:
        """Read the persisted leaderboard; unreadable blobs count as empty."""
        raw = await self.store.read(self.key)
        if not raw:
            return []
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a list, got {type(data).__name__}")
            return [PlayerObservation.from_dict(item) for item in data]
        except (ValueError, TypeError, AttributeError) as e:
            log.warning(f"Corrupt leaderboard blob under {self.key!r}, starting empty: {e}")
            return []

    async def save(self, entries: Sequence[PlayerObservation]) -> None:
        await self.store.write(self.key, json.dumps([e.to_dict() for e in entries]))

    def build_observation(
        self, identity: Mapping[str, Any], ranked: Mapping[str, Any], region: str
    ) -> PlayerObservation:
        return PlayerObservation(
            player_id=str(identity["id"]),
            display_name=identity.get("name", ""),
            region=region,
            tier=ranked.get("tier", ""),
            division=ranked.get("rank"),
            league_points=int(ranked.get("leaguePoints") or 0),
            wins=int(ranked.get("wins") or 0),
            losses=int(ranked.get("losses") or 0),
            profile_icon_id=identity.get("profileIconId"),
            level=identity.get("summonerLevel"),
            score=self.scorer(ranked),
            last_updated=self._clock(),
        )

    async def record_observation(
        self,
        identity: Mapping[str, Any],
        standings: Sequence[Mapping[str, Any]],
        region: str,
    ) -> Optional[PlayerObservation]:
        """
        Upsert a player from a lookup.

        Players without a solo/duo entry are not tracked (returns None and
        nothing is written). Ties keep insertion order: the newest of several
        equal scores sorts last.
        """
        ranked = solo_queue_entry(list(standings))
        if ranked is None:
            log.debug(f"{identity.get('name')!r} unranked in solo queue, leaderboard untouched")
            return None

        observation = self.build_observation(identity, ranked, region)

        async with self._lock:
            entries = [e for e in await self.load() if e.key != observation.key]
            entries.append(observation)
            entries.sort(key=lambda e: e.score, reverse=True)
            del entries[self.max_entries:]
            await self.save(entries)

        log.info(f"Leaderboard: {observation.display_name} ({region}) score={observation.score}")
        return observation

    async def record_lookup(self, lookup: PlayerLookup, region: str) -> Optional[PlayerObservation]:
        return await self.record_observation(lookup.identity, lookup.standings, region)

    async def filtered_view(self, region: str = ALL_REGIONS) -> List[PlayerObservation]:
        """Stored order (score descending), optionally one region only."""
        entries = await self.load()
        if region == ALL_REGIONS:
            return entries
        return [e for e in entries if e.region == region]


# riftrewind/models/player.py
# ============================================================================
# Structures échangées entre le client Riot, le leaderboard et l'affichage
# ============================================================================

from __future__ import annotations
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Optional, Tuple

SOLO_QUEUE = "RANKED_SOLO_5x5"


@dataclass
class PlayerLookup:
    """Result of one successful lookup: the three upstream payloads."""
    identity: Dict[str, Any]
    standings: List[Dict[str, Any]] = field(default_factory=list)
    masteries: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def solo_queue(self) -> Optional[Dict[str, Any]]:
        return solo_queue_entry(self.standings)


def solo_queue_entry(standings: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    return next((s for s in standings if s.get("queueType") == SOLO_QUEUE), None)


@dataclass
class PlayerObservation:
    """Une ligne du leaderboard local."""
    player_id: str
    display_name: str
    region: str
    tier: str
    division: Optional[str]
    league_points: int
    wins: int
    losses: int
    profile_icon_id: Optional[int]
    level: Optional[int]
    score: int
    last_updated: float

    @property
    def key(self) -> Tuple[str, str]:
        return self.player_id, self.region

    @property
    def games(self) -> int:
        return self.wins + self.losses

    @property
    def winrate(self) -> int:
        """Win percentage rounded to the unit, 0 with no games."""
        if not self.games:
            return 0
        return round(self.wins / self.games * 100)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerObservation":
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})

# riftrewind/services/scoring.py
# ============================================================================
# Score de classement : tier * 1000 + division * 100 + LP
# ============================================================================

from __future__ import annotations
from typing import Any, Mapping

TIERS = [
    "IRON", "BRONZE", "SILVER", "GOLD",
    "PLATINUM", "EMERALD", "DIAMOND", "MASTER",
    "GRANDMASTER", "CHALLENGER",
]
TIER_RANK = {tier: i for i, tier in enumerate(TIERS, start=1)}
DIV_WEIGHTS = {"I": 4, "II": 3, "III": 2, "IV": 1}


def tier_rank(tier: str | None) -> int:
    return TIER_RANK.get((tier or "").upper(), 0)


def division_rank(division: str | None) -> int:
    # Master+ n'a pas de division → 0
    return DIV_WEIGHTS.get((division or "").upper(), 0)


def score_entry(entry: Mapping[str, Any]) -> int:
    """
    Score of a league-v4 entry, higher is better.

    >>> score_entry({"tier": "GOLD", "rank": "II", "leaguePoints": 40})
    4340
    """
    lp = int(entry.get("leaguePoints") or 0)
    return tier_rank(entry.get("tier")) * 1000 + division_rank(entry.get("rank")) * 100 + lp

# display.py – rendu texte d'une recherche et du leaderboard

from __future__ import annotations
from typing import Any, Dict, List, Sequence

from riftrewind.models.player import PlayerLookup, PlayerObservation

TIER_EMOJI = {
    "IRON": "⚫", "BRONZE": "🟤", "SILVER": "⚪",
    "GOLD": "🟡", "PLATINUM": "🔵", "EMERALD": "🟢",
    "DIAMOND": "💎", "MASTER": "🔮",
    "GRANDMASTER": "⭐", "CHALLENGER": "👑",
}
MEDALS = ["🥇", "🥈", "🥉"]

# Mapping partiel ; le reste s'affiche avec l'id brut
CHAMPIONS: Dict[int, str] = {
    1: "Annie", 2: "Olaf", 3: "Galio", 4: "TwistedFate", 5: "XinZhao",
}


def champion_name(champion_id: int) -> str:
    return CHAMPIONS.get(champion_id, f"Champion #{champion_id}")


def winrate(wins: int, losses: int) -> int:
    games = wins + losses
    return round(wins / games * 100) if games else 0


def rank_label(tier: str, division: str | None) -> str:
    emoji = TIER_EMOJI.get((tier or "").upper(), "")
    label = f"{tier} {division}" if division else tier
    return f"{emoji} {label}".strip()


def format_lookup(lookup: PlayerLookup, region: str) -> str:
    identity = lookup.identity
    lines = [f"{identity.get('name', '?')} [{region.upper()}] – level {identity.get('summonerLevel', '?')}"]

    ranked = lookup.solo_queue
    if ranked and ranked.get("tier"):
        wins, losses = ranked.get("wins", 0), ranked.get("losses", 0)
        lines.append(
            f"  {rank_label(ranked['tier'], ranked.get('rank'))} · {ranked.get('leaguePoints', 0)} LP"
            f" · {wins}W {losses}L ({winrate(wins, losses)}%)"
        )
    else:
        lines.append("  Unranked")

    if lookup.masteries:
        lines.append("  Champion mastery:")
        for m in lookup.masteries:
            lines.append(
                f"    {champion_name(m.get('championId', 0))}: level {m.get('championLevel', 0)},"
                f" {m.get('championPoints', 0):,} points"
            )
    return "\n".join(lines)


def format_leaderboard(entries: Sequence[PlayerObservation]) -> str:
    if not entries:
        return "Leaderboard is empty."
    rows: List[str] = []
    for i, e in enumerate(entries):
        pos = MEDALS[i] if i < len(MEDALS) else f"#{i + 1}"
        rows.append(
            f"{pos:>4} {e.display_name:<16} {e.region.upper():<5} "
            f"{rank_label(e.tier, e.division):<18} {e.league_points:>4} LP "
            f"{e.winrate:>3}% ({e.games} games)"
        )
    return "\n".join(rows)


def format_status(status: Dict[str, Any]) -> str:
    incidents = len(status.get("incidents") or [])
    maintenances = len(status.get("maintenances") or [])
    return (
        f"API key OK – platform {status.get('id', '?')} ({status.get('name', '?')}): "
        f"{incidents} incident(s), {maintenances} maintenance(s)"
    )

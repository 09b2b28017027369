"""Unit tests for scoring and the local leaderboard."""

import asyncio
import json

import pytest

from riftrewind.models.player import PlayerLookup
from riftrewind.services.leaderboard import LEADERBOARD_KEY, LeaderboardStore
from riftrewind.services.scoring import score_entry
from riftrewind.storage import MemoryBlobStore


def identity(pid, name=None):
    return {"id": pid, "name": name or pid, "profileIconId": 1, "summonerLevel": 100}


def solo(tier, rank, lp, wins=10, losses=10):
    return {"queueType": "RANKED_SOLO_5x5", "tier": tier, "rank": rank,
            "leaguePoints": lp, "wins": wins, "losses": losses}


class TestScoring:

    def test_gold_two(self):
        assert score_entry({"tier": "GOLD", "rank": "II", "leaguePoints": 40}) == 4340

    def test_challenger_without_division(self):
        assert score_entry({"tier": "CHALLENGER", "leaguePoints": 850}) == 10850

    def test_unknown_tier_and_division(self):
        assert score_entry({"tier": "WOOD", "rank": "V", "leaguePoints": 12}) == 12

    def test_iron_four(self):
        assert score_entry({"tier": "IRON", "rank": "IV", "leaguePoints": 0}) == 1100


@pytest.mark.asyncio
class TestLeaderboardStore:

    async def test_unranked_player_is_ignored(self):
        store = MemoryBlobStore()
        board = LeaderboardStore(store)

        result = await board.record_observation(identity("a"), [], "euw1")
        flex_only = [{"queueType": "RANKED_FLEX_SR", "tier": "GOLD", "rank": "I", "leaguePoints": 1}]
        result_flex = await board.record_observation(identity("a"), flex_only, "euw1")

        assert result is None and result_flex is None
        assert store.writes == 0
        assert await board.filtered_view() == []

    async def test_observation_fields(self):
        board = LeaderboardStore(MemoryBlobStore(), clock=lambda: 1234.0)
        obs = await board.record_observation(identity("a", "Alpha"), [solo("GOLD", "II", 40, 30, 10)], "euw1")

        assert obs.score == 4340
        assert obs.display_name == "Alpha"
        assert obs.division == "II"
        assert obs.level == 100
        assert obs.last_updated == 1234.0
        assert obs.winrate == 75
        assert obs.games == 40

    async def test_single_write_per_record(self):
        store = MemoryBlobStore()
        board = LeaderboardStore(store)
        await board.record_observation(identity("a"), [solo("GOLD", "II", 40)], "euw1")

        assert store.writes == 1
        assert len(json.loads(store.data[LEADERBOARD_KEY])) == 1

    async def test_reobservation_replaces_entry(self):
        board = LeaderboardStore(MemoryBlobStore())
        await board.record_observation(identity("a"), [solo("GOLD", "II", 40)], "euw1")
        await board.record_observation(identity("b"), [solo("SILVER", "I", 0)], "euw1")
        await board.record_observation(identity("a"), [solo("IRON", "IV", 5)], "euw1")

        view = await board.filtered_view()
        assert [e.player_id for e in view] == ["b", "a"]
        assert view[1].score == 1105

    async def test_same_player_other_region_is_distinct(self):
        board = LeaderboardStore(MemoryBlobStore())
        await board.record_observation(identity("a"), [solo("GOLD", "II", 40)], "euw1")
        await board.record_observation(identity("a"), [solo("GOLD", "II", 40)], "na1")

        assert len(await board.filtered_view()) == 2

    async def test_sorted_by_score_descending(self):
        board = LeaderboardStore(MemoryBlobStore())
        await board.record_observation(identity("gold"), [solo("GOLD", "II", 40)], "euw1")
        await board.record_observation(identity("chall"), [solo("CHALLENGER", "I", 850) | {"rank": None}], "euw1")
        await board.record_observation(identity("silver"), [solo("SILVER", "III", 99)], "euw1")

        view = await board.filtered_view()
        assert [e.player_id for e in view] == ["chall", "gold", "silver"]
        assert [e.score for e in view] == [10850, 4340, 3299]

    async def test_ties_keep_insertion_order(self):
        board = LeaderboardStore(MemoryBlobStore())
        for pid in ("first", "second", "third"):
            await board.record_observation(identity(pid), [solo("GOLD", "I", 0)], "euw1")

        assert [e.player_id for e in await board.filtered_view()] == ["first", "second", "third"]

    async def test_capped_at_100_dropping_lowest(self):
        board = LeaderboardStore(MemoryBlobStore())
        for i in range(100):
            await board.record_observation(identity(f"p{i}"), [solo("IRON", "IV", i + 1)], "euw1")
        await board.record_observation(identity("new"), [solo("DIAMOND", "I", 0)], "euw1")

        view = await board.filtered_view()
        assert len(view) == 100
        assert view[0].player_id == "new"
        assert "p0" not in {e.player_id for e in view}

    async def test_filtered_view_by_region_keeps_order(self):
        board = LeaderboardStore(MemoryBlobStore())
        await board.record_observation(identity("a"), [solo("GOLD", "I", 0)], "euw1")
        await board.record_observation(identity("b"), [solo("PLATINUM", "I", 0)], "na1")
        await board.record_observation(identity("c"), [solo("DIAMOND", "I", 0)], "euw1")
        await board.record_observation(identity("d"), [solo("BRONZE", "I", 0)], "euw1")

        full = await board.filtered_view("all")
        euw = await board.filtered_view("euw1")
        assert [e.player_id for e in euw] == ["c", "a", "d"]
        assert [e.player_id for e in full if e.region == "euw1"] == [e.player_id for e in euw]
        assert await board.filtered_view("kr") == []

    async def test_persisted_across_instances(self):
        store = MemoryBlobStore()
        await LeaderboardStore(store).record_observation(identity("a"), [solo("GOLD", "II", 40)], "euw1")

        view = await LeaderboardStore(store).filtered_view()
        assert [e.player_id for e in view] == ["a"]

    @pytest.mark.parametrize("blob", ["not json", '{"a": 1}', '[{"player_id": "x"}]'])
    async def test_corrupt_blob_reads_as_empty(self, blob):
        store = MemoryBlobStore({LEADERBOARD_KEY: blob})
        board = LeaderboardStore(store)

        assert await board.filtered_view() == []
        await board.record_observation(identity("a"), [solo("GOLD", "II", 40)], "euw1")
        assert len(json.loads(store.data[LEADERBOARD_KEY])) == 1

    async def test_concurrent_records_are_not_lost(self):
        board = LeaderboardStore(MemoryBlobStore())
        await asyncio.gather(*[
            board.record_observation(identity(f"p{i}"), [solo("GOLD", "I", i)], "euw1")
            for i in range(10)
        ])
        assert len(await board.filtered_view()) == 10

    async def test_record_lookup(self):
        board = LeaderboardStore(MemoryBlobStore())
        lookup = PlayerLookup(identity("a"), [solo("GOLD", "II", 40)], [])

        obs = await board.record_lookup(lookup, "kr")
        assert obs.region == "kr"

    async def test_context_manager_closes_store(self):
        store = MemoryBlobStore()
        async with LeaderboardStore(store) as board:
            await board.record_observation(identity("a"), [solo("GOLD", "II", 40)], "euw1")

        assert store.closed

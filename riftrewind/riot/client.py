# riot/client.py

import asyncio
import logging
import random
import re
import time
from typing import Any, Callable, Dict, List, Mapping, Optional

import aiohttp

from riftrewind.models.player import PlayerLookup
from riftrewind.riot.cache import MISSING, ResponseCache, fingerprint
from riftrewind.riot.endpoints import DEFAULT_BASE_URL, ENDPOINTS, REGIONS, Endpoint, build_url
from riftrewind.riot.errors import (
    InvalidInputError,
    NetworkError,
    RiotAPIError,
    UnclassifiedError,
    error_for_status,
)
from riftrewind.riot.rate_limit import RateLimiter

log = logging.getLogger(__name__)

SUMMONER_NAME_RE = re.compile(r"[A-Za-z0-9 ]{3,16}")
MASTERY_TOP = 5


def validate_lookup(name: str, region: str) -> str:
    """Check a lookup before any network call; returns the normalized region."""
    if not isinstance(name, str) or not SUMMONER_NAME_RE.fullmatch(name):
        raise InvalidInputError(
            f"summoner name must be 3-16 letters, digits or spaces, got {name!r}"
        )
    region = (region or "").lower()
    if region not in REGIONS:
        raise InvalidInputError(f"unknown region {region!r}, expected one of {', '.join(REGIONS)}")
    return region


class RiotClient:
    """Async Riot API client with built-in rate limiting, caching and retries.

    The limiter and cache are plain instances so that several clients (or
    several concurrent lookups on one client) can share a single quota.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        endpoints: Optional[Mapping[str, Endpoint]] = None,
        limiter: Optional[RateLimiter] = None,
        cache: Optional[ResponseCache] = None,
        session: Optional[aiohttp.ClientSession] = None,
        max_retries: int = 3,
        base_delay: float = 1.0,
        jitter: float = 0.25,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.endpoints = dict(endpoints or ENDPOINTS)
        self.limiter = limiter if limiter is not None else RateLimiter()
        self.cache = cache if cache is not None else ResponseCache()
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.jitter = jitter
        self._clock = clock
        self._session = session
        self._lock = asyncio.Lock()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=10)
            )
        return self._session

    async def close(self):
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # ------------------------------------------------------------------ #
    async def _throttle(self):
        """Wait until both quota windows admit one more request, then record it."""
        async with self._lock:
            while True:
                now = self._clock()
                if self.limiter.can_admit(now):
                    self.limiter.record_admission(now)
                    return
                wait = self.limiter.delay_until_next_admission(now)
                log.warning(f"Rate limit reached, waiting {wait:.2f}s")
                await asyncio.sleep(wait)

    async def _request(self, url: str) -> Any:
        """
        Perform exactly one admitted GET and decode the JSON body.

        Raises:
            RiotAPIError subclass matching the HTTP status
            NetworkError: connection problems and timeouts
        """
        await self._throttle()
        session = await self._get_session()

        try:
            async with session.get(url, params={"api_key": self.api_key}) as resp:
                status = resp.status
                if status == 200:
                    try:
                        return await resp.json(content_type=None)
                    except ValueError as e:
                        raise UnclassifiedError(f"invalid JSON body: {e}", status=status) from e
                detail = (await resp.text()).strip()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(str(e) or type(e).__name__) from e

        log.debug(f"{status} on {url}: {detail}")
        raise error_for_status(status, detail)

    def backoff_delay(self, attempt: int) -> float:
        """Wait before retry `attempt` (0-indexed): base * 2^attempt + jitter."""
        return self.base_delay * 2 ** attempt + random.uniform(0, self.jitter)

    async def fetch_resource(self, kind: str, region: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Fetch one endpoint, served from cache when fresh.

        Args:
            kind: key of the endpoint table ("summoner", "league", ...)
            region: platform code, e.g. "euw1"
            params: values for the endpoint's path placeholders

        Returns:
            Decoded JSON payload

        Raises:
            RiotAPIError: terminal failure, after retries for retryable kinds
        """
        params = dict(params or {})
        endpoint = self.endpoints[kind]
        url = build_url(self.base_url, endpoint, region, params)
        key = fingerprint(kind, region, "-".join(str(params[p]) for p in endpoint.placeholders))

        cached = self.cache.get(key, self._clock())
        if cached is not MISSING:
            log.debug(f"Cache hit {key}")
            return cached

        for attempt in range(self.max_retries + 1):
            try:
                data = await self._request(url)
            except RiotAPIError as e:
                if not e.retryable:
                    raise
                if attempt == self.max_retries:
                    log.error(f"Giving up on {kind} after {attempt + 1} attempts: {e}")
                    raise
                wait = self.backoff_delay(attempt)
                log.warning(f"{e}, retrying {kind} in {wait:.2f}s (retry {attempt + 1}/{self.max_retries})")
                await asyncio.sleep(wait)
                continue

            self.cache.put(key, data, self._clock())
            return data

    # ------------------------------------------------------------------ #
    async def get_summoner_by_name(self, region: str, summoner_name: str) -> Dict[str, Any]:
        """Get summoner information by summoner name."""
        return await self.fetch_resource("summoner", region, {"summonerName": summoner_name})

    async def get_league_entries_by_summoner(self, region: str, summoner_id: str) -> List[Dict[str, Any]]:
        """Get ranked entries for a summoner."""
        return await self.fetch_resource("league", region, {"summonerId": summoner_id})

    async def get_champion_masteries(self, region: str, summoner_id: str) -> List[Dict[str, Any]]:
        """Get every champion mastery, in the order the API returns them."""
        return await self.fetch_resource("mastery", region, {"summonerId": summoner_id})

    async def platform_status(self, region: str) -> Dict[str, Any]:
        """Status-V4 platform data; cheap call used to check the API key."""
        return await self.fetch_resource("status", region)

    async def lookup_player(self, name: str, region: str) -> PlayerLookup:
        """
        Identity, ranked standings and top-5 masteries for one summoner.

        The three calls are sequential; any failure aborts the whole lookup so
        that no partial result is returned.
        """
        region = validate_lookup(name, region)

        identity = await self.get_summoner_by_name(region, name)
        summoner_id = identity.get("id") if isinstance(identity, dict) else None
        if not summoner_id:
            raise UnclassifiedError("summoner payload has no id", status=200)

        standings = await self.get_league_entries_by_summoner(region, summoner_id)
        masteries = await self.get_champion_masteries(region, summoner_id)
        standings = list(standings or [])
        masteries = list(masteries or [])[:MASTERY_TOP]

        log.info(f"Lookup {name!r} ({region}) ok: {len(standings)} queues, {len(masteries)} masteries")
        return PlayerLookup(
            identity=identity,
            standings=standings,
            masteries=masteries,
        )

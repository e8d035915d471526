import asyncio
import logging
import time
import json
import aiohttp
from typing import Any, Optional
from config import HLTV_API_URL, HLTV_USER_AGENT

log = logging.getLogger(__name__)


class HLTVError(RuntimeError):
    """Upstream stats API call failed (network, status or payload)."""


class _RateLimiter:
    def __init__(self, min_interval: float = 1.0):
        self._min_interval = min_interval
        self._lock = asyncio.Lock()
        self._last = 0.0

    async def wait(self):
        async with self._lock:
            now = time.monotonic()
            wait_for = self._min_interval - (now - self._last)
            if wait_for > 0:
                await asyncio.sleep(wait_for)
            self._last = time.monotonic()

_limiter = _RateLimiter(min_interval=1.0)
_session: Optional[aiohttp.ClientSession] = None

def _get_headers():
    return {
        "User-Agent": HLTV_USER_AGENT,
        "Accept": "application/json",
    }

async def get_session():
    global _session
    if _session is None or _session.closed:
        _session = aiohttp.ClientSession()
    return _session

async def fetch_json(path: str, timeout: float = 15.0, **params) -> Any:
    """
    GET `HLTV_API_URL + path` and decode the JSON body.
    Raises HLTVError on anything but a 200 with valid JSON.
    """
    await _limiter.wait()
    session = await get_session()
    url = f"{HLTV_API_URL}/{path.lstrip('/')}"
    query = {k: v for k, v in params.items() if v is not None}
    try:
        async with session.get(url, headers=_get_headers(), params=query or None,
                               timeout=aiohttp.ClientTimeout(total=timeout)) as resp:
            text = await resp.text()
            if resp.status != 200:
                raise HLTVError(f"Fetch failed: {path} status={resp.status}")
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise HLTVError(f"Fetch failed: {path}: {e}") from e
    try:
        return json.loads(text)
    except ValueError as e:
        raise HLTVError(f"Invalid JSON response from {path}: {e}") from e

async def close():
    global _session
    if _session and not _session.closed:
        await _session.close()
        _session = None


# ---------- endpoints ----------

async def get_results(pages: int = 1) -> list[dict]:
    return await fetch_json("results", pages=pages) or []

async def get_matches() -> list[dict]:
    return await fetch_json("matches") or []

async def get_events() -> list[dict]:
    """Events of the first (current) group; the API groups events by month."""
    data = await fetch_json("events") or []
    if data and isinstance(data[0], dict) and "events" in data[0]:
        return list(data[0].get("events") or [])
    return list(data)

async def get_team(team_id: int) -> dict:
    return await fetch_json(f"team/{team_id}")

async def get_team_stats(team_id: int) -> dict:
    return await fetch_json(f"team/{team_id}/stats")

async def get_team_ranking() -> list[dict]:
    return await fetch_json("ranking/teams") or []

async def get_player_ranking() -> list[dict]:
    return await fetch_json("ranking/players", rankingFilter="Top30") or []

async def get_player_by_name(name: str) -> dict:
    return await fetch_json("player", name=name)

async def get_recent_threads() -> list[dict]:
    return await fetch_json("threads") or []


# ---------- shaping helpers ----------

def live_only(matches: list[dict]) -> list[dict]:
    return [m for m in matches if m.get("live") is True]

def team_map_items(stats: dict) -> list[dict]:
    """`mapStats` is keyed by map code; keep API order and carry the key along."""
    out = []
    for key, row in ((stats or {}).get("mapStats") or {}).items():
        out.append({"map": key, **(row or {})})
    return out

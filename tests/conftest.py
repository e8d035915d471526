"""
Pytest configuration and fixtures for HLTVBot tests.
"""

import os
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

# config.py reads these at import time
os.environ.setdefault("DISCORD_BOT_TOKEN", "test-token")
os.environ.setdefault("HLTV_API_URL", "http://hltv.test")

# Make the repo root importable (main.py, config.py, cogs/, utils/)
sys.path.insert(0, str(Path(__file__).parent.parent))


class FakeBot:
    """Just enough of discord.Bot for the reaction gate: a listener registry."""

    def __init__(self):
        self.listeners: dict[str, list] = {}
        self.user = SimpleNamespace(id=999, display_avatar=SimpleNamespace(url="https://cdn.test/avatar.png"))

    def add_listener(self, func, name):
        self.listeners.setdefault(name, []).append(func)

    def remove_listener(self, func, name):
        if func in self.listeners.get(name, []):
            self.listeners[name].remove(func)

    async def dispatch(self, name, payload):
        for func in list(self.listeners.get(name, [])):
            await func(payload)


@pytest.fixture
def fake_bot():
    return FakeBot()


@pytest.fixture
def message():
    msg = MagicMock()
    msg.id = 4242
    msg.edit = AsyncMock()
    msg.delete = AsyncMock()
    msg.clear_reactions = AsyncMock()
    msg.add_reaction = AsyncMock()
    return msg


def make_match(n: int, **extra) -> dict:
    match = {
        "id": 1000 + n,
        "team1": {"id": 10 + n, "name": f"Team {n}A"},
        "team2": {"id": 20 + n, "name": f"Team {n}B"},
        "format": "bo3",
        "map": "de_mirage",
        "event": {"id": 500 + n, "name": f"Big Event {n}"},
        "result": "16 - 9",
    }
    match.update(extra)
    return match


@pytest.fixture
def matches():
    return [make_match(i) for i in range(7)]

import re

HLTV_URL = "https://www.hltv.org"
BLANK = "\u200b"

MAX_FIELD_CHARS = 1024


def url_slug(name: str) -> str:
    """HLTV-style URL slug: whitespace runs become '-', lower-cased."""
    return re.sub(r"\s+", "-", (name or "").strip()).lower()


def team_link(team: dict) -> str:
    name = team.get("name") or "TBD"
    if team.get("id") is None:
        return name
    return f"[{name}]({HLTV_URL}/team/{team['id']}/{url_slug(name)})"


def event_link(event: dict) -> str:
    name = event.get("name") or "Unknown"
    if event.get("id") is None:
        return name
    return f"[{name}]({HLTV_URL}/events/{event['id']}/{url_slug(name)})"


def player_link(player: dict) -> str:
    name = player.get("name") or "Unknown"
    return f"[{name}]({HLTV_URL}/stats/players/{player.get('id')}/{url_slug(name)})"


def or_unknown(value) -> str:
    if value is None or value == "":
        return "Unknown"
    return str(value)


def truncate(text: str, limit: int = MAX_FIELD_CHARS) -> str:
    return text if len(text) <= limit else text[: limit - 3] + "..."

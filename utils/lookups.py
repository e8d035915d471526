# utils/lookups.py
from __future__ import annotations

from typing import Any, Optional

import discord
from rapidfuzz import fuzz, process

NOT_SELECTED = "Not Selected"

# Upper-case team name -> HLTV team id
TEAMS: dict[str, int] = {
    "ASTRALIS":     6665,
    "BIG":          7532,
    "CLOUD9":       5752,
    "COMPLEXITY":   5005,
    "ENCE":         4869,
    "EG":           10399,
    "FAZE":         6667,
    "FNATIC":       4991,
    "FURIA":        8297,
    "G2":           5995,
    "HEROIC":       7175,
    "LIQUID":       5973,
    "MIBR":         9215,
    "MOUZ":         4494,
    "NAVI":         4608,
    "NIP":          4411,
    "NORTH":        7533,
    "NRG":          6673,
    "OG":           10503,
    "SPIRIT":       7020,
    "VIRTUSPRO":    5378,
    "VITALITY":     9565,
}

# Map codes as returned by the stats API (short and de_ forms) -> display name
MAPS: dict[str, str] = {
    "d2":          "Dust 2",
    "de_dust2":    "Dust 2",
    "mrg":         "Mirage",
    "de_mirage":   "Mirage",
    "inf":         "Inferno",
    "de_inferno":  "Inferno",
    "nuke":        "Nuke",
    "de_nuke":     "Nuke",
    "ovp":         "Overpass",
    "de_overpass": "Overpass",
    "trn":         "Train",
    "de_train":    "Train",
    "cch":         "Cache",
    "de_cache":    "Cache",
    "cbl":         "Cobblestone",
    "de_cbble":    "Cobblestone",
    "vertigo":     "Vertigo",
    "de_vertigo":  "Vertigo",
    "anc":         "Ancient",
    "de_ancient":  "Ancient",
    "anb":         "Anubis",
    "de_anubis":   "Anubis",
    "tuscan":      "Tuscan",
    "de_tuscan":   "Tuscan",
    "season":      "Season",
    "de_season":   "Season",
}

FORMATS: dict[str, str] = {
    "bo1": "Best of 1",
    "bo2": "Best of 2",
    "bo3": "Best of 3",
    "bo5": "Best of 5",
    "bo7": "Best of 7",
}


def map_name(code: Any) -> str:
    """Display name for a map code, "Not Selected" when unknown or missing."""
    if code is None:
        return NOT_SELECTED
    return MAPS.get(str(code), NOT_SELECTED)


def map_header(key: Any) -> str:
    """Display name for a map-stats key; unknown keys are shown as-is, empty ones as "Unknown"."""
    if key is None or str(key).strip() == "":
        return "Unknown"
    return MAPS.get(str(key), str(key))


def format_name(code: Any) -> str:
    if code is None or str(code).strip() == "":
        return "Unknown"
    return FORMATS.get(str(code).lower(), str(code))


def resolve_team(name: str) -> Optional[tuple[str, int]]:
    """Return (canonical name, team id) or None."""
    key = (name or "").strip().upper().replace(" ", "").replace(".", "")
    team_id = TEAMS.get(key)
    return (key, team_id) if team_id is not None else None


def suggest_teams(name: str, *, limit: int = 3, score_cutoff: int = 60) -> list[str]:
    needle = (name or "").strip().upper()
    if not needle:
        return []
    hits = process.extract(needle, TEAMS.keys(), scorer=fuzz.WRatio, limit=limit, score_cutoff=score_cutoff)
    return [h[0] for h in hits]


# Top-level autocomplete so it works inside annotations (no self reference)
async def team_autocomplete(ctx: discord.AutocompleteContext):
    needle = (ctx.value or "").upper()
    return [t for t in sorted(TEAMS) if needle in t][:25]

# utils/renderers.py
"""
Page renderers for paginated embeds.

Each renderer turns one page of stats-API items into a `DisplayDocument`.
Renderers are pure: same (page_items, start_index, dataset) in, equal
document out. The document is converted to a `discord.Embed` only at the
messaging edge (`DisplayDocument.to_embed`).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NamedTuple, Optional, Sequence, TYPE_CHECKING

import discord

from utils.lookups import format_name, map_header, map_name, NOT_SELECTED
from utils.text import BLANK, HLTV_URL, event_link, or_unknown, team_link, truncate, url_slug
from utils.time_format import discord_timestamp

if TYPE_CHECKING:
    from utils.pagination import PageKind, PagedDataset

EMBED_COLOR = 0x00AE86
MAP_SEPARATOR = "=" * 58


class EmbedField(NamedTuple):
    name: str
    value: str
    inline: bool = False


SPACER = EmbedField(BLANK, BLANK, False)


@dataclass(frozen=True)
class DisplayDocument:
    title: str
    color: int
    footer_text: str
    fields: tuple[EmbedField, ...] = ()
    url: Optional[str] = None
    thumbnail: Optional[str] = None

    def to_embed(self, footer_icon_url: Optional[str] = None) -> discord.Embed:
        embed = discord.Embed(title=self.title, color=self.color, url=self.url)
        for f in self.fields:
            embed.add_field(name=f.name, value=f.value, inline=f.inline)
        if footer_icon_url:
            embed.set_footer(text=self.footer_text, icon_url=footer_icon_url)
        else:
            embed.set_footer(text=self.footer_text)
        if self.thumbnail:
            embed.set_thumbnail(url=self.thumbnail)
        return embed


def page_footer(start_index: int, dataset: "PagedDataset") -> str:
    return f"Page {dataset.page_number(start_index)} of {dataset.page_count()}"


class PageRenderer:
    """Base strategy: subclasses build the per-item field block."""

    title = ""
    url: Optional[str] = None

    def render(self, page_items: Sequence[Any], start_index: int, dataset: "PagedDataset") -> DisplayDocument:
        fields: list[EmbedField] = []
        for pos, item in enumerate(page_items):
            # a missing slot ends the page instead of failing it
            if item is None:
                break
            if pos:
                fields.append(SPACER)
            fields.extend(self.item_fields(item))
        return DisplayDocument(
            title=self.title,
            color=EMBED_COLOR,
            footer_text=page_footer(start_index, dataset),
            fields=tuple(fields),
            url=self.url,
        )

    def item_fields(self, item: Any) -> list[EmbedField]:
        raise NotImplementedError


def _map_field_value(match: dict) -> str:
    # Some endpoints return `map`, others `maps`; either can be a code or a list of codes.
    maps = match.get("map")
    if maps is None:
        maps = match.get("maps")
    if maps is None:
        return NOT_SELECTED
    if isinstance(maps, (list, tuple)):
        if not maps:
            return NOT_SELECTED
        return ", ".join(map_name(m) for m in maps)
    return map_name(maps)


class MatchPageRenderer(PageRenderer):
    """Results, scheduled matches and live matches."""

    TITLES = {
        "RESULTS": "Match Results",
        "MATCHES": "Scheduled Matches",
        "LIVE_MATCHES": "Live Matches",
    }

    def __init__(self, kind: "PageKind"):
        if kind.name not in self.TITLES:
            raise ValueError(f"MatchPageRenderer cannot render {kind.name}")
        self.kind = kind
        self.title = self.TITLES[kind.name]
        self.with_date = kind.name == "MATCHES"
        self.with_result = kind.name == "RESULTS"

    def item_fields(self, match: dict) -> list[EmbedField]:
        team1 = match.get("team1") or {}
        team2 = match.get("team2") or {}
        out = [EmbedField("Match", f"{team_link(team1)} vs {team_link(team2)}")]

        if self.with_date:
            date = "Live" if match.get("live") else (discord_timestamp(match.get("date")) or "Unknown")
            out.append(EmbedField("Date", date))

        out.append(EmbedField("Format", format_name(match.get("format"))))
        out.append(EmbedField("Map", truncate(_map_field_value(match))))
        out.append(EmbedField("Event", event_link(match.get("event") or {})))

        if self.with_result:
            out.append(EmbedField("Result", or_unknown(match.get("result"))))
        return out


class TeamMapsRenderer(PageRenderer):
    """Per-map statistics for one team. Items are dicts with a `map` key plus the stat columns."""

    def __init__(self, team_name: str, team_id: int):
        self.team_name = team_name
        self.team_id = team_id
        self.title = f"{team_name} Maps"
        self.url = f"{HLTV_URL}/stats/teams/{team_id}/{url_slug(team_name)}"

    def item_fields(self, row: dict) -> list[EmbedField]:
        return [
            EmbedField(map_header(row.get("map")), MAP_SEPARATOR),
            EmbedField("Wins", or_unknown(row.get("wins")), True),
            EmbedField("Draws", or_unknown(row.get("draws")), True),
            EmbedField("Losses", or_unknown(row.get("losses")), True),
            EmbedField("Win Rate", or_unknown(row.get("winRate")), True),
            EmbedField("Total Rounds", or_unknown(row.get("totalRounds")), True),
        ]


class EventPageRenderer(PageRenderer):
    title = "Events"
    url = f"{HLTV_URL}/events"

    def item_fields(self, event: dict) -> list[EmbedField]:
        location = event.get("location")
        if isinstance(location, dict):
            location = location.get("name")
        return [
            EmbedField("Name", event_link(event)),
            EmbedField("Start", discord_timestamp(event.get("dateStart")) or "Unknown"),
            EmbedField("End", discord_timestamp(event.get("dateEnd")) or "Unknown"),
            EmbedField("Prize Pool", or_unknown(event.get("prizePool"))),
            EmbedField("Teams", or_unknown(event.get("teams"))),
            EmbedField("Location", or_unknown(location)),
            EmbedField("Event Type", or_unknown(event.get("type"))),
        ]


def renderer_for(kind: "PageKind", **kwargs) -> PageRenderer:
    """Pick the render strategy for a dataset kind (TEAM_MAPS needs team_name and team_id)."""
    name = kind.name
    if name in MatchPageRenderer.TITLES:
        return MatchPageRenderer(kind)
    if name == "TEAM_MAPS":
        return TeamMapsRenderer(kwargs["team_name"], kwargs["team_id"])
    if name == "EVENTS":
        return EventPageRenderer()
    raise ValueError(f"No renderer for {name}")

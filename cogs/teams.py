import logging
from typing import Annotated

import discord
from discord.ext import commands
from discord.commands import slash_command, Option

from config import IS_DEV
from utils import hltv_client
from utils.hltv_client import HLTVError
from utils.lookups import TEAMS, resolve_team, suggest_teams, team_autocomplete
from utils.pagination import PageKind
from utils.text import HLTV_URL, or_unknown, player_link, team_link, truncate, url_slug
from cogs.matches import fallback_embed, send_paginated

log = logging.getLogger(__name__)

COLOR = 0xFF0000 if IS_DEV else 0x00AE86


def team_list_embed() -> discord.Embed:
    embed = discord.Embed(title="Valid Teams", description="\n".join(sorted(TEAMS)), color=0xFF8D00)
    embed.set_footer(text="Sent by HLTVBot")
    return embed


def team_ranking_embed(ranking: list[dict]) -> discord.Embed:
    lines = []
    for row in ranking:
        team = row.get("team") or {}
        lines.append(f"{row.get('place')}. {team_link(team)} ({row.get('change', 0)})")
    embed = discord.Embed(title="Team Rankings", description=truncate("\n".join(lines), 4096) or "_no data_", color=COLOR)
    embed.set_footer(text="Sent by HLTVBot")
    return embed


def recent_results_value(team: dict, limit: int = 3) -> str | None:
    """First `limit` finished results, one per line."""
    played = [r for r in (team.get("recentResults") or []) if r.get("result") != "-:-"][:limit]
    if not played:
        return None
    name = team.get("name", "")
    return "\n".join(f"({name} {r.get('result')} {(r.get('enemyTeam') or {}).get('name', '?')})" for r in played)


def team_profile_embed(team_name: str, team_id: int, team: dict) -> discord.Embed:
    embed = discord.Embed(
        title=f"{team_name} Profile",
        color=COLOR,
        url=f"{HLTV_URL}/team/{team_id}/{url_slug(team_name)}",
    )
    location = team.get("location")
    if isinstance(location, dict):
        location = location.get("name")
    embed.add_field(name="Location", value=or_unknown(location), inline=False)
    embed.add_field(name="Facebook", value=or_unknown(team.get("facebook")), inline=False)
    embed.add_field(name="Twitter", value=or_unknown(team.get("twitter")), inline=False)
    players = ", ".join(player_link(p) for p in (team.get("players") or [])[:5])
    embed.add_field(name="Players", value=truncate(players) or "Unknown", inline=False)
    embed.add_field(name="Rank", value=or_unknown(team.get("rank")), inline=False)
    recent = recent_results_value(team)
    if recent:
        embed.add_field(name="Recent Matches", value=recent, inline=False)
    embed.set_footer(text="Sent by HLTVBot")
    return embed


def _ratio(num, den, scale: int = 1) -> str:
    try:
        return str(round(num / den * scale, 2))
    except (TypeError, ZeroDivisionError):
        return "Unknown"


def team_stats_embed(team_name: str, team_id: int, stats: dict) -> discord.Embed:
    ov = stats.get("overview") or {}
    embed = discord.Embed(
        title=f"{team_name} Stats",
        color=COLOR,
        url=f"{HLTV_URL}/stats/teams/{team_id}/{url_slug(team_name)}",
    )
    embed.add_field(name="Maps Played", value=or_unknown(ov.get("mapsPlayed")), inline=True)
    embed.add_field(name="Rounds Played", value=or_unknown(ov.get("roundsPlayed")), inline=True)
    embed.add_field(name="Wins", value=or_unknown(ov.get("wins")), inline=True)
    embed.add_field(name="Losses", value=or_unknown(ov.get("losses")), inline=True)
    embed.add_field(name="Kills", value=or_unknown(ov.get("totalKills")), inline=True)
    embed.add_field(name="Deaths", value=or_unknown(ov.get("totalDeaths")), inline=True)
    embed.add_field(name="KD Ratio", value=or_unknown(ov.get("kdRatio")), inline=True)
    embed.add_field(name="Average Kills Per Round", value=_ratio(ov.get("totalKills"), ov.get("roundsPlayed")), inline=True)
    wins, losses = ov.get("wins"), ov.get("losses")
    total = (wins + losses) if isinstance(wins, (int, float)) and isinstance(losses, (int, float)) else None
    embed.add_field(name="Win%", value=_ratio(wins, total, 100), inline=True)
    embed.set_footer(text="Sent by HLTVBot")
    return embed


class Teams(commands.Cog):
    def __init__(self, bot):
        self.bot = bot

    @slash_command(name="teams", description="Lists the accepted teams, or the current team rankings")
    async def teams(
        self,
        ctx: discord.ApplicationContext,
        view: Annotated[str, Option(str, "What to show", choices=["list", "rankings"], default="list")],
    ):
        if view == "list":
            await ctx.respond(embed=team_list_embed())
            return

        await ctx.defer()
        try:
            ranking = await hltv_client.get_team_ranking()
        except HLTVError as e:
            log.warning("team ranking fetch failed: %s", e)
            await ctx.followup.send(embed=fallback_embed("team rankings"))
            return
        await ctx.followup.send(embed=team_ranking_embed(ranking))

    @slash_command(name="team", description="Team profile, stats, map stats or HLTV link")
    async def team(
        self,
        ctx: discord.ApplicationContext,
        name: Annotated[str, Option(str, "Team name", autocomplete=team_autocomplete)],
        view: Annotated[str, Option(str, "What to show", choices=["profile", "stats", "maps", "link"], default="profile")],
    ):
        resolved = resolve_team(name)
        if resolved is None:
            hints = suggest_teams(name)
            msg = f"`{name}` is not a known team."
            if hints:
                msg += " Did you mean: " + ", ".join(f"`{h}`" for h in hints) + "?"
            await ctx.respond(msg, ephemeral=True)
            return

        team_name, team_id = resolved
        if view == "link":
            await ctx.respond(f"{HLTV_URL}/team/{team_id}/{url_slug(team_name)}")
            return

        await ctx.defer()
        try:
            if view == "profile":
                data = await hltv_client.get_team(team_id)
            else:
                data = await hltv_client.get_team_stats(team_id)
        except HLTVError as e:
            log.warning("team %s (%s) fetch failed: %s", team_name, view, e)
            await ctx.followup.send(embed=fallback_embed(f"{team_name} {view}"))
            return

        if view == "profile":
            await ctx.followup.send(embed=team_profile_embed(team_name, team_id, data))
        elif view == "stats":
            await ctx.followup.send(embed=team_stats_embed(team_name, team_id, data))
        else:
            await send_paginated(
                ctx, PageKind.TEAM_MAPS, hltv_client.team_map_items(data),
                team_name=team_name, team_id=team_id,
            )


def setup(bot):
    bot.add_cog(Teams(bot))

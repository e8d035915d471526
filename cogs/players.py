import logging
from typing import Annotated

import discord
from discord.ext import commands
from discord.commands import slash_command, Option

from config import IS_DEV
from utils import hltv_client
from utils.hltv_client import HLTVError
from utils.text import HLTV_URL, or_unknown, player_link, team_link, truncate, url_slug
from cogs.matches import fallback_embed

log = logging.getLogger(__name__)

COLOR = 0xFF0000 if IS_DEV else 0x00AE86
RANKING_SIZE = 30


def player_ranking_embed(ranking: list[dict]) -> discord.Embed:
    lines = [
        f"{pos}. {player_link(p)} ({p.get('rating', '?')})"
        for pos, p in enumerate(ranking[:RANKING_SIZE], start=1)
    ]
    embed = discord.Embed(title="Player Rankings", description=truncate("\n".join(lines), 4096) or "_no data_", color=COLOR)
    embed.set_footer(text="Sent by HLTVBot")
    return embed


def player_profile_embed(query: str, player: dict) -> discord.Embed:
    embed = discord.Embed(
        title=f"{query} Player Profile",
        color=COLOR,
        url=f"{HLTV_URL}/player/{player.get('id')}/{url_slug(player.get('ign') or query)}",
    )
    if player.get("image"):
        embed.set_thumbnail(url=player["image"])
    country = player.get("country") or {}
    team = player.get("team")
    stats = player.get("statistics") or {}
    embed.add_field(name="Name", value=or_unknown(player.get("name")), inline=False)
    embed.add_field(name="IGN", value=or_unknown(player.get("ign")), inline=False)
    embed.add_field(name="Age", value=or_unknown(player.get("age")), inline=False)
    embed.add_field(name="Country", value=or_unknown(country.get("name")), inline=False)
    embed.add_field(name="Facebook", value=or_unknown(player.get("facebook")), inline=False)
    embed.add_field(name="Twitch", value=or_unknown(player.get("twitch")), inline=False)
    embed.add_field(name="Twitter", value=or_unknown(player.get("twitter")), inline=False)
    embed.add_field(name="Team", value=team_link(team) if team else "None", inline=False)
    embed.add_field(name="Rating", value=or_unknown(stats.get("rating")), inline=False)
    embed.set_footer(text="Sent by HLTVBot")
    return embed


def invalid_player_embed(query: str) -> discord.Embed:
    embed = discord.Embed(
        title="Invalid Player",
        description=f"{query} is not a valid playername. Please try again or visit hltv.org",
        color=COLOR,
    )
    embed.set_footer(text="Sent by HLTVBot")
    return embed


class Players(commands.Cog):
    def __init__(self, bot):
        self.bot = bot

    @slash_command(name="player", description="Player profile by name, or 'rankings' for the top 30")
    async def player(
        self,
        ctx: discord.ApplicationContext,
        name: Annotated[str, Option(str, "Player name, or 'rankings'")],
    ):
        await ctx.defer()
        if name.lower() in ("rankings", "ranking"):
            try:
                ranking = await hltv_client.get_player_ranking()
            except HLTVError as e:
                log.warning("player ranking fetch failed: %s", e)
                await ctx.followup.send(embed=fallback_embed("player rankings"))
                return
            await ctx.followup.send(embed=player_ranking_embed(ranking))
            return

        try:
            player = await hltv_client.get_player_by_name(name)
        except HLTVError as e:
            log.info("player lookup %r failed: %s", name, e)
            player = None
        if not player:
            await ctx.followup.send(embed=invalid_player_embed(name))
            return
        await ctx.followup.send(embed=player_profile_embed(name, player))


def setup(bot):
    bot.add_cog(Players(bot))

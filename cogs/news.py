import logging

import discord
from discord.ext import commands
from discord.commands import slash_command

from utils import hltv_client
from utils.hltv_client import HLTVError
from utils.text import HLTV_URL
from cogs.matches import fallback_embed

log = logging.getLogger(__name__)

MAX_THREADS = 24


def threads_embed(threads: list[dict], *, title: str, categories: set[str], empty: str) -> discord.Embed:
    embed = discord.Embed(title=title, color=0xFF8D00)
    embed.set_footer(text="Sent by HLTVBot")
    count = 0
    for t in threads:
        if t.get("title") is None or t.get("category") not in categories:
            continue
        embed.add_field(
            name=t["title"],
            value=f"[Link]({HLTV_URL}{t.get('link', '')}) Replies: {t.get('replies', 0)} Category: {t['category']}",
            inline=False,
        )
        count += 1
        if count >= MAX_THREADS:
            break
    if count == 0:
        embed.description = empty
    return embed


class News(commands.Cog):
    def __init__(self, bot):
        self.bot = bot

    async def _threads(self, ctx, what: str):
        await ctx.defer()
        try:
            return await hltv_client.get_recent_threads()
        except HLTVError as e:
            log.warning("threads fetch failed: %s", e)
            await ctx.followup.send(embed=fallback_embed(what))
            return None

    @slash_command(name="threads", description="Displays the most recent hltv user threads")
    async def threads(self, ctx: discord.ApplicationContext):
        res = await self._threads(ctx, "threads")
        if res is None:
            return
        await ctx.followup.send(embed=threads_embed(
            res, title="Recent Threads", categories={"cs"},
            empty="No Threads found, please try again later.",
        ))

    @slash_command(name="news", description="Displays the most recent hltv news & match info")
    async def news(self, ctx: discord.ApplicationContext):
        res = await self._threads(ctx, "news")
        if res is None:
            return
        await ctx.followup.send(embed=threads_embed(
            res, title="Recent News", categories={"news", "match"},
            empty="No News found, please try again later.",
        ))


def setup(bot):
    bot.add_cog(News(bot))

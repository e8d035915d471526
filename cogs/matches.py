import logging

import discord
from discord.ext import commands
from discord.commands import slash_command

from config import (
    IS_DEV,
    PAGINATION_TIMEOUT,
    PAGINATION_RESET_ON_ACTIVITY,
    PAGINATION_DELETE_ON_STOP,
)
from utils import hltv_client
from utils.hltv_client import HLTVError
from utils.pagination import PagedDataset, PageKind, paginate
from utils.renderers import renderer_for

log = logging.getLogger(__name__)


def fallback_embed(what: str) -> discord.Embed:
    return discord.Embed(
        title="HLTV unavailable",
        description=f"Could not fetch {what} right now, please try again later.",
        color=0xFF0000 if IS_DEV else 0xFF8D00,
    )


async def send_paginated(ctx: discord.ApplicationContext, kind: PageKind, items: list, **renderer_kwargs):
    """Build the dataset + renderer for `kind` and hand over to the reaction paginator."""
    dataset = PagedDataset.for_kind(kind, items)
    renderer = renderer_for(kind, **renderer_kwargs)
    return await paginate(
        ctx,
        dataset,
        renderer,
        timeout=PAGINATION_TIMEOUT,
        reset_on_activity=PAGINATION_RESET_ON_ACTIVITY,
        delete_on_stop=PAGINATION_DELETE_ON_STOP,
    )


class Matches(commands.Cog):
    def __init__(self, bot):
        self.bot = bot

    async def _run(self, ctx: discord.ApplicationContext, kind: PageKind, what: str, fetch):
        await ctx.defer()
        try:
            items = await fetch()
        except HLTVError as e:
            log.warning("%s fetch failed: %s", kind.name, e)
            await ctx.followup.send(embed=fallback_embed(what))
            return None
        return await send_paginated(ctx, kind, items)

    @slash_command(name="results", description="Displays the most recent match results")
    async def results(self, ctx: discord.ApplicationContext):
        await self._run(ctx, PageKind.RESULTS, "results", hltv_client.get_results)

    @slash_command(name="matches", description="Displays all known scheduled matches")
    async def matches(self, ctx: discord.ApplicationContext):
        await self._run(ctx, PageKind.MATCHES, "matches", hltv_client.get_matches)

    @slash_command(name="livematches", description="Displays all currently live matches")
    async def livematches(self, ctx: discord.ApplicationContext):
        async def fetch_live():
            return hltv_client.live_only(await hltv_client.get_matches())

        await self._run(ctx, PageKind.LIVE_MATCHES, "live matches", fetch_live)

    @slash_command(name="events", description="Displays info on current & upcoming events")
    async def events(self, ctx: discord.ApplicationContext):
        await self._run(ctx, PageKind.EVENTS, "events", hltv_client.get_events)


def setup(bot):
    bot.add_cog(Matches(bot))

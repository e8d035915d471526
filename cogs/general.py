import time
from typing import Annotated, Iterable

import discord
from discord.ext import commands
from discord.commands import slash_command, Option

from config import BOT_VERSION, EXCLUDED_GUILD_ID
from utils.time_format import format_uptime

# (command, description) per help section; sections are separated by a blank field
HELP_SECTIONS: list[list[tuple[str, str]]] = [
    [
        ("/hltv", "Lists all current commands"),
        ("/hltv what:ping", "Displays the current ping to the bot & the API"),
        ("/hltv what:stats", "Displays bot statistics, invite link and contact information"),
    ],
    [
        ("/teams", "Lists all of the currently accepted teams"),
        ("/teams view:rankings", "Displays the top 30 team rankings & recent position changes"),
        ("/team name:[teamname]", "Displays the profile related to the input team"),
        ("/team name:[teamname] view:stats", "Displays the statistics related to the input team"),
        ("/team name:[teamname] view:maps", "Displays the map statistics related to the input team"),
        ("/team name:[teamname] view:link", "Displays a link to the input teams HLTV page"),
    ],
    [
        ("/player name:[playername]", "Displays player statistics from the given playername"),
        ("/player name:rankings", "Displays the top 30 player rankings"),
    ],
    [
        ("/livematches", "Displays all currently live matches"),
        ("/matches", "Displays all known scheduled matches"),
        ("/results", "Displays the most recent match results"),
        ("/threads", "Displays the most recent hltv user threads"),
        ("/news", "Displays the most recent hltv news & match info"),
        ("/events", "Displays info on current & upcoming events"),
    ],
]

LINKS = {
    "Invite Link": "[Invite](https://discordapp.com/oauth2/authorize?client_id=548165454158495745&scope=bot&permissions=330816)",
    "Support Link": "[GitHub](https://github.com/OhhLoz/HLTVBot)",
    "Bot Page": "[Vote Here!](https://top.gg/bot/548165454158495745)",
}


def serving_counts(guilds: Iterable[discord.Guild], excluded_guild_id: int | None = None) -> dict[str, int]:
    """Fold the current guild cache into user/bot/server/channel counts."""
    counts = {"servers": 0, "channels": 0, "users": 0, "bots": 0}
    for guild in guilds:
        if excluded_guild_id is not None and guild.id == excluded_guild_id:
            continue
        counts["servers"] += 1
        counts["channels"] += sum(1 for c in guild.channels if not isinstance(c, discord.CategoryChannel))
        for member in guild.members:
            counts["bots" if member.bot else "users"] += 1
    return counts


def help_embed() -> discord.Embed:
    embed = discord.Embed(title="Help", color=0xFF8D00)
    for i, section in enumerate(HELP_SECTIONS):
        if i:
            embed.add_field(name="\u200b", value="\u200b", inline=False)
        for name, desc in section:
            embed.add_field(name=name, value=desc, inline=False)
    embed.set_footer(text="Sent by HLTVBot")
    return embed


def stats_embed(counts: dict[str, int], uptime_seconds: float, avatar_url: str | None = None) -> discord.Embed:
    embed = discord.Embed(title="Bot Stats", color=0xFF8D00)
    if avatar_url:
        embed.set_thumbnail(url=avatar_url)
    embed.add_field(name="User Count", value=str(counts["users"]), inline=True)
    embed.add_field(name="Bot User Count", value=str(counts["bots"]), inline=True)
    embed.add_field(name="Server Count", value=str(counts["servers"]), inline=True)
    embed.add_field(name="Channel Count", value=str(counts["channels"]), inline=True)
    embed.add_field(name="Version", value=BOT_VERSION, inline=True)
    embed.add_field(name="Uptime", value=format_uptime(uptime_seconds), inline=True)
    for name, value in LINKS.items():
        embed.add_field(name=name, value=value, inline=True)
    embed.set_footer(text="Sent by HLTVBot")
    return embed


class General(commands.Cog):
    def __init__(self, bot: discord.Bot):
        self.bot = bot
        self.started = time.monotonic()

    @slash_command(name="hltv", description="Bot help, latency and statistics")
    async def hltv(
        self,
        ctx: discord.ApplicationContext,
        what: Annotated[str, Option(str, "What to show", choices=["help", "ping", "stats"], default="help")],
    ):
        if what == "ping":
            sent = time.perf_counter()
            await ctx.respond("Calculating")
            round_trip = round((time.perf_counter() - sent) * 1000)
            await ctx.edit(
                content=f"Latency is {round_trip}ms. API Latency is {round(self.bot.latency * 1000)}ms"
            )
        elif what == "stats":
            counts = serving_counts(self.bot.guilds, EXCLUDED_GUILD_ID)
            avatar = self.bot.user.display_avatar.url if self.bot.user else None
            await ctx.respond(embed=stats_embed(counts, time.monotonic() - self.started, avatar))
        else:
            await ctx.respond(embed=help_embed())


def setup(bot: discord.Bot):
    bot.add_cog(General(bot))

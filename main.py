# main.py
import logging, discord

from config import DISCORD_BOT_TOKEN, LOG_LEVEL, GUILD_ID, IS_DEV, EXCLUDED_GUILD_ID
from utils import hltv_client
from cogs.general import serving_counts

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
log = logging.getLogger("hltvbot")

intents = discord.Intents.default()
intents.guilds = True
intents.messages = True
intents.reactions = True
intents.members = True

bot = discord.Bot(intents=intents, debug_guilds=[GUILD_ID] if GUILD_ID else None)

# Load cogs
bot.load_extension("cogs.general")
bot.load_extension("cogs.matches")
bot.load_extension("cogs.teams")
bot.load_extension("cogs.players")
bot.load_extension("cogs.news")


@bot.event
async def on_ready():
    c = serving_counts(bot.guilds, EXCLUDED_GUILD_ID)
    log.info(
        "HLTVBot is currently serving %d users, in %d channels of %d servers. Alongside %d bot brothers.",
        c["users"], c["channels"], c["servers"], c["bots"],
    )
    activity = discord.Activity(type=discord.ActivityType.listening, name="(DEV) /hltv" if IS_DEV else "/hltv")
    await bot.change_presence(activity=activity)
    log.info("Logged in as %s (%s)", bot.user, bot.user.id)


@bot.event
async def on_guild_join(guild: discord.Guild):
    log.info("New guild joined: %s (id: %s). This guild has %s members!", guild.name, guild.id, guild.member_count)


@bot.event
async def on_guild_remove(guild: discord.Guild):
    log.info("I have been removed from: %s (id: %s)", guild.name, guild.id)


@bot.event
async def on_application_command_error(ctx: discord.ApplicationContext, error: discord.DiscordException):
    log.exception("Error in /%s", getattr(ctx.command, "qualified_name", "?"), exc_info=error)
    try:
        if ctx.response.is_done():
            await ctx.followup.send("❌ An unexpected error occurred. Please try again later.", ephemeral=True)
        else:
            await ctx.respond("❌ An unexpected error occurred. Please try again later.", ephemeral=True)
    except discord.HTTPException as e:
        log.warning("Could not report command error: %s", e)


@bot.listen("on_disconnect")
async def _close_http():
    await hltv_client.close()


if __name__ == "__main__":
    bot.run(DISCORD_BOT_TOKEN)

from dotenv import load_dotenv; load_dotenv()
import os

ENV = os.getenv("ENV", "production").lower()
IS_DEV = ENV == "development"

def _req(name: str) -> str:
    v = os.getenv(name)
    if not v:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return v

def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        return default

def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None or v == "":
        return default
    return v.strip().lower() in {"1", "true", "yes", "on"}

DISCORD_BOT_TOKEN = _req("DISCORD_BOT_TOKEN")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
GUILD_ID = int(os.getenv("GUILD_ID")) if os.getenv("GUILD_ID") else None

HLTV_API_URL = os.getenv("HLTV_API_URL", "http://localhost:3000").rstrip("/")
HLTV_USER_AGENT = os.getenv("HLTV_USER_AGENT", "HLTVBot")
BOT_VERSION = os.getenv("BOT_VERSION", "1.4.13")

# guild left out of the serving counts (bot list test server)
EXCLUDED_GUILD_ID = int(os.getenv("EXCLUDED_GUILD_ID")) if os.getenv("EXCLUDED_GUILD_ID") else None

# Paginated embeds
PAGINATION_TIMEOUT: float = _env_float("PAGINATION_TIMEOUT", 60.0)
PAGINATION_RESET_ON_ACTIVITY: bool = _env_bool("PAGINATION_RESET_ON_ACTIVITY", False)
PAGINATION_DELETE_ON_STOP: bool = _env_bool("PAGINATION_DELETE_ON_STOP", True)

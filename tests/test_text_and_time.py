from utils.text import event_link, or_unknown, team_link, truncate, url_slug
from utils.time_format import discord_timestamp, format_uptime, from_epoch_ms


def test_url_slug():
    assert url_slug("Natus  Vincere") == "natus-vincere"
    assert url_slug("G2") == "g2"
    assert url_slug("") == ""


def test_links_degrade_without_ids():
    assert team_link({"name": "TBD"}) == "TBD"
    assert team_link({}) == "TBD"
    assert event_link({"name": "Some Cup"}) == "Some Cup"
    assert team_link({"id": 4608, "name": "Natus Vincere"}) == "[Natus Vincere](https://www.hltv.org/team/4608/natus-vincere)"


def test_or_unknown():
    assert or_unknown(None) == "Unknown"
    assert or_unknown("") == "Unknown"
    assert or_unknown(0) == "0"


def test_truncate():
    assert truncate("abc", 10) == "abc"
    assert truncate("a" * 20, 10) == "aaaaaaa..."


def test_epoch_ms_conversion():
    assert from_epoch_ms(None) is None
    assert from_epoch_ms("garbage") is None
    assert from_epoch_ms(True) is None
    assert from_epoch_ms(1700000000000).year == 2023
    assert discord_timestamp(1700000000000) == "<t:1700000000:F>"
    assert discord_timestamp(1700000000000, "R") == "<t:1700000000:R>"
    assert discord_timestamp(None) is None


def test_format_uptime():
    assert format_uptime(0) == "0H 0M 0S"
    assert format_uptime(3725) == "1H 2M 5S"
    assert format_uptime(90000) == "25H 0M 0S"
    assert format_uptime(-5) == "0H 0M 0S"

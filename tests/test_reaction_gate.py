import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, call

import discord
import pytest

from utils.pagination import (
    Controls,
    NavigationSession,
    PagedDataset,
    PageKind,
    ReactionGate,
    SessionState,
    paginate,
)
from utils.renderers import MatchPageRenderer

AUTHOR = 1
STRANGER = 2


def make_gate(bot, message, items, **kwargs):
    ds = PagedDataset.for_kind(PageKind.RESULTS, items)
    session = NavigationSession(ds, MatchPageRenderer(PageKind.RESULTS), message, author_id=AUTHOR)
    return ReactionGate(bot, session, **kwargs)


def reaction(symbol, user_id=AUTHOR, message_id=4242):
    return SimpleNamespace(emoji=symbol, user_id=user_id, message_id=message_id)


async def settle():
    # let scheduled edit/delete tasks run
    for _ in range(3):
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_registers_listeners_and_timer(fake_bot, message, matches):
    gate = make_gate(fake_bot, message, matches)
    assert gate.on_raw_reaction_add in fake_bot.listeners["on_raw_reaction_add"]
    assert gate.on_raw_message_delete in fake_bot.listeners["on_raw_message_delete"]
    assert gate._timer is not None
    gate.close()


@pytest.mark.asyncio
async def test_attach_reactions_in_order(fake_bot, message, matches):
    gate = make_gate(fake_bot, message, matches)
    await gate.attach_reactions()
    assert message.add_reaction.await_args_list == [call("⬅"), call("⏹"), call("➡")]
    gate.close()


@pytest.mark.asyncio
async def test_other_users_are_ignored(fake_bot, message, matches):
    gate = make_gate(fake_bot, message, matches)

    assert gate.handle(Controls.NEXT, STRANGER) is False
    assert gate.handle(Controls.STOP, STRANGER) is False
    await fake_bot.dispatch("on_raw_reaction_add", reaction(Controls.NEXT, user_id=STRANGER))
    await settle()

    assert gate.session.current_index == 0
    assert gate.session.active
    message.edit.assert_not_called()
    gate.close()


@pytest.mark.asyncio
async def test_unknown_symbols_and_other_messages_are_ignored(fake_bot, message, matches):
    gate = make_gate(fake_bot, message, matches)

    assert gate.handle("👍", AUTHOR) is False
    await fake_bot.dispatch("on_raw_reaction_add", reaction(Controls.NEXT, message_id=1))
    await settle()

    assert gate.session.current_index == 0
    message.edit.assert_not_called()
    gate.close()


@pytest.mark.asyncio
async def test_author_navigates_through_raw_events(fake_bot, message, matches):
    gate = make_gate(fake_bot, message, matches)

    await fake_bot.dispatch("on_raw_reaction_add", reaction(Controls.NEXT))
    await fake_bot.dispatch("on_raw_reaction_add", reaction(Controls.NEXT))
    await fake_bot.dispatch("on_raw_reaction_add", reaction(Controls.PREV))
    await settle()

    assert gate.session.current_index == 3
    assert message.edit.await_count == 3
    gate.close()


@pytest.mark.asyncio
async def test_stop_tears_down_once_and_unsubscribes(fake_bot, message, matches):
    gate = make_gate(fake_bot, message, matches)
    await fake_bot.dispatch("on_raw_reaction_add", reaction(Controls.NEXT))
    await fake_bot.dispatch("on_raw_reaction_add", reaction(Controls.STOP))
    await settle()

    assert gate.session.state is SessionState.STOPPED
    assert not gate.listening
    assert gate._timer is None
    assert fake_bot.listeners["on_raw_reaction_add"] == []
    message.delete.assert_awaited_once()

    edits = message.edit.await_count
    await fake_bot.dispatch("on_raw_reaction_add", reaction(Controls.NEXT))
    assert gate.handle(Controls.NEXT, AUTHOR) is False
    await settle()
    assert message.edit.await_count == edits
    message.delete.assert_awaited_once()


@pytest.mark.asyncio
async def test_timer_expiry_stops_session(fake_bot, message, matches):
    gate = make_gate(fake_bot, message, matches, timeout=0.01)
    await asyncio.sleep(0.05)
    await settle()

    assert gate.session.state is SessionState.STOPPED
    assert not gate.listening
    message.delete.assert_awaited_once()
    assert gate.handle(Controls.NEXT, AUTHOR) is False


@pytest.mark.asyncio
async def test_window_is_absolute_by_default(fake_bot, message, matches):
    gate = make_gate(fake_bot, message, matches, timeout=60)
    deadline = gate._timer.when()
    await asyncio.sleep(0.01)
    gate.handle(Controls.NEXT, AUTHOR)
    assert gate._timer.when() == deadline
    gate.close()


@pytest.mark.asyncio
async def test_reset_on_activity_rearms_timer(fake_bot, message, matches):
    gate = make_gate(fake_bot, message, matches, timeout=60, reset_on_activity=True)
    deadline = gate._timer.when()
    await asyncio.sleep(0.01)
    gate.handle(Controls.NEXT, AUTHOR)
    assert gate._timer.when() > deadline
    gate.close()


@pytest.mark.asyncio
async def test_message_delete_event_releases_without_calls(fake_bot, message, matches):
    gate = make_gate(fake_bot, message, matches)
    await fake_bot.dispatch("on_raw_message_delete", SimpleNamespace(message_id=4242))

    assert gate.session.state is SessionState.STOPPED
    assert not gate.listening
    message.delete.assert_not_called()
    message.clear_reactions.assert_not_called()


@pytest.mark.asyncio
async def test_paginate_sends_first_page_and_attaches(fake_bot, message, matches):
    ctx = MagicMock()
    ctx.bot = fake_bot
    ctx.author.id = AUTHOR
    ctx.response.is_done = MagicMock(return_value=True)
    ctx.defer = AsyncMock()
    ctx.followup.send = AsyncMock(return_value=message)

    ds = PagedDataset.for_kind(PageKind.RESULTS, matches)
    gate = await paginate(ctx, ds, MatchPageRenderer(PageKind.RESULTS))

    ctx.defer.assert_not_called()
    kwargs = ctx.followup.send.await_args.kwargs
    assert kwargs["wait"] is True
    assert kwargs["embed"].footer.text == "Page 1 of 3"
    assert kwargs["embed"].footer.icon_url == "https://cdn.test/avatar.png"
    assert message.add_reaction.await_count == 3
    assert gate.session.author_id == AUTHOR
    assert gate.session.message is message
    assert gate.listening
    gate.close()


@pytest.mark.asyncio
async def test_paginate_defers_when_not_yet_responded(fake_bot, message, matches):
    ctx = MagicMock()
    ctx.bot = fake_bot
    ctx.author.id = AUTHOR
    ctx.response.is_done = MagicMock(return_value=False)
    ctx.defer = AsyncMock()
    ctx.followup.send = AsyncMock(return_value=message)

    gate = await paginate(ctx, PagedDataset.for_kind(PageKind.RESULTS, matches), MatchPageRenderer(PageKind.RESULTS))
    ctx.defer.assert_awaited_once()
    gate.close()


@pytest.mark.asyncio
async def test_edit_on_vanished_message_closes_gate(fake_bot, message, matches):
    response = MagicMock()
    response.status = 404
    response.reason = "Not Found"
    message.edit.side_effect = discord.NotFound(response, "Unknown Message")
    gate = make_gate(fake_bot, message, matches)

    await fake_bot.dispatch("on_raw_reaction_add", reaction(Controls.NEXT))
    await settle()

    assert gate.session.state is SessionState.STOPPED
    assert not gate.listening
    assert gate._timer is None
    assert fake_bot.listeners["on_raw_reaction_add"] == []
    assert fake_bot.listeners["on_raw_message_delete"] == []
    message.delete.assert_not_called()

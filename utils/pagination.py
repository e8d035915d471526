# utils/pagination.py
"""
Reaction-driven paginated embeds.

A command builds a `PagedDataset`, picks a renderer and hands both to
`paginate()`. From then on a `ReactionGate` listens for ⬅ ⏹ ➡ reactions from
the command author on that one message and drives a `NavigationSession`
until STOP, the timer, or the message disappearing.

Message edits are fire-and-forget: the index moves synchronously and the
edit is scheduled as a task, so two quick reactions can land their edits out
of order (last write seen wins). The index itself is always right.
"""
from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Sequence

import discord

from utils.renderers import DisplayDocument, PageRenderer

log = logging.getLogger(__name__)

IDLE_TIMEOUT = 60.0


class Controls:
    PREV = "⬅"
    NEXT = "➡"
    STOP = "⏹"

    # order the reactions are added in
    ALL = (PREV, STOP, NEXT)


class PageKind(Enum):
    RESULTS = "results"
    MATCHES = "matches"
    LIVE_MATCHES = "live_matches"
    TEAM_MAPS = "team_maps"
    EVENTS = "events"


DEFAULT_PAGE_SIZES: dict[PageKind, int] = {
    PageKind.RESULTS: 3,
    PageKind.MATCHES: 3,
    PageKind.LIVE_MATCHES: 5,
    PageKind.TEAM_MAPS: 3,
    PageKind.EVENTS: 3,
}


@dataclass(frozen=True)
class PagedDataset:
    items: tuple = field(default_factory=tuple)
    page_size: int = 3
    kind: PageKind = PageKind.RESULTS

    def __post_init__(self):
        if not isinstance(self.page_size, int) or self.page_size < 1:
            raise ValueError(f"page_size must be a positive integer, got {self.page_size!r}")
        # freeze whatever sequence we were given
        object.__setattr__(self, "items", tuple(self.items))

    @classmethod
    def for_kind(cls, kind: PageKind, items: Sequence[Any]) -> "PagedDataset":
        return cls(items=tuple(items), page_size=DEFAULT_PAGE_SIZES[kind], kind=kind)

    def __len__(self) -> int:
        return len(self.items)

    def page_slice(self, start_index: int) -> tuple:
        if start_index < 0:
            start_index = 0
        return self.items[start_index:start_index + self.page_size]

    def page_count(self) -> int:
        return max(1, math.ceil(len(self.items) / self.page_size))

    def page_number(self, start_index: int) -> int:
        return start_index // self.page_size + 1

    def clamp_forward(self, index: int) -> int:
        # No snapping back to the last full page: an overrun is a no-op.
        nxt = index + self.page_size
        return nxt if nxt <= len(self.items) - 1 else index

    def clamp_backward(self, index: int) -> int:
        return max(0, index - self.page_size)


class SessionState(Enum):
    ACTIVE = "active"
    STOPPED = "stopped"


class NavigationSession:
    """Page index + dataset + renderer bound to one sent message."""

    def __init__(
        self,
        dataset: PagedDataset,
        renderer: PageRenderer,
        message: discord.Message,
        author_id: int,
        *,
        delete_on_stop: bool = True,
        footer_icon_url: Optional[str] = None,
    ):
        self.dataset: Optional[PagedDataset] = dataset
        self.renderer: Optional[PageRenderer] = renderer
        self.message = message
        self.author_id = author_id
        self.delete_on_stop = delete_on_stop
        self.footer_icon_url = footer_icon_url
        self.current_index = 0
        self.state = SessionState.ACTIVE
        self._tasks: set[asyncio.Task] = set()
        # called once when the message turns out to be gone (set by ReactionGate)
        self.on_gone: Optional[Callable[[], None]] = None

    @property
    def active(self) -> bool:
        return self.state is SessionState.ACTIVE

    def render(self) -> DisplayDocument:
        """Current page. Only valid while ACTIVE; a stopped session has released its data."""
        if not self.active:
            raise RuntimeError("cannot render a stopped pagination session")
        return self.renderer.render(self.dataset.page_slice(self.current_index), self.current_index, self.dataset)

    # ---------- transitions ----------

    def on_prev(self) -> Optional[asyncio.Task]:
        if not self.active:
            return None
        self.current_index = self.dataset.clamp_backward(self.current_index)
        return self._push_update()

    def on_next(self) -> Optional[asyncio.Task]:
        if not self.active:
            return None
        self.current_index = self.dataset.clamp_forward(self.current_index)
        return self._push_update()

    def on_stop(self) -> Optional[asyncio.Task]:
        if not self.active:
            return None
        self._release()
        if self.delete_on_stop:
            return self._spawn(self._teardown(self.message.delete()), "delete")
        return self._spawn(self._teardown(self.message.clear_reactions()), "clear reactions")

    def on_timeout(self) -> Optional[asyncio.Task]:
        log.debug("Pagination on message %s timed out", getattr(self.message, "id", None))
        return self.on_stop()

    def on_message_gone(self) -> None:
        """The message was deleted out from under us; nothing left to clean up remotely."""
        if not self.active:
            return
        self._release()
        if self.on_gone is not None:
            self.on_gone()

    # ---------- internals ----------

    def _release(self) -> None:
        self.state = SessionState.STOPPED
        self.dataset = None
        self.renderer = None

    def _push_update(self) -> asyncio.Task:
        embed = self.render().to_embed(self.footer_icon_url)
        return self._spawn(self._edit(embed), "edit")

    def _spawn(self, coro, what: str) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro, name=f"pagination-{what}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _edit(self, embed: discord.Embed) -> None:
        try:
            await self.message.edit(embed=embed)
        except discord.NotFound:
            log.info("Paginated message %s is gone; stopping session", getattr(self.message, "id", None))
            self.on_message_gone()
        except discord.HTTPException as e:
            log.warning("Failed to update paginated message %s: %s", getattr(self.message, "id", None), e)

    async def _teardown(self, coro) -> None:
        try:
            await coro
        except discord.NotFound:
            pass
        except discord.HTTPException as e:
            log.warning("Failed to tear down paginated message %s: %s", getattr(self.message, "id", None), e)


class ReactionGate:
    """
    Bridges raw reaction events on one message to a NavigationSession.

    Only the three control symbols from the session's author are accepted;
    everything else is ignored silently. The timer is armed once at
    construction and, by default, is NOT reset by activity: the session lives
    at most `timeout` seconds from start. Pass `reset_on_activity=True` to get
    an inactivity window instead.
    """

    def __init__(
        self,
        bot: discord.Client,
        session: NavigationSession,
        *,
        timeout: float = IDLE_TIMEOUT,
        reset_on_activity: bool = False,
    ):
        self.bot = bot
        self.session = session
        self.timeout = timeout
        self.reset_on_activity = reset_on_activity
        self.listening = True
        self._loop = asyncio.get_running_loop()
        self._timer: Optional[asyncio.TimerHandle] = self._loop.call_later(timeout, self._on_timer)
        bot.add_listener(self.on_raw_reaction_add, "on_raw_reaction_add")
        bot.add_listener(self.on_raw_message_delete, "on_raw_message_delete")
        session.on_gone = self.close

    @property
    def message_id(self) -> Optional[int]:
        return getattr(self.session.message, "id", None)

    async def attach_reactions(self) -> None:
        for symbol in Controls.ALL:
            if not self.listening:
                return
            try:
                await self.session.message.add_reaction(symbol)
            except discord.NotFound:
                self.session.on_message_gone()
                self.close()
                return
            except discord.HTTPException as e:
                log.warning("Could not add %s to message %s: %s", symbol, self.message_id, e)

    def handle(self, symbol: str, user_id: int) -> bool:
        """Forward one reaction; returns True if it was accepted."""
        if not self.listening or not self.session.active:
            return False
        if symbol not in Controls.ALL or user_id != self.session.author_id:
            return False

        if symbol == Controls.STOP:
            self.session.on_stop()
            self.close()
            return True

        if symbol == Controls.PREV:
            self.session.on_prev()
        else:
            self.session.on_next()

        if self.reset_on_activity:
            self._arm()
        return True

    def close(self) -> None:
        if not self.listening:
            return
        self.listening = False
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self.bot.remove_listener(self.on_raw_reaction_add, "on_raw_reaction_add")
        self.bot.remove_listener(self.on_raw_message_delete, "on_raw_message_delete")

    # ---------- listeners ----------

    async def on_raw_reaction_add(self, payload: discord.RawReactionActionEvent) -> None:
        if payload.message_id != self.message_id:
            return
        self.handle(str(payload.emoji), payload.user_id)

    async def on_raw_message_delete(self, payload: discord.RawMessageDeleteEvent) -> None:
        if payload.message_id != self.message_id:
            return
        self.session.on_message_gone()
        self.close()

    # ---------- timer ----------

    def _arm(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = self._loop.call_later(self.timeout, self._on_timer)

    def _on_timer(self) -> None:
        self._timer = None
        if self.session.active:
            self.session.on_timeout()
        self.close()


async def paginate(
    ctx: discord.ApplicationContext,
    dataset: PagedDataset,
    renderer: PageRenderer,
    *,
    timeout: float = IDLE_TIMEOUT,
    reset_on_activity: bool = False,
    delete_on_stop: bool = True,
) -> ReactionGate:
    """Send the first page of `dataset` and start listening for navigation reactions."""
    bot = ctx.bot
    icon = bot.user.display_avatar.url if bot.user else None

    first = renderer.render(dataset.page_slice(0), 0, dataset)
    if not ctx.response.is_done():
        await ctx.defer()
    message = await ctx.followup.send(embed=first.to_embed(icon), wait=True)

    session = NavigationSession(
        dataset, renderer, message, ctx.author.id,
        delete_on_stop=delete_on_stop, footer_icon_url=icon,
    )
    gate = ReactionGate(bot, session, timeout=timeout, reset_on_activity=reset_on_activity)
    await gate.attach_reactions()
    log.debug("Started %s pagination on message %s (%d items)", dataset.kind.name, message.id, len(dataset))
    return gate

"""Named event hooks.

Handlers are called in registration order with the positional arguments
given to :meth:`Hooks.call_all`. A handler may be a plain function or return
an awaitable; awaitables are awaited before the next handler runs so a single
event is processed sequentially. A failing handler is logged and does not
prevent the remaining handlers from running.
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Union

logger = logging.getLogger(__name__)

HookFn = Callable[..., Any]


@dataclass(frozen=True)
class _Registration:
    hook_id: int
    fn: HookFn
    once: bool


class Hooks:
    """Registry of hook handlers keyed by event name."""

    def __init__(self) -> None:
        self._events: Dict[str, List[_Registration]] = {}
        self._next_id = 1

    def _register(self, event: str, fn: HookFn, once: bool) -> int:
        hook_id = self._next_id
        self._next_id += 1
        self._events.setdefault(event, []).append(_Registration(hook_id, fn, once))
        return hook_id

    def on(self, event: str, fn: HookFn) -> int:
        """Register ``fn`` for every ``event``; returns a hook id for :meth:`off`."""
        return self._register(event, fn, once=False)

    def once(self, event: str, fn: HookFn) -> int:
        """Register ``fn`` for the next ``event`` only."""
        return self._register(event, fn, once=True)

    def off(self, event: str, fn_or_id: Union[HookFn, int]) -> None:
        """Remove a handler by hook id or by function."""
        self._events[event] = [
            reg
            for reg in self._events.get(event, [])
            if reg.hook_id != fn_or_id and reg.fn is not fn_or_id
        ]

    def handlers(self, event: str) -> List[HookFn]:
        return [reg.fn for reg in self._events.get(event, [])]

    async def call_all(self, event: str, *args: Any) -> None:
        """Call every handler registered for ``event``."""
        registrations = list(self._events.get(event, []))
        for reg in registrations:
            if reg.once:
                self.off(event, reg.hook_id)
            try:
                result = reg.fn(*args)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Error in %s hook handler %r", event, reg.fn)

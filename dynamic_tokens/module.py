"""Host adapter for the dynamic token module.

Wires the pure reactor into the host: registers settings on ``init`` and
reacts to ``updateActor``. Settings are read once per event into a
:class:`dynamic_tokens.events.ReactorConfig`; the reactor never touches them
directly.

Example
-------
>>> import asyncio
>>> from dynamic_tokens.world import WorldStore
>>> world = WorldStore()
>>> module = DynamicTokens(user_id="gm", world=world)
>>> module.install(world.hooks)
>>> asyncio.run(world.hooks.call_all("init"))
"""

import logging
from typing import Any, List, Mapping, Optional, Protocol

from dynamic_tokens.config import Settings, settings as default_settings
from dynamic_tokens.documents import Actor
from dynamic_tokens.events import ReactorConfig, TokenUpdate, UpdateEvent
from dynamic_tokens.hooks import Hooks
from dynamic_tokens.settings import (
    HP_PATH_SETTING,
    MODULE_ID,
    RESOLUTION_SETTING,
    SettingsRegistry,
    register_module_settings,
)
from dynamic_tokens.state import State
from dynamic_tokens.systems.reactor import react
from dynamic_tokens.types import ResolutionStrategy, UserID
from dynamic_tokens.world import UPDATE_ACTOR_HOOK

logger = logging.getLogger(__name__)

INIT_HOOK = "init"


class World(Protocol):
    """What the module needs from the host: a snapshot and a token writer."""

    @property
    def state(self) -> State: ...

    async def update_token(self, update: TokenUpdate) -> None: ...


class DynamicTokens:
    """The module instance running on one client."""

    def __init__(
        self,
        user_id: UserID,
        world: World,
        registry: Optional[SettingsRegistry] = None,
        defaults: Settings = default_settings,
    ):
        self.user_id = user_id
        self.world = world
        self.registry = registry if registry is not None else SettingsRegistry()
        self.defaults = defaults

    def install(self, hooks: Hooks) -> None:
        hooks.once(INIT_HOOK, self.on_init)
        hooks.on(UPDATE_ACTOR_HOOK, self.on_update_actor)

    def on_init(self) -> None:
        register_module_settings(self.registry, self.defaults)
        logger.info("%s settings registered", MODULE_ID)

    def reactor_config(self) -> ReactorConfig:
        return ReactorConfig(
            user_id=self.user_id,
            attribute_path=self.registry.get(MODULE_ID, HP_PATH_SETTING),
            strategy=ResolutionStrategy(self.registry.get(MODULE_ID, RESOLUTION_SETTING)),
        )

    async def on_update_actor(
        self,
        actor: Actor,
        changes: Mapping[str, Any],
        options: Mapping[str, Any],
        user_id: UserID,
    ) -> List[TokenUpdate]:
        """``updateActor`` handler; returns the writes that were attempted."""
        if user_id != self.user_id:
            return []
        event = UpdateEvent(actor=actor, changes=changes, options=options, user_id=user_id)
        updates = react(self.world.state, event, self.reactor_config())
        for update in updates:
            try:
                await self.world.update_token(update)
            except Exception:
                logger.exception("Failed to update token %s", update.token_id)
        return updates

"""Game settings registry and the settings this module registers.

The registry mirrors the host's settings API: a setting must be registered
under ``(namespace, key)`` before it can be read or written, and values are
coerced to the registered type on write. Stores are persistent maps; the
registry object itself is the single mutable holder.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from pyrsistent import pmap
from pyrsistent.typing import PMap

from dynamic_tokens.config import Settings
from dynamic_tokens.types import ResolutionStrategy, SettingScope

logger = logging.getLogger(__name__)

MODULE_ID = "dynamic-tokens"

HP_PATH_SETTING = "hpPath"
RESOLUTION_SETTING = "resolution"

SettingKey = Tuple[str, str]


class SettingNotRegisteredError(KeyError):
    """Raised when reading or writing a ``(namespace, key)`` never registered."""

    def __init__(self, namespace: str, key: str):
        super().__init__(f"{namespace}.{key} is not a registered game setting")
        self.namespace = namespace
        self.key = key


@dataclass(frozen=True)
class SettingConfig:
    """Registration metadata for one setting.

    Attributes:
        name: Label shown in the settings dialog.
        hint: Help text shown under the label.
        scope: ``world`` (shared) or ``client`` (per browser).
        config: Whether the setting appears in the settings dialog.
        type: Callable coercing raw values (``str``, ``int``, ``bool``...).
        default: Value returned until the setting is written.
        choices: Allowed values, if restricted.
    """

    name: str
    hint: str = ""
    scope: SettingScope = SettingScope.WORLD
    config: bool = True
    type: Callable[[Any], Any] = str
    default: Any = None
    choices: Optional[Tuple[Any, ...]] = None


class SettingsRegistry:
    """Registered settings and their stored values."""

    def __init__(self) -> None:
        self._configs: PMap[SettingKey, SettingConfig] = pmap()
        self._values: PMap[SettingKey, Any] = pmap()

    def register(self, namespace: str, key: str, config: SettingConfig) -> None:
        self._configs = self._configs.set((namespace, key), config)

    def is_registered(self, namespace: str, key: str) -> bool:
        return (namespace, key) in self._configs

    def config(self, namespace: str, key: str) -> SettingConfig:
        try:
            return self._configs[(namespace, key)]
        except KeyError:
            raise SettingNotRegisteredError(namespace, key) from None

    def get(self, namespace: str, key: str) -> Any:
        """Return the stored value or the registered default."""
        config = self.config(namespace, key)
        return self._values.get((namespace, key), config.default)

    def set(self, namespace: str, key: str, value: Any) -> Any:
        """Coerce and store ``value``; returns the stored value.

        Raises:
            SettingNotRegisteredError: If the setting was never registered.
            ValueError: If ``value`` is outside the registered choices.
        """
        config = self.config(namespace, key)
        coerced = config.type(value)
        if config.choices is not None and coerced not in config.choices:
            raise ValueError(
                f"{namespace}.{key} must be one of {config.choices}, got {coerced!r}"
            )
        self._values = self._values.set((namespace, key), coerced)
        logger.debug("Setting %s.%s = %r", namespace, key, coerced)
        return coerced


def register_module_settings(registry: SettingsRegistry, defaults: Settings) -> None:
    """Register this module's world settings, seeded from ``defaults``."""
    registry.register(
        MODULE_ID,
        HP_PATH_SETTING,
        SettingConfig(
            name="HP Attribute Path",
            hint=(
                "The dot-path on the actor where HP lives. The module reads "
                ".value and .max from this path. Default works for D&D 5e."
            ),
            scope=SettingScope.WORLD,
            config=True,
            type=str,
            default=defaults.attribute_path,
        ),
    )
    registry.register(
        MODULE_ID,
        RESOLUTION_SETTING,
        SettingConfig(
            name="Threshold Matching",
            hint=(
                "ascending: the lowest threshold at or above the HP percentage "
                "applies; no change above every threshold. descending: scan from "
                "the highest threshold and fall back to its image."
            ),
            scope=SettingScope.WORLD,
            config=True,
            type=str,
            default=defaults.resolution.value,
            choices=tuple(strategy.value for strategy in ResolutionStrategy),
        ),
    )

"""
Configuration of fake request factories, routers and logging.

Values are stored together with the priority they were given with, so that
defaults loaded from :mod:`fakexhr.settings.default_settings` never replace
values passed by the user, whatever the order they are applied in.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping, MutableMapping
from typing import TYPE_CHECKING, Any

from fakexhr.settings import default_settings

if TYPE_CHECKING:
    from types import ModuleType

    # typing.Self requires Python 3.11
    from typing_extensions import Self


SETTINGS_PRIORITIES: dict[str, int] = {
    "default": 0,
    "project": 20,
    "cmdline": 40,
}


def get_settings_priority(priority: int | str) -> int:
    """Translate a named priority from :data:`SETTINGS_PRIORITIES`, numbers
    are returned unchanged."""
    if isinstance(priority, str):
        return SETTINGS_PRIORITIES[priority]
    return priority


class SettingsAttribute:
    def __init__(self, value: Any, priority: int):
        self.value: Any = value
        self.priority: int = priority

    def set(self, value: Any, priority: int) -> None:
        if priority >= self.priority:
            self.value = value
            self.priority = priority

    def __repr__(self) -> str:
        return f"<SettingsAttribute value={self.value!r} priority={self.priority}>"


class BaseSettings(MutableMapping[str, Any]):
    """
    Mapping of setting names to values, with typed getters for values that
    may come in as strings (e.g. ``CHUNK_SIZE="4"`` or
    ``ROUTER_AUTORESPOND="false"``).

    Missing settings read as ``None``. Once frozen, any modification raises
    :exc:`TypeError`.
    """

    def __init__(
        self,
        values: Mapping[str, Any] | None = None,
        priority: int | str = "project",
    ):
        self.frozen: bool = False
        self.attributes: dict[str, SettingsAttribute] = {}
        if values:
            self.update(values, priority)

    def __getitem__(self, name: str) -> Any:
        attribute = self.attributes.get(name)
        return None if attribute is None else attribute.value

    def __contains__(self, name: object) -> bool:
        return name in self.attributes

    def __iter__(self) -> Iterator[str]:
        return iter(self.attributes)

    def __len__(self) -> int:
        return len(self.attributes)

    def get(self, name: str, default: Any = None) -> Any:
        value = self[name]
        return default if value is None else value

    def getbool(self, name: str, default: bool = False) -> bool:
        """
        ``1``, ``'1'``, ``True``, ``'True'`` and ``'true'`` read as ``True``;
        ``0``, ``'0'``, ``False``, ``'False'`` and ``'false'`` as ``False``.
        Anything else raises :exc:`ValueError`.
        """
        value = self.get(name, default)
        if value in ("True", "true"):
            return True
        if value in ("False", "false"):
            return False
        try:
            return bool(int(value))
        except ValueError:
            raise ValueError(
                f"Cannot read setting {name}={value!r} as a boolean, use 0/1, "
                "True/False, '0'/'1', 'True'/'False' or 'true'/'false'"
            )

    def getint(self, name: str, default: int = 0) -> int:
        return int(self.get(name, default))

    def getlist(self, name: str, default: list[Any] | None = None) -> list[Any]:
        """Comma-separated strings are split, empty values give ``[]``."""
        value = self.get(name, default)
        if not value:
            return []
        if isinstance(value, str):
            return value.split(",")
        return list(value)

    def getpriority(self, name: str) -> int | None:
        attribute = self.attributes.get(name)
        return None if attribute is None else attribute.priority

    def set(self, name: str, value: Any, priority: int | str = "project") -> None:
        """Store ``value`` unless ``name`` already holds a value given with a
        higher priority."""
        self._assert_mutability()
        priority = get_settings_priority(priority)
        if name in self.attributes:
            self.attributes[name].set(value, priority)
        else:
            self.attributes[name] = SettingsAttribute(value, priority)

    def __setitem__(self, name: str, value: Any) -> None:
        self.set(name, value)

    def __delitem__(self, name: str) -> None:
        self._assert_mutability()
        del self.attributes[name]

    # BaseSettings.update() takes a priority instead of keyword arguments
    def update(  # type: ignore[override]
        self, values: Mapping[str, Any], priority: int | str = "project"
    ) -> None:
        """Set every item of ``values``. Items of another
        :class:`BaseSettings` keep the priority they have there."""
        self._assert_mutability()
        for name, value in values.items():
            if isinstance(values, BaseSettings):
                self.set(name, value, values.attributes[name].priority)
            else:
                self.set(name, value, priority)

    def setmodule(self, module: ModuleType, priority: int | str = "project") -> None:
        for name in dir(module):
            if name.isupper():
                self.set(name, getattr(module, name), priority)

    def _assert_mutability(self) -> None:
        if self.frozen:
            raise TypeError("Trying to modify an immutable Settings object")

    def copy(self) -> Self:
        return copy.deepcopy(self)

    def freeze(self) -> None:
        self.frozen = True

    def frozencopy(self) -> Self:
        """Return an immutable deep copy, leaving these settings mutable."""
        settings = self.copy()
        settings.freeze()
        return settings


class Settings(BaseSettings):
    """
    :class:`BaseSettings` starting from the values of
    :mod:`fakexhr.settings.default_settings`, at ``default`` priority.
    """

    def __init__(
        self,
        values: Mapping[str, Any] | None = None,
        priority: int | str = "project",
    ):
        super().__init__()
        self.setmodule(default_settings, "default")
        if values:
            self.update(values, priority)

"""
This module contains data types used by fakexhr which are not included in the
Python Standard Library.

This module must not depend on any module outside the Standard Library.
"""

from __future__ import annotations

import collections
from typing import Any


class CaseInsensitiveDict(collections.UserDict):
    """A dict-like structure that allows case-insensitive lookups of string
    keys while remembering the casing each key was first stored with.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self._keys: dict[str, str] = {}
        super().__init__(*args, **kwargs)

    def __getitem__(self, key: str) -> Any:
        return super().__getitem__(self._keys[key.lower()])

    def __setitem__(self, key: str, value: Any) -> None:
        try:
            stored_key = self._keys[key.lower()]
        except KeyError:
            self._keys[key.lower()] = key
            stored_key = key
        super().__setitem__(stored_key, value)

    def __delitem__(self, key: str) -> None:
        stored_key = self._keys.pop(key.lower())
        super().__delitem__(stored_key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._keys

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {super().__repr__()}>"

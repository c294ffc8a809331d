"""Single-selection tab model that maps tab entities to output keys."""

from __future__ import annotations

import itertools
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Optional


@dataclass
class _Tab:
    text: str
    key: int


class DisplayTabs:
    """Ordered tabs, each labelled with text and carrying an output key.

    At most one tab is active at a time.
    """

    def __init__(self) -> None:
        self._tabs: dict[int, _Tab] = {}
        self._active: Optional[int] = None
        self._entities = itertools.count(1)

    def __len__(self) -> int:
        return len(self._tabs)

    def insert(self, text: str, key: int) -> int:
        """Append a tab and return the entity that identifies it."""
        entity = next(self._entities)
        self._tabs[entity] = _Tab(text, key)
        return entity

    def clear(self) -> None:
        """Remove every tab and the active selection."""
        self._tabs.clear()
        self._active = None

    def activate(self, entity: int) -> None:
        """Make ``entity`` the active tab."""
        if entity not in self._tabs:
            raise KeyError(entity)
        self._active = entity

    def activate_position(self, position: int) -> None:
        """Activate the tab at ``position``; positions out of range are ignored."""
        if 0 <= position < len(self._tabs):
            self._active = list(self._tabs)[position]

    def active(self) -> Optional[int]:
        """The active entity, if any."""
        return self._active

    def active_key(self) -> Optional[int]:
        """The output key of the active tab, if any."""
        if self._active is None:
            return None
        return self._tabs[self._active].key

    def key_of(self, entity: Optional[int]) -> Optional[int]:
        """The output key carried by ``entity``, or None if it is unknown."""
        tab = self._tabs.get(entity) if entity is not None else None
        return tab.key if tab is not None else None

    def text_of(self, entity: Optional[int]) -> Optional[str]:
        """The label of ``entity``, or None if it is unknown."""
        tab = self._tabs.get(entity) if entity is not None else None
        return tab.text if tab is not None else None

    def entities(self) -> Iterator[int]:
        """Entities in insertion order."""
        return iter(list(self._tabs))
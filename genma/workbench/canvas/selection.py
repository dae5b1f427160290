from __future__ import annotations
import logging
from typing import Iterable, List, Optional
from blinker import Signal
from ...core.element import Element, Rect
from ...core.store import ElementStore


logger = logging.getLogger(__name__)


class Selection:
    """
    The ids of the selected elements, without duplicates, in the order
    they were selected. This order has nothing to do with z-order, which
    belongs to the store.

    Ids whose element left the store are dropped, both when the store
    reports the removal and whenever the selection is read.
    """

    def __init__(self, store: ElementStore):
        self.store = store
        self._ids: List[str] = []
        self.changed = Signal()
        self.store.element_removed.connect(self._on_element_removed)

    def _on_element_removed(self, sender, *, element: Element, **kwargs):
        if element.id in self._ids:
            self._set([i for i in self._ids if i != element.id])

    def _set(self, ids: Iterable[str]):
        new_ids: List[str] = []
        for elem_id in ids:
            if elem_id not in new_ids:
                new_ids.append(elem_id)
        if new_ids == self._ids:
            return
        self._ids = new_ids
        logger.debug(f"Selection is now {new_ids}")
        self.changed.send(self, ids=list(new_ids))

    def current(self) -> List[str]:
        """Returns the selected ids that still exist in the store."""
        live = [i for i in self._ids if i in self.store]
        if len(live) != len(self._ids):
            self._set(live)
        return list(live)

    def elements(self) -> List[Element]:
        """The selected elements, in store order."""
        selected = set(self.current())
        return [e for e in self.store.list_elements() if e.id in selected]

    def __contains__(self, elem_id: object) -> bool:
        return elem_id in self.current()

    def __len__(self) -> int:
        return len(self.current())

    def __bool__(self) -> bool:
        return bool(self.current())

    @property
    def last(self) -> Optional[str]:
        ids = self.current()
        return ids[-1] if ids else None

    def set(self, ids: Iterable[str]):
        self._set(i for i in ids if i in self.store)

    def select_exclusive(self, elem_id: str):
        self.set([elem_id])

    def select_toggle(self, elem_id: str):
        ids = self.current()
        if elem_id in ids:
            ids.remove(elem_id)
        else:
            ids.append(elem_id)
        self.set(ids)

    def select_box(self, rect: Rect):
        """
        The selection becomes every element lying completely inside rect
        (canvas units). Elements that only overlap the box are left out.
        """
        x, y, w, h = rect
        if w < 0:
            x, w = x + w, -w
        if h < 0:
            y, h = y + h, -h
        self.set(
            e.id
            for e in self.store.list_elements()
            if e.is_inside((x, y, w, h))
        )

    def clear(self):
        self._set([])

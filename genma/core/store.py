import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional
from blinker import Signal
from .element import Element


logger = logging.getLogger(__name__)


class ElementStore:
    """
    The ordered collection of elements on a canvas. List order is z-order:
    later elements are drawn on top of earlier ones.

    Every change replaces a whole Element by id, so readers always see a
    consistent snapshot.
    """

    def __init__(self, elements: Optional[Iterable[Element]] = None):
        self._elements: List[Element] = []
        self._index: Dict[str, int] = {}

        # Signals
        self.element_added = Signal()
        self.element_updated = Signal()
        self.element_removed = Signal()
        # Fired once per mutating call, after the per-element signals.
        self.changed = Signal()

        if elements:
            for elem in elements:
                self._insert(elem)

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(list(self._elements))

    def __contains__(self, elem_id: object) -> bool:
        return elem_id in self._index

    def list_elements(self) -> List[Element]:
        return list(self._elements)

    def get(self, elem_id: str) -> Optional[Element]:
        index = self._index.get(elem_id)
        if index is None:
            return None
        return self._elements[index]

    def _insert(self, elem: Element):
        if elem.id in self._index:
            raise ValueError(f"Duplicate element id {elem.id}")
        self._index[elem.id] = len(self._elements)
        self._elements.append(elem)

    def _reindex(self):
        self._index = {e.id: i for i, e in enumerate(self._elements)}

    def append_element(self, elem: Element) -> str:
        self._insert(elem)
        logger.debug(f"Added {elem.kind.value} element {elem.id}")
        self.element_added.send(self, element=elem)
        self.changed.send(self)
        return elem.id

    def append_elements(self, batch: Iterable[Element]) -> List[str]:
        """
        Appends a batch in one shot, e.g. a generated layout. Listeners
        see one `changed` notification for the whole batch. A duplicate
        id rejects the whole batch and leaves the store untouched.
        """
        added = list(batch)
        seen = set(self._index)
        for elem in added:
            if elem.id in seen:
                raise ValueError(f"Duplicate element id {elem.id}")
            seen.add(elem.id)
        for elem in added:
            self._insert(elem)
        for elem in added:
            self.element_added.send(self, element=elem)
        if added:
            logger.debug(f"Added batch of {len(added)} elements")
            self.changed.send(self)
        return [e.id for e in added]

    def patch_element(self, elem_id: str, **fields: Any):
        """
        Replaces the element with a copy carrying the given fields. An
        unknown id is ignored; the caller may hold a stale reference.
        """
        index = self._index.get(elem_id)
        if index is None:
            logger.debug(f"Ignoring patch for missing element {elem_id}")
            return
        old = self._elements[index]
        new = old.evolve(**fields)
        if new == old:
            return
        self._elements[index] = new
        self.element_updated.send(self, element=new, previous=old)
        self.changed.send(self)

    def remove_elements(self, elem_ids: Iterable[str]) -> List[Element]:
        doomed = set(elem_ids)
        removed = [e for e in self._elements if e.id in doomed]
        if not removed:
            return []
        self._elements = [e for e in self._elements if e.id not in doomed]
        self._reindex()
        for elem in removed:
            self.element_removed.send(self, element=elem)
        logger.debug(f"Removed {len(removed)} elements")
        self.changed.send(self)
        return removed

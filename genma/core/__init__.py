from .element import Element, ElementKind, MIN_ELEMENT_SIZE
from .store import ElementStore

__all__ = [
    "Element",
    "ElementKind",
    "ElementStore",
    "MIN_ELEMENT_SIZE",
]

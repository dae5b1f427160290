from __future__ import annotations
import logging
import uuid
from typing import List, Optional
from blinker import Signal
from ..config import initialize_managers
from ..core.config import CanvasConfig
from ..core.element import Element, ElementKind
from ..core.store import ElementStore
from ..workbench.canvas import Canvas, Tool


logger = logging.getLogger(__name__)

MIN_FONT_SIZE = 8

# Default geometry and fill for elements created from the toolbar.
_DEFAULT_SIZE = {
    ElementKind.TEXT: (200.0, 50.0),
    ElementKind.FRAME: (400.0, 300.0),
}
_DEFAULT_FILL = {
    ElementKind.TEXT: "#ffffff",
    ElementKind.FRAME: "transparent",
}


def _kind_label(kind: ElementKind) -> str:
    return kind.value.capitalize()


class DocEditor:
    """
    The non-UI controller of the editor window.

    It owns the element store and the canvas, holds the active tool and
    the clipboard, and implements the commands behind the toolbar and the
    keyboard shortcuts. Property panels and the generator talk to the
    store directly.
    """

    def __init__(
        self,
        store: Optional[ElementStore] = None,
        config: Optional[CanvasConfig] = None,
    ):
        """
        Args:
            store: The elements to edit. A new, empty store if None.
            config: Canvas settings. If None, the user configuration is
                    loaded (see genma.config.initialize_managers).
        """
        self.store = store if store is not None else ElementStore()
        if config is None:
            config = initialize_managers().canvas
        self.config = config
        self.canvas = Canvas(self.store, self.config)
        self.clipboard: List[Element] = []

        self.tool_changed = Signal()

    @property
    def tool(self) -> Tool:
        return self.canvas.tool

    @property
    def selection(self):
        return self.canvas.selection

    def set_tool(self, tool: Tool):
        if tool == self.canvas.tool:
            return
        # A pen path belongs to the pen; switching away commits it.
        self.canvas.finish_path()
        self.canvas.tool = tool
        logger.debug(f"Tool is now {tool.value}")
        self.tool_changed.send(self, tool=tool)

    def add_element(
        self, kind: ElementKind, content: Optional[str] = None
    ) -> Element:
        """
        Adds an element with default geometry, staggered so repeated
        additions do not stack exactly, selects it and returns to the
        cursor tool.
        """
        existing = self.store.list_elements()
        count = sum(1 for e in existing if e.kind == kind) + 1
        width, height = _DEFAULT_SIZE.get(kind, (100.0, 100.0))
        if content is None and kind == ElementKind.TEXT:
            content = _("Double click to edit")

        elem = Element(
            kind=kind,
            name=f"{_kind_label(kind)} {count}",
            x=100.0 + len(existing) * 20,
            y=100.0 + len(existing) * 20,
            width=width,
            height=height,
            fill=_DEFAULT_FILL.get(kind, "#333333"),
            content=content,
            font_family="Inter, sans-serif",
            font_size=16,
        )
        self.store.append_element(elem)
        self.selection.select_exclusive(elem.id)
        self.set_tool(Tool.CURSOR)
        return elem

    def delete_selected(self) -> List[Element]:
        ids = self.selection.current()
        if not ids:
            return []
        removed = self.store.remove_elements(ids)
        self.selection.clear()
        logger.info(f"Deleted {len(removed)} elements")
        return removed

    def copy(self) -> int:
        elements = self.selection.elements()
        if elements:
            self.clipboard = elements
        return len(elements)

    def paste(self) -> List[str]:
        """
        Pastes the clipboard as new elements, shifted by the paste offset,
        and selects them.
        """
        if not self.clipboard:
            return []
        offset = self.config.paste_offset
        copies = [
            e.evolve(id=str(uuid.uuid4()), x=e.x + offset, y=e.y + offset)
            for e in self.clipboard
        ]
        ids = self.store.append_elements(copies)
        self.selection.set(ids)
        return ids

    def change_font_size(self, step: float):
        for elem in self.selection.elements():
            if elem.kind != ElementKind.TEXT:
                continue
            size = max(MIN_FONT_SIZE, (elem.font_size or 16) + step)
            self.store.patch_element(elem.id, font_size=size)

    def escape(self):
        self.canvas.cancel()
        self.set_tool(Tool.CURSOR)

    def handle_key(
        self,
        key: str,
        shift: bool = False,
        ctrl: bool = False,
        meta: bool = False,
    ) -> bool:
        """
        Dispatches a key press to its command. Returns True if the key
        was handled.
        """
        command = ctrl or meta
        lower = key.lower()

        if key == "Escape":
            self.escape()
            return True

        if command and shift and key in (">", ".", "<", ","):
            self.change_font_size(2 if key in (">", ".") else -2)
            return True
        if command and lower == "c":
            self.copy()
            return True
        if command and lower == "v":
            self.paste()
            return True
        if key in ("Delete", "Backspace"):
            self.delete_selected()
            return True
        if command:
            return False

        if lower == "p":
            self.set_tool(Tool.PENCIL if shift else Tool.PEN)
            return True

        tools = {"v": Tool.CURSOR, "h": Tool.HAND}
        if lower in tools:
            self.set_tool(tools[lower])
            return True

        kinds = {
            "r": ElementKind.RECTANGLE,
            "o": ElementKind.ELLIPSE,
            "t": ElementKind.TEXT,
            "f": ElementKind.FRAME,
        }
        if lower in kinds:
            self.add_element(kinds[lower])
            return True
        return False

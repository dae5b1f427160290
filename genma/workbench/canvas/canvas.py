from __future__ import annotations
import logging
from typing import List, Optional, Tuple
from blinker import Signal
from ...core.config import CanvasConfig
from ...core.element import Element, ElementKind, Rect
from ...core.store import ElementStore
from .containment import collect_frame_children
from .path import PathMode, PathRecorder
from .region import ElementRegion, RESIZE_HANDLES, check_region_hit
from .resize import resize_rect
from .selection import Selection
from .session import (
    Button,
    DRAWING_TOOLS,
    DragItem,
    Dragging,
    Drawing,
    Idle,
    Panning,
    PointerEvent,
    Resizing,
    Selecting,
    Session,
    Tool,
    WheelEvent,
)
from .snap import SnapResult, snap_move
from .viewport import Viewport

logger = logging.getLogger(__name__)


class Canvas:
    """
    The interaction engine of the design canvas.

    It turns pointer, wheel and keyboard input into viewport changes,
    selection changes and element patches on the store. Rendering is left
    to the host, which reads `viewport`, `selection`, `guides`,
    `selection_rect` and `path_preview` after each event.

    A gesture starts on pointer-down, which picks one session (pan,
    rubber-band selection, drag, resize or path drawing). Pointer-moves go
    to that session only, and pointer-up finishes it and returns to
    `Idle`. The host must forward pointer-up even when it happens outside
    the canvas surface; it carries no position for that reason.
    """

    def __init__(
        self,
        store: ElementStore,
        config: Optional[CanvasConfig] = None,
        viewport: Optional[Viewport] = None,
    ):
        self.store = store
        self.config = config or CanvasConfig()
        self.viewport = viewport or Viewport(
            min_scale=self.config.min_scale,
            max_scale=self.config.max_scale,
        )
        self.selection = Selection(store)

        # Set by the host. Only read when a gesture starts.
        self.tool: Tool = Tool.CURSOR

        self._session: Session = Idle()
        self._guides: Tuple[Optional[float], Optional[float]] = (None, None)
        self.editing_id: Optional[str] = None

        # --- Signals ---
        self.session_changed = Signal()
        self.guides_changed = Signal()
        self.path_committed = Signal()
        self.edit_requested = Signal()
        self.edit_finished = Signal()

        self.store.element_removed.connect(self._on_element_removed)

    @property
    def session(self) -> Session:
        return self._session

    @property
    def is_idle(self) -> bool:
        return isinstance(self._session, Idle)

    @property
    def guides(self) -> Tuple[Optional[float], Optional[float]]:
        """(vertical x, horizontal y) snap guides in canvas units."""
        return self._guides

    @property
    def selection_rect(self) -> Optional[Rect]:
        if isinstance(self._session, Selecting):
            return self._session.rect()
        return None

    @property
    def path_preview(self) -> Optional[str]:
        if isinstance(self._session, Drawing):
            return self._session.recorder.preview()
        return None

    def _set_session(self, session: Session):
        old = self._session
        self._session = session
        if type(old) is not type(session):
            logger.debug(
                f"{type(old).__name__} -> {type(session).__name__}"
            )
        self.session_changed.send(self, session=session)

    def _set_guides(self, guide_x: Optional[float], guide_y: Optional[float]):
        if self._guides == (guide_x, guide_y):
            return
        self._guides = (guide_x, guide_y)
        self.guides_changed.send(self, guide_x=guide_x, guide_y=guide_y)

    def _on_element_removed(self, sender, *, element: Element, **kwargs):
        if element.id == self.editing_id:
            self.stop_editing()

    def pick(
        self, screen_x: float, screen_y: float
    ) -> Tuple[Optional[str], Optional[ElementRegion]]:
        """
        Finds what is under a screen point, as (element id, handle).

        Checks in this order:
        1. Resize handles of selected, unlocked elements.
        2. Bodies of non-frame elements, topmost first.
        3. Bodies of frames, topmost first. Frames are drawn beneath all
           other kinds.
        """
        x, y = self.viewport.to_canvas(screen_x, screen_y)
        handle_size = self.config.handle_size / self.viewport.scale
        elements = self.store.list_elements()

        if self.tool not in DRAWING_TOOLS and self.tool != Tool.HAND:
            selected = set(self.selection.current())
            for elem in reversed(elements):
                if elem.id not in selected or elem.locked:
                    continue
                region = check_region_hit(x, y, elem.rect(), handle_size)
                if region in RESIZE_HANDLES:
                    return elem.id, region

        others = [e for e in elements if e.kind != ElementKind.FRAME]
        frames = [e for e in elements if e.kind == ElementKind.FRAME]
        for elem in list(reversed(others)) + list(reversed(frames)):
            if elem.contains_point(x, y):
                return elem.id, None
        return None, None

    def _is_pan_gesture(self, event: PointerEvent) -> bool:
        return (
            self.tool == Tool.HAND
            or event.button == Button.MIDDLE
            or (event.button == Button.PRIMARY and event.alt)
        )

    def on_pointer_down(self, event: PointerEvent):
        """
        Starts a gesture. The intent is classified in priority order:
        pan, draw, rubber-band selection on empty canvas, then resize or
        drag of the element under the pointer.

        While a pen path is open, a primary press with the pen tool adds
        a point. Any other press, including a middle-button or alt pan,
        commits the path first and is then handled as usual.
        """
        session = self._session
        if (
            isinstance(session, Drawing)
            and session.recorder.mode == PathMode.CLICK
        ):
            if (
                self.tool == Tool.PEN
                and event.button == Button.PRIMARY
                and not self._is_pan_gesture(event)
            ):
                session.recorder.append(
                    *self.viewport.to_canvas(event.x, event.y)
                )
                self.session_changed.send(self, session=session)
                return
            self.finish_path()
        elif not isinstance(session, Idle):
            # The pointer-up of the previous gesture never arrived.
            logger.debug(f"Closing stale {type(session).__name__} session")
            self.on_pointer_up()

        if self._is_pan_gesture(event):
            self._set_session(
                Panning(
                    start_screen=(event.x, event.y),
                    start_offset=self.viewport.offset,
                )
            )
            return

        if event.button == Button.SECONDARY:
            return

        x, y = self.viewport.to_canvas(event.x, event.y)

        if self.tool in DRAWING_TOOLS:
            mode = (
                PathMode.CONTINUOUS
                if self.tool == Tool.PENCIL
                else PathMode.CLICK
            )
            recorder = PathRecorder(mode)
            recorder.append(x, y)
            self._set_session(Drawing(recorder))
            return

        if self.editing_id is not None:
            if event.target_id == self.editing_id:
                return  # The text editor owns this press.
            self.stop_editing()

        if event.target_id is None:
            # Shift keeps the selection visible while the box is drawn.
            # The box result replaces it either way.
            if not event.shift:
                self.selection.clear()
            self._set_session(Selecting(start=(x, y), current=(x, y)))
            return

        elem = self.store.get(event.target_id)
        if elem is None:
            logger.debug(f"Pointer-down on missing element {event.target_id}")
            return

        if event.handle is not None and event.handle != ElementRegion.BODY:
            self._begin_resize(elem, event.handle, x, y)
            return

        self._update_selection(elem.id, toggle=event.shift)
        if not elem.locked:
            self._begin_drag(x, y)

    def _update_selection(self, elem_id: str, toggle: bool):
        if toggle:
            self.selection.select_toggle(elem_id)
        elif elem_id not in self.selection:
            # Pressing an already selected element keeps the selection,
            # so a multi-selection can be dragged as a group.
            self.selection.select_exclusive(elem_id)

    def _begin_resize(
        self, elem: Element, handle: ElementRegion, x: float, y: float
    ):
        if elem.locked or handle not in RESIZE_HANDLES:
            logger.debug(f"Refusing resize of {elem.id} via {handle}")
            return
        self._set_session(
            Resizing(
                id=elem.id, handle=handle, start=(x, y), origin=elem.rect()
            )
        )

    def _begin_drag(self, x: float, y: float):
        elements = self.store.list_elements()
        selected = set(self.selection.current())
        captured: List[Element] = [
            e for e in elements if e.id in selected and not e.locked
        ]
        captured += collect_frame_children(
            elements, (e.id for e in captured)
        )
        if not captured:
            return

        items = [
            DragItem(e.id, e.x, e.y, e.width, e.height) for e in captured
        ]
        self._set_session(Dragging(start=(x, y), items=items))

    def on_pointer_move(self, event: PointerEvent):
        session = self._session
        if isinstance(session, Idle):
            return

        if isinstance(session, Panning):
            sx, sy = session.start_screen
            ox, oy = session.start_offset
            self.viewport.set_offset(ox + event.x - sx, oy + event.y - sy)
            return

        x, y = self.viewport.to_canvas(event.x, event.y)

        if isinstance(session, Selecting):
            session.current = (x, y)
            self.session_changed.send(self, session=session)
        elif isinstance(session, Dragging):
            self._drag_to(session, x, y)
        elif isinstance(session, Resizing):
            self._resize_to(session, x, y)
        elif isinstance(session, Drawing):
            if session.recorder.mode == PathMode.CONTINUOUS:
                session.recorder.append(x, y)
                self.session_changed.send(self, session=session)

    def _drag_to(self, session: Dragging, x: float, y: float):
        """
        Moves every captured element to its start position plus one
        shared, snapped delta. Deltas are always taken from the drag
        start, never accumulated, so the group cannot drift apart.
        """
        dx = x - session.start[0]
        dy = y - session.start[1]

        result = SnapResult(dx, dy)
        primary = session.primary
        if primary.id in self.store:
            dragging = set(session.ids())
            siblings = [
                e for e in self.store.list_elements() if e.id not in dragging
            ]
            result = snap_move(
                primary.original_x,
                primary.original_y,
                primary.width,
                primary.height,
                siblings,
                dx,
                dy,
                threshold=self.config.snap_threshold,
                grid_size=self.config.grid_size,
                snap_to_objects=self.config.snap_to_objects,
                snap_to_grid=self.config.snap_to_grid,
            )

        self._set_guides(result.guide_x, result.guide_y)
        for item in session.items:
            self.store.patch_element(
                item.id,
                x=item.original_x + result.dx,
                y=item.original_y + result.dy,
            )

    def _resize_to(self, session: Resizing, x: float, y: float):
        new_x, new_y, new_w, new_h = resize_rect(
            session.origin,
            session.handle,
            x - session.start[0],
            y - session.start[1],
            min_size=self.config.min_element_size,
        )
        self.store.patch_element(
            session.id, x=new_x, y=new_y, width=new_w, height=new_h
        )

    def on_pointer_up(self, event: Optional[PointerEvent] = None):
        """
        Finishes the active gesture. Drags and resizes are already live
        in the store; a rubber band becomes the selection and a pencil
        stroke becomes a path element. A pen path stays open until
        finish_path().
        """
        session = self._session
        if isinstance(session, Idle):
            return

        if isinstance(session, Drawing):
            if session.recorder.mode == PathMode.CLICK:
                return
            self.finish_path()
            return

        if isinstance(session, Selecting):
            self.selection.select_box(session.rect())
        elif isinstance(session, Dragging):
            logger.debug(f"Moved {len(session.items)} elements")

        self._set_guides(None, None)
        self._set_session(Idle())

    def finish_path(self) -> Optional[Element]:
        """
        Commits the open path, if any, and returns to Idle. Paths with
        fewer than two points are dropped without creating an element.
        """
        session = self._session
        if not isinstance(session, Drawing):
            return None
        self._set_session(Idle())

        geometry = session.recorder.build()
        if geometry is None:
            logger.debug("Discarding path with fewer than two points")
            return None

        count = sum(
            1 for e in self.store if e.kind == ElementKind.PATH
        )
        elem = Element(
            kind=ElementKind.PATH,
            name=_("Path {count}").format(count=count + 1),
            x=geometry.x,
            y=geometry.y,
            width=geometry.width,
            height=geometry.height,
            content=geometry.commands,
            fill="transparent",
            stroke="#ffffff",
        )
        self.store.append_element(elem)
        self.selection.select_exclusive(elem.id)
        logger.info(
            f"Created path {elem.id} with {len(geometry.points)} points"
        )
        self.path_committed.send(self, element=elem)
        return elem

    def on_double_click(self, event: PointerEvent):
        session = self._session
        if (
            isinstance(session, Drawing)
            and session.recorder.mode == PathMode.CLICK
        ):
            self.finish_path()
            return

        if event.target_id is None or self.tool in DRAWING_TOOLS:
            return
        elem = self.store.get(event.target_id)
        if elem and elem.kind == ElementKind.TEXT and not elem.locked:
            self.editing_id = elem.id
            self.edit_requested.send(self, element=elem)

    def stop_editing(self):
        if self.editing_id is None:
            return
        elem_id, self.editing_id = self.editing_id, None
        self.edit_finished.send(self, element_id=elem_id)

    def on_wheel(self, event: WheelEvent):
        """Modifier+wheel zooms, a plain wheel pans."""
        if event.ctrl or event.meta:
            delta = -event.dy * self.config.wheel_zoom_factor
            if self.config.zoom_at_pointer:
                self.viewport.zoom_at(delta, event.x, event.y)
            else:
                self.viewport.zoom(delta)
        else:
            self.viewport.pan(-event.dx, -event.dy)

    def cancel(self):
        """
        Aborts whatever is going on (the escape key). The selection is
        cleared and open paths are dropped. A drag or resize in progress
        is put back to its start geometry when rollback_on_cancel is set;
        otherwise the live positions stay.
        """
        session = self._session
        if self.config.rollback_on_cancel:
            if isinstance(session, Dragging):
                for item in session.items:
                    self.store.patch_element(
                        item.id, x=item.original_x, y=item.original_y
                    )
            elif isinstance(session, Resizing):
                x, y, w, h = session.origin
                self.store.patch_element(
                    session.id, x=x, y=y, width=w, height=h
                )

        self.stop_editing()
        self.selection.clear()
        self._set_guides(None, None)
        if not isinstance(session, Idle):
            self._set_session(Idle())

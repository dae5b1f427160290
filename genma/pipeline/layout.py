"""
Placement of generated designs onto the canvas.

A generated design is a JSON document of the form

    {
      "theme": {"palette": {"background": "#0f0f0f", ...}},
      "screens": [
        {"frameName": "Login", "width": 390, "height": 844,
         "elements": [{"type": "TEXT", "name": "Title", "x": 24, ...}]}
      ]
    }

Each screen becomes a frame, and its elements become ordinary elements
positioned inside that frame. Screens are laid out left to right, to the
right of everything already on the canvas. The whole design is appended
to the store in a single batch.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from ..core.element import Element, ElementKind
from ..core.store import ElementStore


logger = logging.getLogger(__name__)

DEFAULT_BACKGROUND = "#0f0f0f"


class LayoutError(ValueError):
    pass


@dataclass(frozen=True)
class AssetRequest:
    """An element whose content still has to be generated."""

    element_id: str
    prompt: str


@dataclass
class PlacedDesign:
    frame_ids: List[str] = field(default_factory=list)
    element_ids: List[str] = field(default_factory=list)
    asset_requests: List[AssetRequest] = field(default_factory=list)


def _number(data: Dict[str, Any], key: str, default: float = 0.0) -> float:
    value = data.get(key, default)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise LayoutError(f"'{key}' must be a number, got {value!r}")


def _next_column(store: ElementStore, gap: float) -> float:
    elements = store.list_elements()
    if not elements:
        return 100.0
    return max(e.right for e in elements) + gap


def _child_element(
    data: Dict[str, Any], origin_x: float, origin_y: float
) -> Element:
    try:
        kind = ElementKind.parse(data.get("type"))
    except ValueError:
        raise LayoutError(f"Unknown element type {data.get('type')!r}")
    return Element(
        kind=kind,
        name=str(data.get("name", "")),
        x=origin_x + _number(data, "x"),
        y=origin_y + _number(data, "y"),
        width=_number(data, "width", 100.0),
        height=_number(data, "height", 100.0),
        fill=data.get("fill") or "#ffffff",
        stroke=data.get("stroke"),
        content=data.get("content"),
        font_size=data.get("fontSize"),
        font_family=data.get("fontFamily") or "Inter, sans-serif",
        font_weight=data.get("fontWeight"),
        border_radius=data.get("borderRadius") or 0.0,
        opacity=data.get("opacity") or 1.0,
    )


def place_design(
    store: ElementStore,
    design: Dict[str, Any],
    start_y: float = 100.0,
    gap: float = 100.0,
) -> PlacedDesign:
    """
    Converts a generated design into elements and appends them.

    Raises:
        LayoutError: if the document has no usable 'screens' list or an
            element cannot be converted. Nothing is added in that case.
    """
    screens = design.get("screens") if isinstance(design, dict) else None
    if not isinstance(screens, list):
        raise LayoutError("Design has no 'screens' list")

    theme: Optional[Dict[str, Any]] = design.get("theme")
    palette = (theme or {}).get("palette") or {}
    background = palette.get("background") or DEFAULT_BACKGROUND

    column_x = _next_column(store, gap)
    batch: List[Element] = []
    placed = PlacedDesign()

    for screen in screens:
        width = _number(screen, "width", 400.0)
        frame = Element(
            kind=ElementKind.FRAME,
            name=screen.get("frameName") or _("Generated Frame"),
            x=column_x,
            y=start_y,
            width=width,
            height=_number(screen, "height", 300.0),
            fill=background,
        )
        batch.append(frame)
        placed.frame_ids.append(frame.id)

        for child_data in screen.get("elements") or []:
            child = _child_element(child_data, column_x, start_y)
            batch.append(child)
            placed.element_ids.append(child.id)
            prompt = child_data.get("imagePrompt")
            if child.kind == ElementKind.IMAGE and prompt:
                placed.asset_requests.append(AssetRequest(child.id, prompt))

        column_x += width + gap

    store.append_elements(batch)
    logger.info(
        f"Placed {len(placed.frame_ids)} screens with "
        f"{len(placed.element_ids)} elements, "
        f"{len(placed.asset_requests)} assets pending"
    )
    return placed

from .assets import fill_assets
from .layout import AssetRequest, LayoutError, PlacedDesign, place_design

__all__ = [
    "AssetRequest",
    "LayoutError",
    "PlacedDesign",
    "fill_assets",
    "place_design",
]

import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from blinker import Signal


logger = logging.getLogger(__name__)


@dataclass
class CanvasConfig:
    """Tunables of the interactive canvas, in canvas units unless noted."""

    snap_threshold: float = 5.0
    grid_size: float = 10.0
    snap_to_objects: bool = True
    snap_to_grid: bool = True
    min_element_size: float = 10.0
    min_scale: float = 0.1
    max_scale: float = 5.0
    wheel_zoom_factor: float = 0.001
    zoom_at_pointer: bool = False
    handle_size: float = 8.0  # screen pixels
    paste_offset: float = 20.0
    rollback_on_cancel: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "CanvasConfig":
        known = {f.name for f in fields(cls)}
        data = data or {}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown canvas settings: {unknown}")
        return cls(**{k: v for k, v in data.items() if k in known})


class Config:
    def __init__(self, canvas: Optional[CanvasConfig] = None):
        self.canvas: CanvasConfig = canvas or CanvasConfig()
        self.changed = Signal()

    def set_canvas(self, canvas: CanvasConfig):
        if self.canvas == canvas:
            return
        self.canvas = canvas
        self.changed.send(self)

    def to_dict(self) -> Dict[str, Any]:
        return {"canvas": self.canvas.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        return cls(CanvasConfig.from_dict(data.get("canvas")))


class ConfigManager:
    def __init__(self, filepath: Path):
        self.filepath = filepath
        self.config: Config = self.load_config()
        self.config.changed.connect(self._on_config_changed)

    def _on_config_changed(self, sender, **kwargs):
        self.save()

    def save(self):
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(self.filepath, "w") as f:
            yaml.safe_dump(self.config.to_dict(), f)
        logger.debug(f"Saved config to {self.filepath}")

    def load_config(self) -> Config:
        if not self.filepath.exists():
            return Config()

        with open(self.filepath, "r") as f:
            data = yaml.safe_load(f)
        if not data:
            return Config()
        return Config.from_dict(data)

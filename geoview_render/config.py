"""
Configuration schema for the render loop.

This module defines the configuration structure for the map renderer:
LOD generation, camera limits, paint styles and the redraw interval.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple
import yaml

from geoview_map.rendering import BLACK, BLUE, WHITE, FillStyle, StrokeStyle, parse_color


@dataclass(frozen=True)
class LodConfig:
    """
    Level-of-detail generation settings.

    zoom_levels are camera scales; each gets a model simplified with a
    vertex spacing of cutoff_distance / zoom_level pixels.
    """

    zoom_levels: Tuple[float, ...] = (1.0, 3.0, 5.0)
    cutoff_distance: float = 3.0

    def __post_init__(self):
        """Validate LOD configuration."""
        if any(level <= 0 for level in self.zoom_levels):
            raise ValueError(
                f"zoom_levels must be positive, got {self.zoom_levels}"
            )

        if len(set(self.zoom_levels)) != len(self.zoom_levels):
            raise ValueError(
                f"zoom_levels must be unique, got {self.zoom_levels}"
            )

        if self.cutoff_distance <= 0:
            raise ValueError(
                f"cutoff_distance must be > 0, got {self.cutoff_distance}"
            )


@dataclass(frozen=True)
class CameraConfig:
    """Camera scale limits."""

    min_scale: float = 1.0
    max_scale: float = 5.0

    def __post_init__(self):
        """Validate camera configuration."""
        if not 0 < self.min_scale <= self.max_scale:
            raise ValueError(
                f"Scale limits must satisfy 0 < min_scale <= max_scale, "
                f"got [{self.min_scale}, {self.max_scale}]"
            )


@dataclass(frozen=True)
class StyleConfig:
    """Default paint (ARGB colours) for features and background."""

    fill_color: int = BLUE
    stroke_color: int = BLACK
    stroke_width: int = 1
    background_color: int = WHITE

    def __post_init__(self):
        """Validate style configuration (hex strings are accepted)."""
        for name in ("fill_color", "stroke_color", "background_color"):
            object.__setattr__(self, name, parse_color(getattr(self, name)))

        if self.stroke_width < 1:
            raise ValueError(
                f"stroke_width must be >= 1, got {self.stroke_width}"
            )

    def stroke_style(self) -> StrokeStyle:
        return StrokeStyle(color=self.stroke_color, thickness=self.stroke_width)

    def fill_style(self) -> FillStyle:
        return FillStyle(color=self.fill_color)


@dataclass(frozen=True)
class RenderConfig:
    """
    Main configuration for the render loop.

    Loaded from YAML (or built in code) and validated at construction.
    Immutable after construction (frozen dataclass).
    """

    # Pause between loop iterations (caps the redraw rate)
    frame_interval_ms: int = 15

    lod: LodConfig = field(default_factory=LodConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)
    style: StyleConfig = field(default_factory=StyleConfig)

    def __post_init__(self):
        """Validate render configuration."""
        if not 1 <= self.frame_interval_ms <= 1000:
            raise ValueError(
                f"frame_interval_ms must be in [1, 1000], got {self.frame_interval_ms}"
            )

    @property
    def frame_interval(self) -> float:
        """Frame interval in seconds."""
        return self.frame_interval_ms / 1000.0

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "RenderConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            frame_interval_ms: 15

            lod:
              zoom_levels: [1.0, 3.0, 5.0]
              cutoff_distance: 3.0

            camera:
              min_scale: 1.0
              max_scale: 5.0

            style:
              fill_color: "#FF0000FF"
              stroke_color: "#FF000000"
              stroke_width: 1
              background_color: "#FFFFFFFF"

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If a value fails validation
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path) as f:
            data = yaml.safe_load(f) or {}

        lod_data = data.get("lod", {})
        if "zoom_levels" in lod_data:
            lod_data = {**lod_data, "zoom_levels": tuple(float(z) for z in lod_data["zoom_levels"])}
        lod = LodConfig(**lod_data)

        camera = CameraConfig(**data.get("camera", {}))
        style = StyleConfig(**data.get("style", {}))

        return cls(
            frame_interval_ms=data.get("frame_interval_ms", 15),
            lod=lod,
            camera=camera,
            style=style,
        )

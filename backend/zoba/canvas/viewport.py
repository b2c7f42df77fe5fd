"""Pan/zoom transform math for the diagram canvas."""

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, replace

MIN_SCALE = 0.1
MAX_SCALE = 3.0
WHEEL_ZOOM_FACTOR = 0.001
FIT_MARGIN = 0.85
FIT_MAX_SCALE = 1.2
FALLBACK_CONTENT_SIZE = (800.0, 600.0)


def clamp_scale(scale: float) -> float:
    return min(max(scale, MIN_SCALE), MAX_SCALE)


@dataclass(frozen=True)
class Viewport:
    scale: float = 1.0
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def fit(
        cls,
        content_width: float,
        content_height: float,
        container_width: float,
        container_height: float,
    ) -> "Viewport":
        """Scale content into the container with a margin, never enlarging past FIT_MAX_SCALE, and center it."""
        width = content_width if content_width > 0 else FALLBACK_CONTENT_SIZE[0]
        height = content_height if content_height > 0 else FALLBACK_CONTENT_SIZE[1]
        scale = min(
            (container_width * FIT_MARGIN) / width,
            (container_height * FIT_MARGIN) / height,
            FIT_MAX_SCALE,
        )
        return cls(
            scale=scale,
            x=(container_width - width * scale) / 2,
            y=(container_height - height * scale) / 2,
        )

    def zoom(self, wheel_delta_y: float) -> "Viewport":
        return replace(self, scale=clamp_scale(self.scale - wheel_delta_y * WHEEL_ZOOM_FACTOR))

    def pan(self, dx: float, dy: float) -> "Viewport":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def reset(self) -> "Viewport":
        return Viewport()

    def css_transform(self) -> str:
        return f"translate({self.x:g}px, {self.y:g}px) scale({self.scale:g})"


_LENGTH = re.compile(r"^\s*([0-9]*\.?[0-9]+)")


def _parse_length(value: str | None) -> float | None:
    if not value:
        return None
    match = _LENGTH.match(value)
    return float(match.group(1)) if match else None


def svg_dimensions(svg: str) -> tuple[float, float] | None:
    """Content size of a rendered SVG from its viewBox, falling back to width/height attributes."""
    try:
        root = ET.fromstring(svg)
    except ET.ParseError:
        return None
    view_box = root.get("viewBox")
    if view_box:
        parts = view_box.replace(",", " ").split()
        if len(parts) == 4:
            try:
                width, height = float(parts[2]), float(parts[3])
            except ValueError:
                width = height = 0.0
            if width > 0 and height > 0:
                return width, height
    width = _parse_length(root.get("width"))
    height = _parse_length(root.get("height"))
    # Mermaid emits width="100%"; percentages are not content sizes.
    if width and height and "%" not in (root.get("width") or "") + (root.get("height") or ""):
        return width, height
    return None

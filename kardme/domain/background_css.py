"""CSS rendering of canonical card backgrounds (base layer plus pattern overlays)."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from kardme.core.utils import is_number
from kardme.domain.background import DEFAULT_GRADIENT_ANGLE, normalize_background

DEFAULT_BLEND_MODE = "soft-light"
FALLBACK_BAR_COLOR = "#000000"


@dataclass(frozen=True)
class Layer:
    image: str
    size: str | None = None
    repeat: str | None = None


@dataclass
class BackgroundStyle:
    style: dict[str, str] = field(default_factory=dict)
    opacity: float = 1
    css_string: str | None = None


def _clamp(value: float, low: float = 0, high: float = 1) -> float:
    return max(low, min(high, value))


def _num(value: float) -> str:
    return f"{round(value, 3):g}"


def _or_default(value: Any, default: float) -> float:
    return value if is_number(value) else default


def _text(value: Any, default: str) -> str:
    return value if isinstance(value, str) and value else default


def _stops_of(stops: Any) -> list[Mapping]:
    if not isinstance(stops, list):
        return []
    return [stop for stop in stops if isinstance(stop, Mapping)]


def normalize_stops(stops: Any) -> list[dict]:
    """Fill in stop positions, spreading them evenly when none are given."""
    stops = _stops_of(stops)
    if not stops:
        return []
    if any(is_number(stop.get("pos")) for stop in stops):
        return [{**stop, "pos": stop.get("pos") if is_number(stop.get("pos")) else 0} for stop in stops]
    step = 100 / max(1, len(stops) - 1)
    return [{**stop, "pos": index * step} for index, stop in enumerate(stops)]


def stops_to_css(stops: Any) -> str:
    return ", ".join(f"{stop.get('color')} {float(stop['pos']):.1f}%" for stop in normalize_stops(stops))


def _gradient_css(base: Mapping) -> str:
    angle = _or_default(base.get("angle"), DEFAULT_GRADIENT_ANGLE)
    return f"linear-gradient({_num(angle)}deg, {stops_to_css(base.get('stops'))})"


def overlay_to_layer(overlay: Mapping) -> Layer | None:
    """Translate a pattern overlay into a CSS image layer (None when unsupported)."""
    opacity = _clamp(_or_default(overlay.get("opacity"), 0))
    scale = max(0.2, _or_default(overlay.get("scale"), 1))
    density = _clamp(_or_default(overlay.get("density"), 0.5))
    softness = _clamp(_or_default(overlay.get("softness"), 0.5))
    angle = _or_default(overlay.get("angle"), 0)

    ink_a = _text(overlay.get("colorA"), f"rgba(255,255,255,{_num(0.9 * opacity)})")
    kind = overlay.get("kind")

    if kind == "dots":
        gap = (12 + (1 - density) * 20) * scale
        dot = (1 + (1 - density) * 2) * scale
        return Layer(
            image=f"radial-gradient(circle, {ink_a} {_num(dot)}px, rgba(255,255,255,0) {_num(dot + 0.8)}px)",
            size=f"{_num(gap)}px {_num(gap)}px",
            repeat="repeat",
        )

    if kind == "grid":
        cell = (18 + (1 - density) * 24) * scale
        line = _num(1 * scale)
        return Layer(
            image=(
                f"linear-gradient({ink_a} {line}px, rgba(255,255,255,0) {line}px), "
                f"linear-gradient(90deg, {ink_a} {line}px, rgba(255,255,255,0) {line}px)"
            ),
            size=f"{_num(cell)}px {_num(cell)}px",
            repeat="repeat",
        )

    if kind == "diagonal":
        thickness = _num((1 + softness * 1.2) * scale)
        spacing = _num((12 + (1 - density) * 26) * scale)
        return Layer(
            image=(
                f"repeating-linear-gradient({_num(angle or 45)}deg, "
                f"{ink_a} 0px, {ink_a} {thickness}px, "
                f"rgba(255,255,255,0) {thickness}px, rgba(255,255,255,0) {spacing}px)"
            ),
            repeat="repeat",
        )

    if kind == "silk":
        silk_angle = angle or 20
        thickness = _num((0.8 + softness * 1.6) * scale)
        spacing = (10 + (1 - density) * 30) * scale
        light = _num(0.20 * opacity)
        dark = _num(0.12 * opacity)
        return Layer(
            image=(
                f"repeating-linear-gradient({_num(silk_angle)}deg, "
                f"rgba(255,255,255,{light}) 0px, rgba(255,255,255,{light}) {thickness}px, "
                f"rgba(255,255,255,0) {thickness}px, rgba(255,255,255,0) {_num(spacing)}px), "
                f"repeating-linear-gradient({_num(silk_angle + 12)}deg, "
                f"rgba(0,0,0,{dark}) 0px, rgba(0,0,0,{dark}) {thickness}px, "
                f"rgba(0,0,0,0) {thickness}px, rgba(0,0,0,0) {_num(spacing * 1.2)}px)"
            ),
            repeat="repeat",
        )

    if kind == "noise":
        tile = _num(140 * scale)
        return Layer(
            image=(
                f"radial-gradient(circle at 20% 30%, rgba(255,255,255,{_num(0.10 * opacity)}) 0 1px, rgba(255,255,255,0) 2px), "
                f"radial-gradient(circle at 80% 40%, rgba(0,0,0,{_num(0.10 * opacity)}) 0 1px, rgba(0,0,0,0) 2px), "
                f"radial-gradient(circle at 40% 80%, rgba(255,255,255,{_num(0.08 * opacity)}) 0 1px, rgba(255,255,255,0) 2px)"
            ),
            size=f"{tile}px {tile}px",
            repeat="repeat",
        )

    if kind == "marble":
        return Layer(
            image=(
                f"radial-gradient(circle at 15% 25%, rgba(255,255,255,{_num(0.22 * opacity)}) 0%, rgba(255,255,255,0) 55%), "
                f"radial-gradient(circle at 70% 30%, rgba(0,0,0,{_num(0.18 * opacity)}) 0%, rgba(0,0,0,0) 60%), "
                f"radial-gradient(circle at 50% 85%, rgba(255,255,255,{_num(0.16 * opacity)}) 0%, rgba(255,255,255,0) 62%), "
                f"linear-gradient({_num(angle or 35)}deg, rgba(255,255,255,{_num(0.06 * opacity)}), rgba(0,0,0,{_num(0.06 * opacity)}))"
            ),
            repeat="no-repeat",
        )

    # "lines" has no renderer yet
    return None


def _image_base(base: Mapping) -> tuple[str, str, str]:
    url = _text(base.get("url"), "").replace('"', "%22")
    fit = _text(base.get("fit"), "cover")
    position = _text(base.get("position"), "center")
    return f'url("{url}")', fit, position


def _base_of(bg: Mapping) -> Mapping:
    base = bg.get("base")
    # some rows were saved with the base nested twice
    if isinstance(base, Mapping) and isinstance(base.get("base"), Mapping) and not base.get("kind"):
        base = base["base"]
    return base if isinstance(base, Mapping) else {}


def background_style(value: Any) -> BackgroundStyle:
    """Build the inline style of the card background layer."""
    bg = normalize_background(value)
    base = _base_of(bg)
    opacity = _clamp(_or_default(bg.get("opacity"), 1))

    layers: list[str] = []
    blend_modes: list[str] = []
    sizes: list[str] = []
    repeats: list[str] = []
    positions: list[str] = []

    base_size, base_position = "auto", "0% 0%"
    has_image = base.get("kind") == "image" and bool(_text(base.get("url"), ""))
    if base.get("kind") == "gradient":
        layers.append(_gradient_css(base))
    elif has_image:
        image, base_size, base_position = _image_base(base)
        layers.append(image)

    overlays = bg.get("overlays")
    for overlay in overlays if isinstance(overlays, list) else []:
        if not isinstance(overlay, Mapping):
            continue
        layer = overlay_to_layer(overlay)
        if layer is None:
            continue
        layers.append(layer.image)
        blend_modes.append(_text(overlay.get("blendMode"), DEFAULT_BLEND_MODE))
        sizes.append(layer.size or "auto")
        repeats.append(layer.repeat or "repeat")
        positions.append("0% 0%")

    style: dict[str, str] = {}
    if base.get("kind") == "solid" and _text(base.get("color"), ""):
        style["background-color"] = base["color"]
    if layers:
        style["background-image"] = ", ".join(layers)
    if blend_modes:
        style["background-blend-mode"] = ", ".join(["normal", *blend_modes])
    if sizes or has_image:
        style["background-size"] = ", ".join([base_size, *sizes])
    if repeats or has_image:
        style["background-repeat"] = ", ".join(["no-repeat", *repeats])
    if positions or has_image:
        style["background-position"] = ", ".join([base_position, *positions])

    return BackgroundStyle(style=style, opacity=opacity, css_string=background_css_string(bg))


def background_css_string(value: Any) -> str | None:
    """
    Single CSS ``background`` value for metadata and frames.

    Only the base (solid or gradient) is rendered; overlays are ignored.
    """
    if not value or not isinstance(value, Mapping):
        return None

    if value.get("version") == 1:
        base = _base_of(value)
        if base.get("kind") == "solid":
            return base.get("color")
        if base.get("kind") == "gradient":
            stops = _stops_of(base.get("stops"))
            if not stops:
                return None
            angle = _or_default(base.get("angle"), DEFAULT_GRADIENT_ANGLE)
            parts = ", ".join(f"{stop.get('color')} {_num(_or_default(stop.get('pos'), 0))}%" for stop in stops)
            return f"linear-gradient({_num(angle)}deg, {parts})"
        return None

    mode = value.get("mode")
    if mode == "solid":
        return value.get("color")
    if mode == "gradient":
        angle = _or_default(value.get("angle"), DEFAULT_GRADIENT_ANGLE)
        return f"linear-gradient({_num(angle)}deg, {value.get('from')}, {value.get('to')})"
    return None


def browser_bar_color(value: Any) -> str:
    """Color for the mobile browser bar (``<meta name="theme-color">``)."""
    bg = normalize_background(value)
    if _text(bg.get("browserBarColor"), ""):
        return bg["browserBarColor"]
    base = _base_of(bg)
    if base.get("kind") == "solid" and _text(base.get("color"), ""):
        return base["color"]
    if base.get("kind") == "gradient":
        stops = _stops_of(base.get("stops"))
        if stops and _text(stops[0].get("color"), ""):
            return stops[0]["color"]
    if base.get("kind") == "image" and _text(base.get("fadeToColor"), ""):
        return base["fadeToColor"]
    return FALLBACK_BAR_COLOR


def inline_style(style: Mapping[str, str]) -> str:
    return "; ".join(f"{prop}: {value}" for prop, value in style.items())

"""Ready-made canonical backgrounds offered by the editor."""
from __future__ import annotations

import copy
from dataclasses import dataclass


@dataclass(frozen=True)
class BgPreset:
    id: str
    name: str
    bg: dict

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "bg": copy.deepcopy(self.bg)}


def _gradient(angle: int, *stops: tuple[str, int]) -> dict:
    return {"kind": "gradient", "angle": angle, "stops": [{"color": c, "pos": p} for c, p in stops]}


def _v1(base: dict, *overlays: dict) -> dict:
    return {"version": 1, "opacity": 1, "base": base, "overlays": list(overlays)}


def _overlay(kind: str, opacity: float, scale: float, density: float, softness: float,
             blend_mode: str, angle: float | None = None) -> dict:
    overlay = {
        "kind": kind,
        "opacity": opacity,
        "scale": scale,
        "density": density,
        "softness": softness,
        "blendMode": blend_mode,
    }
    if angle is not None:
        overlay["angle"] = angle
    return overlay


CARD_BG_PRESETS: tuple[BgPreset, ...] = (
    BgPreset(
        "gold-silk",
        "Gold Silk",
        _v1(
            _gradient(135, ("#0B0A07", 0), ("#3D2E12", 22), ("#D8B45A", 52), ("#5A4317", 78), ("#0E0C08", 100)),
            _overlay("silk", 0.42, 1, 0.55, 0.75, "soft-light", angle=18),
            _overlay("noise", 0.18, 1.1, 0.6, 0.6, "overlay"),
        ),
    ),
    BgPreset(
        "silver-matte",
        "Silver Matte",
        _v1(
            _gradient(160, ("#0B0E14", 0), ("#2A313B", 28), ("#C7CBD2", 55), ("#3C4652", 80), ("#0C1017", 100)),
            _overlay("noise", 0.22, 1.2, 0.7, 0.6, "soft-light"),
        ),
    ),
    BgPreset(
        "bronze-diagonal",
        "Bronze Diagonal",
        _v1(
            _gradient(140, ("#0B0705", 0), ("#3A1F12", 26), ("#B06A3C", 55), ("#4A2A18", 82), ("#0C0806", 100)),
            _overlay("diagonal", 0.28, 1, 0.55, 0.65, "soft-light", angle=45),
            _overlay("noise", 0.14, 1.15, 0.65, 0.6, "overlay"),
        ),
    ),
    BgPreset(
        "graphite-noise",
        "Graphite Noise",
        _v1(
            {"kind": "solid", "color": "#0B0F14"},
            _overlay("noise", 0.34, 1.35, 0.72, 0.55, "soft-light"),
        ),
    ),
    BgPreset(
        "black-marble",
        "Black Marble",
        _v1(
            _gradient(165, ("#05060A", 0), ("#0C111A", 40), ("#1B2430", 70), ("#070A10", 100)),
            _overlay("marble", 0.32, 1.0, 0.55, 0.7, "soft-light", angle=30),
            _overlay("noise", 0.18, 1.1, 0.65, 0.55, "overlay"),
        ),
    ),
    BgPreset(
        "midnight-dots",
        "Midnight Dots",
        _v1(
            _gradient(180, ("#060A12", 0), ("#0C1422", 55), ("#070B14", 100)),
            _overlay("dots", 0.18, 1.0, 0.65, 0.6, "soft-light"),
        ),
    ),
    BgPreset(
        "clean-grid",
        "Clean Grid",
        _v1(
            _gradient(135, ("#0B0F16", 0), ("#121B28", 45), ("#0B0F16", 100)),
            _overlay("grid", 0.14, 1.0, 0.62, 0.6, "soft-light"),
        ),
    ),
    BgPreset(
        "soft-silver-silk",
        "Soft Silver Silk",
        _v1(
            _gradient(155, ("#0A0F16", 0), ("#2B3441", 30), ("#D7DBE0", 55), ("#374353", 80), ("#0A0F16", 100)),
            _overlay("silk", 0.26, 1.0, 0.55, 0.75, "soft-light", angle=22),
        ),
    ),
)


def get_bg_preset_by_id(preset_id: str | None) -> BgPreset | None:
    """Look up a preset; the returned background is a private copy."""
    for preset in CARD_BG_PRESETS:
        if preset.id == preset_id:
            return BgPreset(preset.id, preset.name, copy.deepcopy(preset.bg))
    return None

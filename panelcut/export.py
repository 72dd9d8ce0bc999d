"""Export logic – write the panel template as SVG, PNG or a reloadable JSON file."""

from __future__ import annotations

import json
import logging
import math
import os
from typing import Any, Dict, Iterable, List, Sequence, Tuple

import cv2
import numpy as np
from PIL import Image

from panelcut.config import EditorConfig
from panelcut.polygon import Polygon

logger = logging.getLogger(__name__)

TEMPLATE_VERSION = 1

Coords = List[List[List[float]]]


def fmt(n: float) -> str:
    """Format a coordinate with at most 3 decimals, without trailing zeros."""
    return f"{n:.3f}".rstrip("0").rstrip(".")


# ── coordinate lists ─────────────────────────────────────────────────────

def polygons_to_coords(polygons: Iterable[Polygon]) -> Coords:
    """Flat list of panels, each a list of ``[x, y]`` pairs in vertex order."""
    return [polygon.coords() for polygon in polygons]


def polygons_from_coords(coords: Sequence[Sequence[Sequence[float]]]) -> List[Polygon]:
    """Rebuild panels from :func:`polygons_to_coords` output.

    Raises ValueError for a malformed point or a panel with fewer than 3 points.
    """
    if not isinstance(coords, (list, tuple)):
        raise ValueError(f"Expected a list of panels, got {coords!r}")
    polygons: List[Polygon] = []
    for i, points in enumerate(coords):
        if not isinstance(points, (list, tuple)):
            raise ValueError(f"Panel {i}: expected a list of points, got {points!r}")
        parsed: List[Tuple[float, float]] = []
        for p in points:
            if not isinstance(p, (list, tuple)) or len(p) != 2:
                raise ValueError(f"Panel {i}: expected [x, y] pairs, got {p!r}")
            if not all(_is_number(v) for v in p):
                raise ValueError(f"Panel {i}: coordinates must be finite numbers, got {p!r}")
            parsed.append((float(p[0]), float(p[1])))
        polygons.append(Polygon(parsed))
    return polygons


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


# ── SVG ──────────────────────────────────────────────────────────────────

def make_svg(
    polygons: Iterable[Polygon],
    width_px: int,
    height_px: int,
    line_width_px: float,
) -> str:
    """SVG document with one unfilled ``<polygon>`` per panel."""
    out = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width_px}" height="{height_px}">',
        f"<style>polygon {{ fill: none; stroke: black; stroke-width: {fmt(line_width_px)}; }}</style>",
    ]
    for polygon in polygons:
        points_attrib = " ".join(f"{fmt(x)},{fmt(y)}" for x, y in polygon.points)
        out.append(f'<polygon points="{points_attrib}" />')
    out.append("</svg>")
    return "\n".join(out) + "\n"


def save_svg(svg: str, path: str) -> str:
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(svg)
    logger.info("Wrote SVG template %s", path)
    return path


# ── PNG ──────────────────────────────────────────────────────────────────

def render_png(
    polygons: Iterable[Polygon],
    width_px: int,
    height_px: int,
    line_width_px: float,
) -> np.ndarray:
    """Rasterise the panel outlines, black on white, as an RGB array."""
    if width_px <= 0 or height_px <= 0:
        raise ValueError("Template size must be at least one pixel.")
    canvas = np.full((height_px, width_px, 3), 255, dtype=np.uint8)
    thickness = max(1, int(round(line_width_px)))
    outlines = [
        np.round(np.array(polygon.points, dtype=np.float64)).astype(np.int32).reshape(-1, 1, 2)
        for polygon in polygons
    ]
    if outlines:
        cv2.polylines(canvas, outlines, True, (0, 0, 0), thickness, cv2.LINE_AA)
    return canvas


def save_png(image: np.ndarray, path: str, dpi: float | None = None) -> str:
    """Save an RGB array with Pillow. Returns the saved file path."""
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)

    pil_img = Image.fromarray(image)

    save_kwargs: Dict[str, Any] = {}
    if dpi:
        save_kwargs["dpi"] = (dpi, dpi)

    pil_img.save(path, format="PNG", **save_kwargs)
    logger.info("Wrote PNG template %s (%dx%d)", path, image.shape[1], image.shape[0])
    return path


# ── template files ───────────────────────────────────────────────────────

def template_to_dict(config: EditorConfig, polygons: Iterable[Polygon]) -> Dict[str, Any]:
    return {
        "version": TEMPLATE_VERSION,
        "config": config.to_dict(),
        "polygons": polygons_to_coords(polygons),
    }


def template_from_dict(data: Dict[str, Any]) -> Tuple[EditorConfig, List[Polygon]]:
    version = data.get("version", 0)
    if version != TEMPLATE_VERSION:
        raise ValueError(
            f"Unsupported template version: {version}. Expected version {TEMPLATE_VERSION}."
        )
    config = EditorConfig.from_dict(data.get("config", {})).validate()
    polygons = polygons_from_coords(data.get("polygons", []))
    if not polygons:
        raise ValueError("The template contains no panels.")
    return config, polygons


def save_template(path: str, config: EditorConfig, polygons: Iterable[Polygon]) -> str:
    """Write the configuration and panels as JSON. Returns the saved file path."""
    data = template_to_dict(config, polygons)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    logger.info("Saved template %s with %d panels", path, len(data["polygons"]))
    return path


def load_template(path: str) -> Tuple[EditorConfig, List[Polygon]]:
    """Read a file written by :func:`save_template`.

    Raises OSError if the file cannot be read and ValueError (including
    ConfigError and JSON decode errors) if its content is unusable.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("Template file must contain a JSON object.")
    config, polygons = template_from_dict(data)
    logger.info("Loaded template %s with %d panels", path, len(polygons))
    return config, polygons

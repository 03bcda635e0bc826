# src/citylines/render/diagram.py
# Debug diagram of a level as a PNG, using Pillow. Flat colours and line
# stubs only: one box per cell, a bar from the centre to each open side.

from __future__ import annotations

import os
from typing import Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from ..level import GeneratedLevel
from ..tiles import DELTAS, RoadTypeTier, TileConfig, TileKind

RGBA = Tuple[int, int, int, int]

BACKGROUND: RGBA = (40, 44, 52, 255)
ROAD: RGBA = (230, 230, 230, 255)
WRONG: RGBA = (230, 120, 90, 255)


def _fill_color(tile: TileConfig) -> RGBA:
    if tile.kind is TileKind.TURNPIKE:
        return (255, 220, 0, 255)
    if tile.kind is TileKind.LANDMARK:
        return (120, 170, 255, 255)
    if tile.kind is TileKind.DECORATION:
        return (60, 150, 70, 255)
    if tile.tier is RoadTypeTier.HOUSE:
        return (200, 160, 120, 255)
    return (90, 90, 90, 255)


def draw_tile(draw: ImageDraw.ImageDraw, tile: TileConfig, x0: int, y0: int, size: int,
              font: Optional[ImageFont.ImageFont] = None) -> None:
    pad = max(1, size // 16)
    draw.rectangle((x0 + pad, y0 + pad, x0 + size - pad, y0 + size - pad), fill=_fill_color(tile))

    cx, cy = x0 + size // 2, y0 + size // 2
    half = max(1, size // 8)
    color = ROAD if tile.is_solved or not tile.rotatable else WRONG
    for d in tile.openings:
        dr, dc = DELTAS[d]
        ex, ey = cx + dc * (size // 2), cy + dr * (size // 2)
        box = (min(cx, ex) - half, min(cy, ey) - half, max(cx, ex) + half, max(cy, ey) + half)
        draw.rectangle(box, fill=color)

    if font is not None and tile.kind in (TileKind.TURNPIKE, TileKind.LANDMARK):
        label = "T" if tile.kind is TileKind.TURNPIKE else "L"
        draw.text((x0 + pad * 2, y0 + pad * 2), label, fill=(0, 0, 0, 255), font=font)


def render_level(level: GeneratedLevel, tile_size: int = 48, margin: int = 4,
                 solved: bool = False) -> Image.Image:
    rows, cols = level.grid_size
    w, h = cols * tile_size + 2 * margin, rows * tile_size + 2 * margin
    canvas = Image.new("RGBA", (w, h), BACKGROUND)
    draw = ImageDraw.Draw(canvas)
    font = ImageFont.load_default()
    for tile in level.to_grid(solved=solved).tiles():
        x0 = margin + tile.col * tile_size
        y0 = margin + tile.row * tile_size
        draw_tile(draw, tile, x0, y0, tile_size, font)
    return canvas


def save_level_png(level: GeneratedLevel, out_png: str, tile_size: int = 48,
                   solved: bool = False) -> str:
    parent = os.path.dirname(out_png)
    if parent:
        os.makedirs(parent, exist_ok=True)
    render_level(level, tile_size=tile_size, solved=solved).save(out_png)
    return out_png
